"""
Two-Pool CPMM Arbitrage Solver.

Closed-form optimal input and expected profit for a round trip through two
constant-product pools trading the same pair, computed in integer
arithmetic with an optional uint256 emulation mode.
"""

PROJECT_NAME = "cpmm-arbitrage"

from cpmm_arbitrage.version import __version__

VERSION = __version__

from cpmm_arbitrage.exceptions import (
    ArithmeticOverflowError,
    ConfigurationError,
    CpmmArbitrageError,
    InvalidReservesError,
    ValidationError,
)
from cpmm_arbitrage.intmath import isqrt, normalization_scale
from cpmm_arbitrage.solver import (
    ArbitrageSolver,
    build_quadruple,
    compute_optimal_amount,
    evaluate_arbitrage,
    select_direction,
)
from cpmm_arbitrage.swap import get_amount_out, simulate_round_trip
from cpmm_arbitrage.types import (
    ArbitrageOpportunity,
    FeeRatio,
    PoolReserves,
    SolverResult,
    SwapQuadruple,
)

__all__ = [
    "PROJECT_NAME",
    "VERSION",
    "ArbitrageSolver",
    "ArbitrageOpportunity",
    "FeeRatio",
    "PoolReserves",
    "SolverResult",
    "SwapQuadruple",
    "select_direction",
    "build_quadruple",
    "compute_optimal_amount",
    "evaluate_arbitrage",
    "get_amount_out",
    "simulate_round_trip",
    "isqrt",
    "normalization_scale",
    "CpmmArbitrageError",
    "ConfigurationError",
    "ValidationError",
    "InvalidReservesError",
    "ArithmeticOverflowError",
]
