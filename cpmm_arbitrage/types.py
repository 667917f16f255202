"""
Core value types for the two-pool arbitrage solver.

Every type here is an immutable snapshot built fresh per call; nothing
is shared or mutated between invocations.
"""

from dataclasses import dataclass
from math import gcd
from typing import Any, Dict, Tuple

from .constants import (
    BPS_DENOMINATOR,
    DEFAULT_FEE_DENOMINATOR,
    DEFAULT_FEE_NUMERATOR,
)
from .exceptions import InvalidReservesError, ValidationError


def _require_uint(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidReservesError(
            f"{name} must be an integer amount of base units, got {type(value).__name__}"
        )
    if value < 0:
        raise InvalidReservesError(f"{name} must be non-negative: {value}")


@dataclass(frozen=True)
class FeeRatio:
    """
    Fee-adjusted input multiplier g = numerator / denominator = 1 - fee.

    Attributes:
        numerator: gNum (997 for a 0.30% pool)
        denominator: gDen (1000 for a 0.30% pool)
    """

    numerator: int = DEFAULT_FEE_NUMERATOR
    denominator: int = DEFAULT_FEE_DENOMINATOR

    def __post_init__(self):
        for name in ("numerator", "denominator"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(f"Fee {name} must be an integer: {value!r}")
            if value <= 0:
                raise ValidationError(f"Fee {name} must be positive: {value}")
        if self.numerator > self.denominator:
            raise ValidationError(
                f"Fee ratio must not exceed 1: {self.numerator}/{self.denominator}",
                {"numerator": self.numerator, "denominator": self.denominator},
            )

    @classmethod
    def from_bps(cls, fee_bps: int) -> "FeeRatio":
        """Build g = 1 - fee_bps/10000, reduced to lowest terms (30 -> 997/1000)."""
        if not 0 <= fee_bps < BPS_DENOMINATOR:
            raise ValidationError(f"fee_bps must be in [0, 10000): {fee_bps}")
        numerator = BPS_DENOMINATOR - fee_bps
        divisor = gcd(numerator, BPS_DENOMINATOR)
        return cls(numerator // divisor, BPS_DENOMINATOR // divisor)


@dataclass(frozen=True)
class PoolReserves:
    """
    Reserve snapshot of one constant-product pool.

    Both pools of an arbitrage must use the same orientation.

    Attributes:
        reserve_in: Reserve of the asset the round trip starts and ends in
        reserve_out: Reserve of the asset bought on the first leg
        name: Optional label used in logs (e.g. "uniswap")
    """

    reserve_in: int
    reserve_out: int
    name: str = ""

    def __post_init__(self):
        _require_uint("reserve_in", self.reserve_in)
        _require_uint("reserve_out", self.reserve_out)

    def as_tuple(self) -> Tuple[int, int]:
        return self.reserve_in, self.reserve_out


@dataclass(frozen=True)
class SwapQuadruple:
    """
    The four reserve legs of a round trip after direction selection.

    Attributes:
        x_a: Output-asset reserve of the buy pool A
        y_a: Input-asset reserve of the buy pool A
        x_b: Input-side reserve of the sell pool B (same asset as x_a)
        y_b: Output reserve of the sell pool B (same asset as y_a)
    """

    x_a: int
    y_a: int
    x_b: int
    y_b: int

    def legs(self) -> Tuple[int, int, int, int]:
        return self.x_a, self.y_a, self.x_b, self.y_b

    def scaled_down(self, scale: int) -> "SwapQuadruple":
        return SwapQuadruple(*(leg // scale for leg in self.legs()))


@dataclass(frozen=True)
class SolverResult:
    """
    Outcome of the optimal-amount solver.

    ``amount_in`` is only meaningful when ``ok`` is True; it is 0 otherwise.
    ``scale`` is the normalization divisor that was applied.
    """

    ok: bool
    amount_in: int = 0
    scale: int = 1

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def no_solution(cls, scale: int = 1) -> "SolverResult":
        return cls(ok=False, amount_in=0, scale=scale)


@dataclass(frozen=True)
class ArbitrageOpportunity:
    """
    Direction, size and expected profit of one two-pool round trip.

    Attributes:
        buy_on_a: True when the first pool passed in is the cheap (buy) pool
        amount_in: Optimal input amount in base units of the input asset
        expected_profit: Simulated profit, saturated at zero
        amount_out_a: Simulated output of the buy leg
        amount_out_b: Simulated output of the sell leg
    """

    buy_on_a: bool
    amount_in: int
    expected_profit: int
    amount_out_a: int = 0
    amount_out_b: int = 0

    @property
    def is_profitable(self) -> bool:
        return self.expected_profit > 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "buy_on_a": self.buy_on_a,
            "amount_in": str(self.amount_in),
            "expected_profit": str(self.expected_profit),
            "amount_out_a": str(self.amount_out_a),
            "amount_out_b": str(self.amount_out_b),
        }
