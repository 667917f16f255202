"""
Closed-form optimal input for a two-pool constant-product round trip.

Buying on pool A and selling back on pool B, the composite output of an
input dy is

    out(dy) = g^2 * xA * yB * dy / (yA * xB + (g * xB + g^2 * xA) * dy)

and setting d(out - dy)/d(dy) = 0 gives the positive root

    dy* = (g * sqrt(xA * yA * xB * yB) - yA * xB) / (g * xB + g^2 * xA)

With g = gNum / gDen, numerator and denominator are both multiplied by
gDen^2 so every term stays a non-negative integer product until the single
subtraction. That term-by-term sequence, not a textbook a/b/c quadratic,
defines the rounding behaviour reproduced here.
"""

import logging
from typing import Optional

from .constants import PRICE_SCALE, SCALE_TARGET, UINT256_MAX
from .exceptions import InvalidReservesError
from .intmath import checked_add, checked_mul, isqrt, normalization_scale
from .swap import DEFAULT_FEE, simulate_round_trip
from .types import (
    ArbitrageOpportunity,
    FeeRatio,
    PoolReserves,
    SolverResult,
    SwapQuadruple,
)

logger = logging.getLogger(__name__)


def implied_price(pool: PoolReserves, price_scale: int = PRICE_SCALE) -> int:
    """Input-asset units per output-asset unit, as a fixed-point integer."""
    if pool.reserve_out == 0:
        raise InvalidReservesError(
            f"Pool {pool.name or '?'} has an empty output reserve",
            reserves=pool.as_tuple(),
        )
    return pool.reserve_in * price_scale // pool.reserve_out


def select_direction(
    pool_1: PoolReserves, pool_2: PoolReserves, price_scale: int = PRICE_SCALE
) -> bool:
    """
    Decide which pool to buy on.

    Returns True when pool_1 has the strictly lower implied price, i.e. the
    output asset is cheaper there. Equal prices select pool_2; the solver
    reports no opportunity for them either way.
    """
    return implied_price(pool_1, price_scale) < implied_price(pool_2, price_scale)


def build_quadruple(
    pool_1: PoolReserves, pool_2: PoolReserves, buy_on_a: bool
) -> SwapQuadruple:
    """Map the two pools onto (xA, yA, xB, yB) for the chosen direction."""
    buy_pool, sell_pool = (pool_1, pool_2) if buy_on_a else (pool_2, pool_1)
    return SwapQuadruple(
        x_a=buy_pool.reserve_out,
        y_a=buy_pool.reserve_in,
        x_b=sell_pool.reserve_out,
        y_b=sell_pool.reserve_in,
    )


def compute_optimal_amount(
    quad: SwapQuadruple,
    fee: FeeRatio = DEFAULT_FEE,
    fixed_width: bool = True,
    scale_target: int = SCALE_TARGET,
) -> SolverResult:
    """
    Profit-maximizing input for buying on A and selling on B.

    In fixed-width mode the four legs are first divided by a common scale
    so the quadruple product fits in uint256, every product is checked,
    and the scaled answer is multiplied back; the result then carries an
    absolute rounding error of order ``scale``. With ``fixed_width=False``
    the computation runs unscaled on arbitrary-precision ints.

    Args:
        quad: Reserve legs after direction selection
        fee: Fee ratio shared by both pools
        fixed_width: Emulate checked uint256 arithmetic with scaling
        scale_target: Magnitude the largest leg is normalized to

    Returns:
        SolverResult with ok=False when no positive profitable input exists
        or a leg vanishes after scaling

    Raises:
        InvalidReservesError: If a reserve leg is zero before scaling
        ArithmeticOverflowError: If fixed_width and a product leaves uint256
    """
    legs = quad.legs()
    if min(legs) <= 0:
        raise InvalidReservesError(
            f"All reserve legs must be positive: {legs}", reserves=legs
        )

    limit = UINT256_MAX if fixed_width else None
    scale = normalization_scale(*legs, target=scale_target) if fixed_width else 1

    scaled = quad.scaled_down(scale)
    if min(scaled.legs()) == 0:
        logger.debug(f"Reserve leg vanished at scale {scale}: {scaled.legs()}")
        return SolverResult.no_solution(scale)

    x_a, y_a, x_b, y_b = scaled.legs()
    g_num, g_den = fee.numerator, fee.denominator

    y_a_x_b = checked_mul(y_a, x_b, limit=limit, operation="yA*xB")
    prod = checked_mul(x_a, y_a, x_b, y_b, limit=limit, operation="xA*yA*xB*yB")
    sqrt_p = isqrt(prod)

    numerator_neg = checked_mul(y_a_x_b, g_den, g_den, limit=limit, operation="numerator")
    numerator_pos = checked_mul(g_num, g_den, sqrt_p, limit=limit, operation="numerator")

    if numerator_pos <= numerator_neg:
        logger.debug(
            f"No profitable input: fee-adjusted root {numerator_pos} <= {numerator_neg}"
        )
        return SolverResult.no_solution(scale)

    numerator = numerator_pos - numerator_neg
    denom = checked_add(
        checked_mul(g_num, x_b, g_den, limit=limit, operation="denominator"),
        checked_mul(g_num, g_num, x_a, limit=limit, operation="denominator"),
        limit=limit,
        operation="denominator",
    )
    if denom == 0:
        return SolverResult.no_solution(scale)

    amount_scaled = numerator // denom
    amount_in = checked_mul(amount_scaled, scale, limit=limit, operation="rescale")
    return SolverResult(ok=True, amount_in=amount_in, scale=scale)


def evaluate_arbitrage(
    pool_a: PoolReserves,
    pool_b: PoolReserves,
    fee: FeeRatio = DEFAULT_FEE,
    fixed_width: bool = True,
    price_scale: int = PRICE_SCALE,
    scale_target: int = SCALE_TARGET,
) -> ArbitrageOpportunity:
    """
    Direction, optimal input and expected profit for two pools.

    The optimal input is pushed through the real (unscaled) reserves of the
    buy pool and then the sell pool; ``expected_profit`` is what comes back
    minus what went in, floored at zero.
    """
    buy_on_a = select_direction(pool_a, pool_b, price_scale)
    quad = build_quadruple(pool_a, pool_b, buy_on_a)
    result = compute_optimal_amount(quad, fee, fixed_width, scale_target)

    if not result.ok:
        return ArbitrageOpportunity(buy_on_a=buy_on_a, amount_in=0, expected_profit=0)

    buy_pool, sell_pool = (pool_a, pool_b) if buy_on_a else (pool_b, pool_a)
    bought, returned = simulate_round_trip(
        result.amount_in, buy_pool, sell_pool, fee, fixed_width
    )
    profit = max(returned - result.amount_in, 0)

    return ArbitrageOpportunity(
        buy_on_a=buy_on_a,
        amount_in=result.amount_in,
        expected_profit=profit,
        amount_out_a=bought,
        amount_out_b=returned,
    )


class ArbitrageSolver:
    """Config-bound front end for :func:`evaluate_arbitrage`."""

    def __init__(
        self,
        fee: Optional[FeeRatio] = None,
        fixed_width: bool = True,
        price_scale: int = PRICE_SCALE,
        scale_target: int = SCALE_TARGET,
    ):
        self.fee = fee or DEFAULT_FEE
        self.fixed_width = fixed_width
        self.price_scale = price_scale
        self.scale_target = scale_target

    @classmethod
    def from_config(cls, config) -> "ArbitrageSolver":
        """Build a solver from a :class:`~cpmm_arbitrage.config.SolverConfig`."""
        return cls(
            fee=config.fee,
            fixed_width=config.fixed_width,
            price_scale=config.price_scale,
            scale_target=config.scale_target,
        )

    def evaluate(self, pool_a: PoolReserves, pool_b: PoolReserves) -> ArbitrageOpportunity:
        opportunity = evaluate_arbitrage(
            pool_a,
            pool_b,
            fee=self.fee,
            fixed_width=self.fixed_width,
            price_scale=self.price_scale,
            scale_target=self.scale_target,
        )
        label_a = pool_a.name or "A"
        label_b = pool_b.name or "B"
        buy, sell = (label_a, label_b) if opportunity.buy_on_a else (label_b, label_a)

        if opportunity.is_profitable:
            logger.info(
                f"Opportunity {buy} -> {sell}: amount_in={opportunity.amount_in} "
                f"expected_profit={opportunity.expected_profit}"
            )
        else:
            logger.debug(f"No opportunity between {label_a} and {label_b}")
        return opportunity
