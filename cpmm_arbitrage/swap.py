"""
Uniswap V2 style constant-product swap simulation on integer base units.

The solver uses these to price its own answer, and callers use them to
predict what an on-chain swap will return.
"""

from typing import Tuple

from .constants import UINT256_MAX
from .exceptions import InvalidReservesError
from .intmath import checked_add, checked_mul
from .types import FeeRatio, PoolReserves

DEFAULT_FEE = FeeRatio()


def get_amount_out(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    fee: FeeRatio = DEFAULT_FEE,
    fixed_width: bool = True,
) -> int:
    """
    Output amount of a constant-product swap with the fee taken from the input.

    Formula (multiply before divide, floor at the end):
        amountInWithFee = amountIn * gNum
        amountOut = amountInWithFee * reserveOut / (reserveIn * gDen + amountInWithFee)

    Args:
        amount_in: Input token amount (base units)
        reserve_in: Reserve of the input token
        reserve_out: Reserve of the output token
        fee: Fee ratio g = gNum / gDen
        fixed_width: Check intermediate products against the uint256 range

    Returns:
        Output token amount (base units)

    Raises:
        InvalidReservesError: If an amount is negative or the denominator is zero
        ArithmeticOverflowError: If fixed_width and a product leaves uint256
    """
    if amount_in < 0 or reserve_in < 0 or reserve_out < 0:
        raise InvalidReservesError(
            f"Swap amounts must be non-negative: amount_in={amount_in}, "
            f"reserve_in={reserve_in}, reserve_out={reserve_out}",
            reserves=(reserve_in, reserve_out),
        )

    limit = UINT256_MAX if fixed_width else None

    amount_in_with_fee = checked_mul(amount_in, fee.numerator, limit=limit, operation="swap")
    numerator = checked_mul(amount_in_with_fee, reserve_out, limit=limit, operation="swap")
    denominator = checked_add(
        checked_mul(reserve_in, fee.denominator, limit=limit, operation="swap"),
        amount_in_with_fee,
        limit=limit,
        operation="swap",
    )
    if denominator == 0:
        raise InvalidReservesError(
            "Swap denominator is zero: empty input reserve and zero input",
            reserves=(reserve_in, reserve_out),
        )

    return numerator // denominator


def simulate_round_trip(
    amount_in: int,
    buy_pool: PoolReserves,
    sell_pool: PoolReserves,
    fee: FeeRatio = DEFAULT_FEE,
    fixed_width: bool = True,
) -> Tuple[int, int]:
    """
    Swap ``amount_in`` through the buy pool, then the proceeds back through the sell pool.

    Returns:
        Tuple of (amount_out_buy_leg, amount_out_sell_leg)
    """
    bought = get_amount_out(
        amount_in, buy_pool.reserve_in, buy_pool.reserve_out, fee, fixed_width
    )
    returned = get_amount_out(
        bought, sell_pool.reserve_out, sell_pool.reserve_in, fee, fixed_width
    )
    return bought, returned
