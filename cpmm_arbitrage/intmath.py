"""
Integer arithmetic primitives for the closed-form solver.

Everything here works on non-negative Python ints. When a ``limit`` is
given, products and sums are checked after every step against it, which
emulates checked unsigned fixed-width arithmetic (uint256 by default).
"""

from typing import Optional

from .constants import SCALE_TARGET, UINT256_MAX
from .exceptions import ArithmeticOverflowError


def isqrt(x: int) -> int:
    """
    floor(sqrt(x)) by Newton's method.

    Seeded at (x + 1) // 2 and iterated with z = (x // z + z) // 2 while the
    iterate keeps decreasing; the last non-increasing iterate is the floor
    root. The sequence is monotonically non-increasing after the seed, so
    the loop terminates for every input.

    Raises:
        ValueError: If x is negative
    """
    if x < 0:
        raise ValueError(f"isqrt() argument must be non-negative: {x}")
    if x == 0:
        return 0

    z = (x + 1) // 2
    y = x
    while z < y:
        y = z
        z = (x // z + z) // 2
    return y


def normalization_scale(*values: int, target: int = SCALE_TARGET) -> int:
    """
    Common divisor that brings the largest value down to about ``target``.

    Never scales up: returns 1 when max(values) <= target, otherwise
    max(values) // target (which is at least 1).
    """
    largest = max(values)
    if largest <= target:
        return 1
    return max(largest // target, 1)


def checked_mul(
    *factors: int, limit: Optional[int] = UINT256_MAX, operation: str = "mul"
) -> int:
    """
    Multiply left to right, failing as soon as a partial product exceeds ``limit``.

    Pass ``limit=None`` for unchecked arbitrary-precision multiplication.

    Raises:
        ArithmeticOverflowError: If a partial product exceeds ``limit``
    """
    result = 1
    for factor in factors:
        result *= factor
        if limit is not None and result > limit:
            raise ArithmeticOverflowError(
                f"{operation}: product exceeds {limit.bit_length()}-bit range",
                operation=operation,
                bits=limit.bit_length(),
                details={"factors": [str(f) for f in factors]},
            )
    return result


def checked_add(
    a: int, b: int, limit: Optional[int] = UINT256_MAX, operation: str = "add"
) -> int:
    """Add two values, failing if the sum exceeds ``limit`` (None disables)."""
    result = a + b
    if limit is not None and result > limit:
        raise ArithmeticOverflowError(
            f"{operation}: sum exceeds {limit.bit_length()}-bit range",
            operation=operation,
            bits=limit.bit_length(),
        )
    return result
