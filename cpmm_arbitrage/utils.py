"""
Common helpers for the arbitrage solver: unit formatting.
"""

from decimal import Decimal


def to_units(raw: int, decimals: int) -> Decimal:
    """Convert an integer base-unit amount to a human-readable Decimal."""
    return Decimal(raw) / (Decimal(10) ** decimals)


def profit_bps(profit: int, amount_in: int) -> Decimal:
    """Profit relative to the input amount in basis points, 0 for no input."""
    if amount_in <= 0:
        return Decimal(0)
    return Decimal(profit) * Decimal(10000) / Decimal(amount_in)
