"""
Readers that turn on-chain pool state into reserve snapshots.
"""

from .v2 import connect, fetch_reserves, orient_reserves

__all__ = ["connect", "fetch_reserves", "orient_reserves"]
