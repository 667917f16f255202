"""
Realized versus expected profit reconciliation.

The closed-form amount is computed on scaled reserves and the on-chain
swaps round at every leg, so a realized profit a few base units away from
the expected one is normal. Anything beyond the tolerance is reported.
"""

from dataclasses import dataclass

from ..constants import DEFAULT_PROFIT_TOLERANCE
from ..exceptions import ReconciliationError, ValidationError


@dataclass(frozen=True)
class ProfitCheck:
    """Single reconciliation result with WHY audit format."""

    expected: int
    realized: int
    drift: int
    tolerance: int

    @property
    def within_tolerance(self) -> bool:
        return abs(self.drift) <= self.tolerance

    def as_why(self) -> str:
        """Return exactly one WHY audit line per comparison."""
        verdict = "ok" if self.within_tolerance else "drift"
        return (
            f"WHY profit_{verdict} expected={self.expected} "
            f"realized={self.realized} drift={self.drift:+d} "
            f"tolerance={self.tolerance}"
        )


class ProfitReconciler:
    """Compares realized round-trip profit with the solver's expected profit."""

    def __init__(self, tolerance: int = DEFAULT_PROFIT_TOLERANCE):
        """
        Args:
            tolerance: Maximum absolute drift in base units
        """
        if tolerance < 0:
            raise ValidationError(f"tolerance must be non-negative: {tolerance}")
        self.tolerance = tolerance

    @classmethod
    def from_config(cls, config) -> "ProfitReconciler":
        """Build a reconciler from a :class:`~cpmm_arbitrage.config.SolverConfig`."""
        return cls(tolerance=config.profit_tolerance)

    def compare(self, expected: int, realized: int, strict: bool = False) -> ProfitCheck:
        """
        Compare one round trip.

        Args:
            expected: Profit predicted by the solver
            realized: Profit measured after execution (may be negative)
            strict: Raise instead of returning an out-of-tolerance result

        Returns:
            ProfitCheck

        Raises:
            ReconciliationError: If strict and drift exceeds the tolerance
        """
        check = ProfitCheck(
            expected=expected,
            realized=realized,
            drift=realized - expected,
            tolerance=self.tolerance,
        )
        if strict and not check.within_tolerance:
            raise ReconciliationError(
                check.as_why(),
                expected=expected,
                actual=realized,
                details={"tolerance": self.tolerance},
            )
        return check
