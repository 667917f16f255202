"""
Exception hierarchy for the two-pool arbitrage solver.

The "no arbitrage" outcome is never an exception: the solver reports it
through ``SolverResult.ok``. These types cover precondition violations,
fixed-width overflow, configuration and the live reserve reader.
"""

from typing import Any, Dict, Optional, Sequence


class CpmmArbitrageError(Exception):
    """Base exception for all solver related errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(CpmmArbitrageError):
    """Raised when there are configuration-related issues."""

    pass


class ValidationError(CpmmArbitrageError):
    """Raised when a value object or input fails validation."""

    pass


class InvalidReservesError(ValidationError):
    """Raised when reserves would make a formula divide by zero or go negative."""

    def __init__(
        self,
        message: str,
        reserves: Optional[Sequence[int]] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.reserves = tuple(reserves) if reserves is not None else ()


class ArithmeticOverflowError(CpmmArbitrageError, OverflowError):
    """Raised when a product leaves the unsigned fixed-width range."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        bits: int = 256,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.operation = operation
        self.bits = bits


class NetworkError(CpmmArbitrageError):
    """Raised when reading pool state over RPC fails."""

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint


class ReconciliationError(CpmmArbitrageError):
    """Raised when realized profit drifts from the expected profit."""

    def __init__(
        self,
        message: str,
        expected: Optional[Any] = None,
        actual: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.expected = expected
        self.actual = actual
