"""Tests for the exceptions module."""

import pytest
from cpmm_arbitrage.exceptions import (
    ArithmeticOverflowError,
    ConfigurationError,
    CpmmArbitrageError,
    InvalidReservesError,
    NetworkError,
    ReconciliationError,
    ValidationError,
)


def test_base_exception():
    """Test the base exception class."""
    error = CpmmArbitrageError("Test error")
    assert str(error) == "Test error"
    assert error.details == {}

    error_with_details = CpmmArbitrageError("Test error", {"key": "value"})
    assert error_with_details.details == {"key": "value"}


def test_configuration_error():
    """Test configuration error."""
    error = ConfigurationError("Config error", {"config_file": "solver.yaml"})
    assert str(error) == "Config error"
    assert error.details["config_file"] == "solver.yaml"
    assert isinstance(error, CpmmArbitrageError)


def test_invalid_reserves_error():
    """Test invalid reserves error."""
    error = InvalidReservesError("Empty pool", reserves=[0, 10])
    assert error.reserves == (0, 10)
    assert isinstance(error, ValidationError)
    assert isinstance(error, CpmmArbitrageError)
    assert InvalidReservesError("no reserves").reserves == ()


def test_arithmetic_overflow_error():
    """Test overflow error is also a builtin OverflowError."""
    error = ArithmeticOverflowError("too big", operation="mul")
    assert error.operation == "mul"
    assert error.bits == 256
    assert isinstance(error, OverflowError)
    assert isinstance(error, CpmmArbitrageError)


def test_network_error():
    """Test network error."""
    error = NetworkError("RPC down", endpoint="http://localhost:8545")
    assert str(error) == "RPC down"
    assert error.endpoint == "http://localhost:8545"
    assert isinstance(error, CpmmArbitrageError)


def test_reconciliation_error():
    """Test reconciliation error."""
    error = ReconciliationError("Reconciliation failed", expected=100, actual=80)
    assert error.expected == 100
    assert error.actual == 80
    assert isinstance(error, CpmmArbitrageError)


def test_exception_inheritance():
    """Test that all exceptions inherit from the base class."""
    for exc_class in [
        ConfigurationError,
        ValidationError,
        InvalidReservesError,
        ArithmeticOverflowError,
        NetworkError,
        ReconciliationError,
    ]:
        assert issubclass(exc_class, CpmmArbitrageError)


def test_exception_catching():
    """Test that specific exceptions can be caught by the base class."""
    with pytest.raises(CpmmArbitrageError):
        raise InvalidReservesError("Test")
