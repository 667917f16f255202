"""
Tests for realized versus expected profit reconciliation.
"""

import pytest

from cpmm_arbitrage.config import SolverConfig
from cpmm_arbitrage.exceptions import ReconciliationError, ValidationError
from cpmm_arbitrage.validation import ProfitCheck, ProfitReconciler


def test_drift_within_default_tolerance():
    check = ProfitReconciler().compare(expected=1_954_000, realized=1_953_993)
    assert check.drift == -7
    assert check.tolerance == 10
    assert check.within_tolerance


def test_drift_outside_tolerance_is_reported():
    check = ProfitReconciler(tolerance=5).compare(expected=100, realized=90)
    assert not check.within_tolerance
    assert check.as_why() == "WHY profit_drift expected=100 realized=90 drift=-10 tolerance=5"


def test_strict_mode_raises():
    with pytest.raises(ReconciliationError) as exc_info:
        ProfitReconciler(tolerance=10).compare(expected=100, realized=-5, strict=True)
    assert exc_info.value.expected == 100
    assert exc_info.value.actual == -5
    assert exc_info.value.details["tolerance"] == 10


def test_strict_mode_passes_within_tolerance():
    check = ProfitReconciler().compare(expected=100, realized=110, strict=True)
    assert check.as_why().startswith("WHY profit_ok")


def test_negative_tolerance_rejected():
    with pytest.raises(ValidationError):
        ProfitReconciler(tolerance=-1)


def test_check_is_immutable():
    check = ProfitCheck(expected=1, realized=1, drift=0, tolerance=0)
    with pytest.raises(Exception):
        check.drift = 3


def test_reconciler_uses_config_tolerance():
    reconciler = ProfitReconciler.from_config(SolverConfig({"profit_tolerance": 3}))
    assert reconciler.tolerance == 3
    assert not reconciler.compare(expected=100, realized=96).within_tolerance


def test_reconciler_default_config_tolerance():
    assert ProfitReconciler.from_config(SolverConfig()).tolerance == 10
