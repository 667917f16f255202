"""
Post-trade checks against the solver's expectations.
"""

from .profit_check import ProfitCheck, ProfitReconciler

__all__ = ["ProfitCheck", "ProfitReconciler"]
