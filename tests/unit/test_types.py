"""
Unit tests for cpmm_arbitrage/types.py
"""

import unittest

from cpmm_arbitrage.exceptions import InvalidReservesError, ValidationError
from cpmm_arbitrage.types import (
    ArbitrageOpportunity,
    FeeRatio,
    PoolReserves,
    SolverResult,
    SwapQuadruple,
)


class TestFeeRatio(unittest.TestCase):
    """Test fee ratio validation and construction."""

    def test_default_is_uniswap_v2(self):
        fee = FeeRatio()
        self.assertEqual((fee.numerator, fee.denominator), (997, 1000))

    def test_from_bps_reduces(self):
        self.assertEqual(FeeRatio.from_bps(30), FeeRatio(997, 1000))
        self.assertEqual(FeeRatio.from_bps(25), FeeRatio(399, 400))
        self.assertEqual(FeeRatio.from_bps(0), FeeRatio(1, 1))

    def test_from_bps_out_of_range(self):
        with self.assertRaises(ValidationError):
            FeeRatio.from_bps(10_000)
        with self.assertRaises(ValidationError):
            FeeRatio.from_bps(-1)

    def test_ratio_above_one_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            FeeRatio(1001, 1000)
        self.assertEqual(ctx.exception.details["numerator"], 1001)

    def test_non_positive_rejected(self):
        with self.assertRaises(ValidationError):
            FeeRatio(0, 1000)
        with self.assertRaises(ValidationError):
            FeeRatio(997, 0)

    def test_non_integer_rejected(self):
        with self.assertRaises(ValidationError):
            FeeRatio(0.997, 1)


class TestPoolReserves(unittest.TestCase):
    """Test reserve snapshot validation."""

    def test_as_tuple(self):
        pool = PoolReserves(10, 20, "uni")
        self.assertEqual(pool.as_tuple(), (10, 20))

    def test_negative_rejected(self):
        with self.assertRaises(InvalidReservesError):
            PoolReserves(-1, 10)

    def test_float_rejected(self):
        with self.assertRaises(InvalidReservesError):
            PoolReserves(1.5, 10)

    def test_bool_rejected(self):
        with self.assertRaises(InvalidReservesError):
            PoolReserves(True, 10)

    def test_immutable(self):
        pool = PoolReserves(10, 20)
        with self.assertRaises(Exception):
            pool.reserve_in = 11


class TestResults(unittest.TestCase):
    """Test result value objects."""

    def test_solver_result_truthiness(self):
        self.assertTrue(SolverResult(ok=True, amount_in=5))
        self.assertFalse(SolverResult.no_solution(scale=7))
        self.assertEqual(SolverResult.no_solution(scale=7).amount_in, 0)
        self.assertEqual(SolverResult.no_solution(scale=7).scale, 7)

    def test_quadruple_scaled_down(self):
        quad = SwapQuadruple(10, 25, 99, 1000)
        self.assertEqual(quad.scaled_down(10).legs(), (1, 2, 9, 100))

    def test_opportunity_to_dict(self):
        opp = ArbitrageOpportunity(True, 10**21, 5, 7, 9)
        self.assertTrue(opp.is_profitable)
        self.assertEqual(
            opp.to_dict(),
            {
                "buy_on_a": True,
                "amount_in": "1000000000000000000000",
                "expected_profit": "5",
                "amount_out_a": "7",
                "amount_out_b": "9",
            },
        )
        self.assertFalse(ArbitrageOpportunity(False, 0, 0).is_profitable)


if __name__ == "__main__":
    unittest.main()
