#!/usr/bin/env python3
"""
Two-pool arbitrage solver CLI.

Computes the direction, optimal input and expected profit of a round trip
through two constant-product pools, from explicit reserves or from pairs
read live over RPC.

Usage:
    python3 run_solver.py --reserves 1000000e18 400e18 1010000e18 400e18
    python3 run_solver.py --config configs/solver.yaml
    python3 run_solver.py --config configs/solver.yaml --json
"""

import argparse
import json
import logging
import sys
from decimal import Decimal
from typing import List, Optional, Tuple

from dotenv import load_dotenv

import logging_config
from cpmm_arbitrage.adapters import connect, fetch_reserves
from cpmm_arbitrage.config import ConfigError, SolverConfig, load_config
from cpmm_arbitrage.exceptions import CpmmArbitrageError, NetworkError, ValidationError
from cpmm_arbitrage.solver import ArbitrageSolver
from cpmm_arbitrage.types import ArbitrageOpportunity, FeeRatio, PoolReserves
from cpmm_arbitrage.utils import profit_bps, to_units
from cpmm_arbitrage.validation import ProfitReconciler


def parse_amount(text: str) -> int:
    """Parse a base-unit amount; accepts plain ints, underscores and 1000e18 notation."""
    try:
        value = Decimal(text.replace("_", ""))
    except ArithmeticError:
        raise argparse.ArgumentTypeError(f"not a number: {text}")
    if not value.is_finite():
        raise argparse.ArgumentTypeError(f"not a finite amount: {text}")
    if value != value.to_integral_value() or value < 0:
        raise argparse.ArgumentTypeError(f"not a non-negative integer amount: {text}")
    return int(value)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Closed-form two-pool constant-product arbitrage solver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Explicit reserves (input asset first, then the asset bought)
  python3 run_solver.py --reserves 1000000e18 400e18 1010000e18 400e18

  # Read both pools live using the config's rpc_url and pools
  python3 run_solver.py --config configs/solver.yaml

  # Unscaled arbitrary-precision evaluation
  python3 run_solver.py --reserves 1000000e18 400e18 1010000e18 400e18 --no-fixed-width

  # Reconcile a realized profit against the expected one
  python3 run_solver.py --config configs/solver.yaml --realized-profit 1954000000000000000
        """,
    )

    parser.add_argument("--config", help="Path to config YAML file")
    parser.add_argument(
        "--reserves",
        nargs=4,
        type=parse_amount,
        metavar=("A_IN", "A_OUT", "B_IN", "B_OUT"),
        help="Reserves of pool A and pool B in base units",
    )
    parser.add_argument(
        "--fee-bps",
        type=int,
        help="Pool fee in basis points (overrides the config fee ratio)",
    )
    parser.add_argument(
        "--no-fixed-width",
        action="store_true",
        help="Skip uint256 emulation and scaling",
    )
    parser.add_argument(
        "--realized-profit",
        type=int,
        help="Profit measured after execution; compared with the expected "
        "profit within the config's profit_tolerance",
    )
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    return parser.parse_args(argv)


def resolve_pools(
    args: argparse.Namespace, config: SolverConfig
) -> Tuple[PoolReserves, PoolReserves]:
    """Reserves from the command line, or both configured pairs read live."""
    if args.reserves:
        a_in, a_out, b_in, b_out = args.reserves
        return PoolReserves(a_in, a_out, "A"), PoolReserves(b_in, b_out, "B")

    if not config.live:
        raise ConfigError("Provide --reserves or configure two pools to read live")
    if not config.rpc_url:
        raise ConfigError("rpc_url (or RPC_URL in .env) is required to read pools live")

    web3 = connect(config.rpc_url)
    pool_a, pool_b = (
        fetch_reserves(web3, p["address"], p["token_in"], name=p["name"])
        for p in config.pools
    )
    return pool_a, pool_b


def format_report(
    opportunity: ArbitrageOpportunity,
    pool_a: PoolReserves,
    pool_b: PoolReserves,
    decimals: int,
) -> str:
    """Console-friendly summary of one evaluation."""
    buy, sell = (pool_a, pool_b) if opportunity.buy_on_a else (pool_b, pool_a)
    if not opportunity.is_profitable:
        return f"No arbitrage: buy side would be {buy.name}, no profitable input"

    bps = profit_bps(opportunity.expected_profit, opportunity.amount_in)
    return "\n".join(
        [
            f"Buy on {buy.name}, sell on {sell.name}",
            f"  amount_in       = {opportunity.amount_in} "
            f"({to_units(opportunity.amount_in, decimals):,.6f})",
            f"  expected_profit = {opportunity.expected_profit} "
            f"({to_units(opportunity.expected_profit, decimals):,.6f}, {bps:.2f} bps)",
        ]
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success, including "no opportunity"; 1 for error
        or a realized profit outside profit_tolerance)
    """
    args = parse_args(argv)
    load_dotenv()
    logging_config.setup(getattr(logging, args.log_level))

    try:
        config = load_config(args.config) if args.config else SolverConfig()
        if args.fee_bps is not None:
            fee = FeeRatio.from_bps(args.fee_bps)
            config.fee_numerator, config.fee_denominator = fee.numerator, fee.denominator
        if args.no_fixed_width:
            config.fixed_width = False
    except (ConfigError, ValidationError) as e:
        print(f"❌ Config error: {e}", file=sys.stderr)
        return 1

    try:
        pool_a, pool_b = resolve_pools(args, config)
    except (ConfigError, NetworkError, ValidationError) as e:
        print(f"❌ Could not load reserves: {e}", file=sys.stderr)
        return 1

    solver = ArbitrageSolver.from_config(config)
    try:
        opportunity = solver.evaluate(pool_a, pool_b)
    except CpmmArbitrageError as e:
        print(f"❌ Solver failed: {e}", file=sys.stderr)
        return 1

    check = None
    if args.realized_profit is not None:
        check = ProfitReconciler.from_config(config).compare(
            opportunity.expected_profit, args.realized_profit
        )

    if args.json:
        data = opportunity.to_dict()
        if check is not None:
            data["profit_check"] = check.as_why()
        print(json.dumps(data, indent=2))
    else:
        print(format_report(opportunity, pool_a, pool_b, config.token_decimals))
        if check is not None:
            print(check.as_why())

    if check is not None and not check.within_tolerance:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
