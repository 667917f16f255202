"""
Tests for the run_solver command line entry point.
"""

import argparse
import json

import pytest

import run_solver

RESERVES = ["--reserves", "1000000e18", "400e18", "1010000e18", "400e18"]


@pytest.fixture(autouse=True)
def quiet_cli(monkeypatch):
    """Keep the CLI from reconfiguring root logging or reading a real RPC."""
    monkeypatch.setattr(run_solver.logging_config, "setup", lambda level=None: None)
    monkeypatch.setattr(run_solver, "load_dotenv", lambda: None)
    monkeypatch.delenv("RPC_URL", raising=False)


def test_parse_amount_accepts_exponent_and_underscores():
    assert run_solver.parse_amount("400e18") == 400 * 10**18
    assert run_solver.parse_amount("1_000") == 1000


@pytest.mark.parametrize("text", ["abc", "1.5", "-3", "inf", "-Infinity", "nan"])
def test_parse_amount_rejects_bad_values(text):
    with pytest.raises(argparse.ArgumentTypeError):
        run_solver.parse_amount(text)


def test_report_for_reference_pools(capsys):
    assert run_solver.main(RESERVES) == 0

    out = capsys.readouterr().out
    assert "Buy on A, sell on B" in out
    assert "amount_in       = 989800000000000000000" in out


def test_json_output(capsys):
    assert run_solver.main(RESERVES + ["--json"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["buy_on_a"] is True
    assert data["amount_in"] == "989800000000000000000"
    assert int(data["expected_profit"]) > 0


def test_unscaled_mode_changes_amount(capsys):
    assert run_solver.main(RESERVES + ["--json", "--no-fixed-width"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["amount_in"] != "989800000000000000000"
    assert int(data["expected_profit"]) > 0


def test_identical_pools_report_no_arbitrage(capsys):
    argv = ["--reserves", "1000e18", "1e18", "1000e18", "1e18"]
    assert run_solver.main(argv) == 0
    assert "No arbitrage" in capsys.readouterr().out


def test_missing_reserves_and_pools_fails(capsys):
    assert run_solver.main([]) == 1
    assert "Provide --reserves" in capsys.readouterr().err


def test_invalid_fee_bps_fails(capsys):
    assert run_solver.main(RESERVES + ["--fee-bps", "10000"]) == 1
    assert "Config error" in capsys.readouterr().err


def test_missing_config_file_fails(tmp_path, capsys):
    missing = tmp_path / "nope.yaml"
    assert run_solver.main(["--config", str(missing)] + RESERVES) == 1
    assert "Config file not found" in capsys.readouterr().err


def _expected_profit(capsys):
    assert run_solver.main(RESERVES + ["--json"]) == 0
    return int(json.loads(capsys.readouterr().out)["expected_profit"])


def test_realized_profit_within_default_tolerance(capsys):
    expected = _expected_profit(capsys)

    argv = RESERVES + ["--realized-profit", str(expected - 10)]
    assert run_solver.main(argv) == 0
    assert "WHY profit_ok" in capsys.readouterr().out


def test_realized_profit_uses_config_tolerance(tmp_path, capsys):
    expected = _expected_profit(capsys)
    config_path = tmp_path / "strict.yaml"
    config_path.write_text("profit_tolerance: 0\n")

    argv = ["--config", str(config_path), "--json", "--realized-profit", str(expected + 1)]
    assert run_solver.main(argv + RESERVES) == 1

    data = json.loads(capsys.readouterr().out)
    assert data["profit_check"] == (
        f"WHY profit_drift expected={expected} realized={expected + 1} "
        "drift=+1 tolerance=0"
    )
