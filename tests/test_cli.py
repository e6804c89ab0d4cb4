"""Command line interface tests."""

from __future__ import annotations

import csv
import json

import pytest
from click.testing import CliRunner

from barefoot.cli import cli
from barefoot.services.import_debts import dump_debts


@pytest.fixture
def runner(monkeypatch, tmp_path):
    monkeypatch.setenv("BAREFOOT_DEV_MODE", "0")
    monkeypatch.setenv("BAREFOOT_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("BAREFOOT_MAX_MONTHS", raising=False)
    monkeypatch.delenv("BAREFOOT_MAX_FORTNIGHTS", raising=False)
    return CliRunner()


@pytest.fixture
def debts_file(tmp_path, credit_card, mortgage):
    path = tmp_path / "debts.json"
    path.write_text(json.dumps({"debts": dump_debts([credit_card, mortgage])}), encoding="utf-8")
    return path


def test_simulate_prints_json(runner, debts_file):
    result = runner.invoke(
        cli, ["simulate", str(debts_file), "--extra", "92000", "--period", "month"]
    )

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["period_kind"] == "MONTH"
    assert data["terminated_early"] is False
    assert data["periods"] == len(data["timeline"])
    assert data["timeline"][0]["debts_continuing"] == ["cc-1", "mortgage-1"]


def test_mortgage_command_writes_csv(runner, debts_file, tmp_path):
    csv_path = tmp_path / "out" / "mortgage.csv"

    result = runner.invoke(
        cli,
        [
            "mortgage",
            str(debts_file),
            "--extra",
            "92000",
            "--start",
            "2026-01-05",
            "--csv",
            str(csv_path),
        ],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["baseline"][0]["date_iso"] == "2026-01-05"
    assert data["time_saved_in_periods"] > 0
    assert data["interest_saved"] > 0
    with csv_path.open(newline="", encoding="utf-8") as fh:
        assert len(list(csv.DictReader(fh))) == len(data["baseline"])


def test_plan_command(runner, debts_file):
    result = runner.invoke(cli, ["plan", str(debts_file), "--extra", "92000", "--start", "2026-01-05"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["fortnightly_fire_extinguisher_cents"] == 92_000
    assert data["timeline"][0]["debt_being_paid"]["id"] == "cc-1"


def test_negative_extra_rejected(runner, debts_file):
    result = runner.invoke(cli, ["simulate", str(debts_file), "--extra", "-1"])

    assert result.exit_code == 2


def test_invalid_debt_file_reports_error(runner, tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([{"id": "x", "name": "", "current_balance": 100}]), encoding="utf-8")

    result = runner.invoke(cli, ["simulate", str(path)])

    assert result.exit_code == 1
    assert "Debt #0 is invalid" in result.output


def test_invalid_ceiling_reports_error(runner, monkeypatch, debts_file):
    monkeypatch.setenv("BAREFOOT_MAX_MONTHS", "zero")

    result = runner.invoke(cli, ["simulate", str(debts_file)])

    assert result.exit_code == 1
    assert "BAREFOOT_MAX_MONTHS" in result.output


def test_data_dir_option_hosts_logs(runner, debts_file, tmp_path):
    data_dir = tmp_path / "elsewhere"

    result = runner.invoke(cli, ["--data-dir", str(data_dir), "simulate", str(debts_file)])

    assert result.exit_code == 0, result.output
    assert (data_dir / "logs" / "barefoot.log").exists()
