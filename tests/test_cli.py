"""
Tests for the Typer CLI.

Runs each command through ``typer.testing.CliRunner`` against the committed
fixtures in ``config/fixtures``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from weekly_forecaster.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _restore_root_logger(monkeypatch):
    for var in ("WEEKLY_FORECASTER_LOG_LEVEL", "WEEKLY_FORECASTER_FORCED_WEEKS", "WEEKLY_FORECASTER_DEBUG"):
        monkeypatch.delenv(var, raising=False)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def projection_file(fixtures_dir: Path) -> str:
    return str(fixtures_dir / "example_projection.toml")


@pytest.fixture
def actuals_file(fixtures_dir: Path) -> str:
    return str(fixtures_dir / "example_actuals.json")


def test_validate_config() -> None:
    result = runner.invoke(app, ["validate-config"])
    assert result.exit_code == 0, result.output
    assert "[OK] Config valid." in result.output
    assert "Forced actual weeks: (none)" in result.output


def test_validate_config_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["validate-config", "--config", str(tmp_path / "nope.toml")])
    assert result.exit_code == 1
    assert "[ERROR]" in result.output


def test_project(projection_file: str) -> None:
    result = runner.invoke(app, ["project", projection_file, "--breakdown"])
    assert result.exit_code == 0, result.output
    assert "=== Weekly Projection ===" in result.output
    assert "3,600.00" in result.output
    assert "=== Cost Breakdown ===" in result.output


def test_project_bad_horizon_exits_1(tmp_path: Path) -> None:
    path = tmp_path / "zero.toml"
    path.write_text("horizon_weeks = 0\n", encoding="utf-8")
    result = runner.invoke(app, ["project", str(path)])
    assert result.exit_code == 1
    assert "[ERROR] ConfigurationError" in result.output


def test_project_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["project", str(tmp_path / "absent.toml")])
    assert result.exit_code == 1


def test_reconcile_with_actuals(projection_file: str, actuals_file: str) -> None:
    result = runner.invoke(app, ["reconcile", projection_file, "--actuals", actuals_file])
    assert result.exit_code == 0, result.output
    assert "[A]" in result.output
    assert "-2,194.00" in result.output
    assert "Weeks actual / projected: 1 / 11" in result.output


def test_reconcile_force_week(projection_file: str) -> None:
    result = runner.invoke(app, ["reconcile", projection_file, "--force-week", "1", "--force-week", "2"])
    assert result.exit_code == 0, result.output
    assert "Weeks actual / projected: 2 / 10" in result.output


def test_reconcile_out_of_range_actuals(tmp_path: Path) -> None:
    projection = tmp_path / "short.toml"
    projection.write_text("horizon_weeks = 2\n", encoding="utf-8")
    actuals = tmp_path / "late.csv"
    actuals.write_text("week,date,revenue,expenses\n5,2025-04-04,10,5\n", encoding="utf-8")
    result = runner.invoke(app, ["reconcile", str(projection), "-a", str(actuals)])
    assert result.exit_code == 1
    assert "[ERROR] ValidationError" in result.output


def test_variance(projection_file: str, actuals_file: str) -> None:
    result = runner.invoke(app, ["variance", projection_file, "--actuals", actuals_file])
    assert result.exit_code == 0, result.output
    assert "attendance" in result.output
    assert "revenue.ticket" in result.output


def test_compare(projection_file: str, tmp_path: Path) -> None:
    scenario = tmp_path / "bigger.toml"
    scenario.write_text(
        Path(projection_file).read_text(encoding="utf-8")
        .replace('name = "baseline"', 'name = "bigger"')
        .replace("base_attendance = 100", "base_attendance = 150"),
        encoding="utf-8",
    )
    result = runner.invoke(app, ["compare", projection_file, str(scenario)])
    assert result.exit_code == 0, result.output
    assert "=== Scenario Comparison: bigger vs baseline ===" in result.output


def test_compare_horizon_mismatch(projection_file: str, tmp_path: Path) -> None:
    scenario = tmp_path / "short.toml"
    scenario.write_text("horizon_weeks = 4\n", encoding="utf-8")
    result = runner.invoke(app, ["compare", projection_file, str(scenario)])
    assert result.exit_code == 1
    assert "ValidationError" in result.output


def test_project_uses_default_horizon_from_app_config(tmp_path: Path) -> None:
    app_config = tmp_path / "app.toml"
    app_config.write_text("[engine]\ndefault_horizon_weeks = 3\n", encoding="utf-8")
    projection = tmp_path / "no_horizon.toml"
    projection.write_text("[growth]\nbase_attendance = 10\n", encoding="utf-8")

    result = runner.invoke(app, ["project", str(projection), "--config", str(app_config)])
    assert result.exit_code == 0, result.output
    weeks = [
        ln.split()[0] for ln in result.output.splitlines()
        if len(ln.split()) == 6 and ln.split()[0].isdigit()
    ]
    assert weeks == ["1", "2", "3"]


def test_portfolio(projection_file: str, tmp_path: Path) -> None:
    kiosk = tmp_path / "kiosk.toml"
    kiosk.write_text(
        "horizon_weeks = 4\n[growth]\nbase_attendance = 20\nmodel = \"flat\"\n",
        encoding="utf-8",
    )
    result = runner.invoke(app, ["portfolio", projection_file, str(kiosk)])
    assert result.exit_code == 0, result.output
    assert "=== Portfolio ===" in result.output
    assert "baseline" in result.output
    assert "kiosk" in result.output
    assert "Most profitable:" in result.output


def test_portfolio_duplicate_names(projection_file: str) -> None:
    result = runner.invoke(app, ["portfolio", projection_file, projection_file])
    assert result.exit_code == 1
    assert "Duplicate product name 'baseline'" in result.output


def test_risks(tmp_path: Path) -> None:
    path = tmp_path / "risks.json"
    path.write_text(
        '[{"name": "Venue cancels", "likelihood": "High", "impact": "High", "financial_impact": 5000},'
        ' {"name": "Bad weather", "financial_impact": 200}]',
        encoding="utf-8",
    )
    result = runner.invoke(app, ["risks", str(path)])
    assert result.exit_code == 0, result.output
    assert "Risks (high / medium / low): 2 (1 / 0 / 1)" in result.output
    assert "5,200.00" in result.output


def test_risks_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["risks", str(tmp_path / "absent.json")])
    assert result.exit_code == 1
    assert "[ERROR]" in result.output
