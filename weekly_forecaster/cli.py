"""
Weekly Forecaster CLI entry point.

A thin local harness over ``ForecastEngine`` for inspecting projection
configs and actuals files. All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load the projection config (and actuals) from files.
  4. Call the engine; a failed ``EngineResult`` prints ``[ERROR]`` and exits 1.
  5. Print ASCII tables to stdout.

Install and run::

    pip install -e .
    weekly-forecaster --help
    weekly-forecaster validate-config
    weekly-forecaster project config/fixtures/example_projection.toml
    weekly-forecaster reconcile config/fixtures/example_projection.toml \\
        --actuals config/fixtures/example_actuals.json --force-week 1
    weekly-forecaster variance config/fixtures/example_projection.toml \\
        --actuals config/fixtures/example_actuals.json
    weekly-forecaster compare baseline.toml scenario.toml
    weekly-forecaster portfolio cafe.toml arena.toml
    weekly-forecaster risks risks.json
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer

app = typer.Typer(
    name="weekly-forecaster",
    help="Weekly financial projection and actuals reconciliation CLI.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from pydantic import ValidationError

    from weekly_forecaster.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except (ValidationError, ValueError) as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config) -> None:
    from weekly_forecaster.utils.logging import configure_logging
    configure_logging(config.logging)


def _engine(config):
    from weekly_forecaster.engine.service import ForecastEngine
    return ForecastEngine(config)


def _load_projection_or_exit(path: str, config=None):
    from weekly_forecaster.engine.errors import ConfigurationError
    from weekly_forecaster.loaders import load_projection_config

    try:
        default = config.engine.default_horizon_weeks if config is not None else None
        return load_projection_config(Path(path), default_horizon_weeks=default)
    except (FileNotFoundError, ValueError, ConfigurationError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


def _load_actuals_or_exit(path: Optional[str]):
    from weekly_forecaster.loaders import load_actuals
    from weekly_forecaster.models.actuals import ActualsLedger

    if path is None:
        return ActualsLedger()
    try:
        return load_actuals(Path(path))
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


def _unwrap_or_exit(result):
    if not result.ok:
        typer.echo(f"[ERROR] {result.error_kind}: {result.error}", err=True)
        raise typer.Exit(code=1)
    return result.value


_CONFIG_OPTION = typer.Option(None, "--config", help="Path to TOML app config file.")
_ACTUALS_OPTION = typer.Option(
    None, "--actuals", "-a", help="Actual records file (.json or .csv)."
)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = _CONFIG_OPTION,
    show_full: bool = typer.Option(False, "--full", help="Print the full config as JSON."),
) -> None:
    """Validate the application config file and print parsed values."""
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Default horizon:     {config.engine.default_horizon_weeks} weeks")
    typer.echo(f"  Projection cache:    {config.engine.cache_projections}")
    forced = ", ".join(str(w) for w in config.reconciliation.forced_actual_weeks) or "(none)"
    typer.echo(f"  Forced actual weeks: {forced}")
    typer.echo(f"  Log level:           {config.logging.level}")
    typer.echo(f"  Debug mode:          {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("project")
def project(
    projection_file: str = typer.Argument(..., help="Projection config (.toml or .json)."),
    breakdown: bool = typer.Option(False, "--breakdown", help="Also print the cost breakdown."),
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Generate and print the weekly forecast for a projection config."""
    from weekly_forecaster.reporting.formatters import (
        format_cost_breakdown,
        format_projection_table,
    )

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    engine = _engine(config)
    projection = _load_projection_or_exit(projection_file, config)

    series = _unwrap_or_exit(engine.project(projection))
    typer.echo(format_projection_table(series))
    if breakdown:
        typer.echo(format_cost_breakdown(_unwrap_or_exit(engine.cost_breakdown(projection))))


@app.command("reconcile")
def reconcile(
    projection_file: str = typer.Argument(..., help="Projection config (.toml or .json)."),
    actuals_file: Optional[str] = _ACTUALS_OPTION,
    force_week: Optional[List[int]] = typer.Option(
        None,
        "--force-week",
        help="Treat this week as actual without a record. Repeatable; "
             "overrides [reconciliation] forced_actual_weeks.",
    ),
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Reconcile actual records onto the forecast and print totals."""
    from weekly_forecaster.reporting.formatters import format_reconciled_table, format_summary

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    engine = _engine(config)
    projection = _load_projection_or_exit(projection_file, config)
    actuals = _load_actuals_or_exit(actuals_file)
    forced = force_week or None

    reconciled = _unwrap_or_exit(engine.reconcile(projection, actuals, forced))
    summary = _unwrap_or_exit(engine.summarize(projection, actuals, forced))
    typer.echo(format_reconciled_table(reconciled))
    typer.echo(format_summary(summary))


@app.command("variance")
def variance(
    projection_file: str = typer.Argument(..., help="Projection config (.toml or .json)."),
    actuals_file: str = typer.Option(..., "--actuals", "-a", help="Actual records file."),
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Print projected-vs-actual variance for weeks with actual records."""
    from weekly_forecaster.reporting.formatters import format_variance_table

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    engine = _engine(config)
    projection = _load_projection_or_exit(projection_file, config)
    actuals = _load_actuals_or_exit(actuals_file)

    records = _unwrap_or_exit(engine.variance(projection, actuals))
    typer.echo(format_variance_table(records))


@app.command("compare")
def compare(
    baseline_file: str = typer.Argument(..., help="Baseline projection config."),
    scenario_file: str = typer.Argument(..., help="Alternative projection config."),
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Compare two projection configs over the same horizon."""
    from weekly_forecaster.engine.scenario import scenario_totals
    from weekly_forecaster.reporting.formatters import format_scenario_totals

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    engine = _engine(config)
    baseline = _load_projection_or_exit(baseline_file, config)
    scenario = _load_projection_or_exit(scenario_file, config)

    diffs = _unwrap_or_exit(engine.compare(baseline, scenario))
    typer.echo(
        format_scenario_totals(
            scenario_totals(diffs),
            baseline=baseline.name or Path(baseline_file).stem,
            scenario=scenario.name or Path(scenario_file).stem,
        )
    )


@app.command("portfolio")
def portfolio(
    projection_files: List[str] = typer.Argument(..., help="One projection config per product."),
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Roll several products' forecasts up into one portfolio view."""
    from weekly_forecaster.reporting.formatters import format_portfolio

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    engine = _engine(config)

    products = {}
    for path in projection_files:
        projection = _load_projection_or_exit(path, config)
        name = projection.name or Path(path).stem
        if name in products:
            typer.echo(f"[ERROR] Duplicate product name '{name}' ({path}).", err=True)
            raise typer.Exit(code=1)
        products[name] = projection

    typer.echo(format_portfolio(_unwrap_or_exit(engine.portfolio(products))))


@app.command("risks")
def risks(
    risk_file: str = typer.Argument(..., help="Risk register (.json array)."),
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Score a risk register and print counts per band."""
    from weekly_forecaster.loaders import load_risks
    from weekly_forecaster.reporting.formatters import format_risk_summary

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    engine = _engine(config)
    try:
        register = load_risks(Path(risk_file))
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(format_risk_summary(_unwrap_or_exit(engine.risks(register))))


if __name__ == "__main__":
    app()
