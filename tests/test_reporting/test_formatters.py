"""Tests for weekly_forecaster.reporting.formatters."""

from __future__ import annotations

from weekly_forecaster.engine.aggregate import AggregateSummary, cost_breakdown
from weekly_forecaster.engine.portfolio import summarize_portfolio
from weekly_forecaster.engine.projection import generate_projections
from weekly_forecaster.engine.reconcile import reconcile
from weekly_forecaster.engine.risk import RiskSummary
from weekly_forecaster.engine.scenario import compare_scenarios, scenario_totals
from weekly_forecaster.engine.variance import analyze_variance
from weekly_forecaster.models.config import ProjectionConfig
from weekly_forecaster.reporting.formatters import (
    format_cost_breakdown,
    format_portfolio,
    format_projection_table,
    format_reconciled_table,
    format_risk_summary,
    format_scenario_totals,
    format_summary,
    format_variance_table,
)


def test_projection_table(ticket_only_config) -> None:
    out = format_projection_table(generate_projections(ticket_only_config))
    assert "=== Weekly Projection ===" in out
    assert "2,000.00" in out
    # header + rule + 12 weeks
    assert len([ln for ln in out.splitlines() if ln.strip()]) == 1 + 2 + 12


def test_projection_table_empty() -> None:
    assert "(empty projection)" in format_projection_table([])


def test_reconciled_table_tags(ticket_only_config, week1_actual) -> None:
    reconciled = reconcile(generate_projections(ticket_only_config), [week1_actual], {2})
    lines = format_reconciled_table(reconciled).splitlines()
    week1 = next(ln for ln in lines if ln.strip().startswith("1 "))
    week2 = next(ln for ln in lines if ln.strip().startswith("2 "))
    assert "[A]" in week1
    assert "1,813.00" in week1
    assert "-2,194.00" in week1
    assert "[P]" in week2


def test_summary() -> None:
    summary = AggregateSummary(
        total_revenue=10000, total_cost=7500, total_profit=2500, profit_margin=25.0,
        actual_weeks=1, projected_weeks=11,
    )
    out = format_summary(summary)
    assert "10,000.00" in out
    assert "Profit margin:" in out
    assert "25.00%" in out
    assert "1 / 11" in out


def test_cost_breakdown_hides_zero_categories(ticket_only_config, full_config) -> None:
    assert "(no cost data)" in format_cost_breakdown(
        cost_breakdown(generate_projections(ProjectionConfig(horizon_weeks=2)))
    )
    out = format_cost_breakdown(cost_breakdown(generate_projections(full_config)))
    assert "setup" in out
    assert "1,000.00" in out


def test_variance_table(ticket_only_config, week1_actual) -> None:
    out = format_variance_table(analyze_variance(generate_projections(ticket_only_config), [week1_actual]))
    assert "revenue" in out
    assert "-9.3%" in out or "-9.4%" in out


def test_variance_table_empty() -> None:
    assert "(no weeks with actual records)" in format_variance_table([])


def test_scenario_totals(ticket_only_config) -> None:
    series = generate_projections(ticket_only_config)
    out = format_scenario_totals(
        scenario_totals(compare_scenarios(series, series)), baseline="base", scenario="alt",
    )
    assert "=== Scenario Comparison: alt vs base ===" in out
    for metric in ("revenue", "cost", "profit", "attendance"):
        assert metric in out


def test_portfolio(ticket_only_config, full_config) -> None:
    summary = summarize_portfolio({
        "tickets": generate_projections(ticket_only_config),
        "venue": generate_projections(full_config),
    })
    out = format_portfolio(summary)
    assert "=== Portfolio ===" in out
    assert "tickets" in out
    assert "Most profitable:  tickets" in out
    assert "Least profitable: venue" in out


def test_portfolio_empty() -> None:
    out = format_portfolio(summarize_portfolio({}))
    assert "(no products)" in out
    assert "Most profitable:  -" in out


def test_risk_summary() -> None:
    out = format_risk_summary(RiskSummary(
        total=4, high=2, medium=1, low=1,
        total_financial_impact=9000, high_financial_impact=8000,
    ))
    assert "4 (2 / 1 / 1)" in out
    assert "9,000.00" in out
    assert "8,000.00" in out
