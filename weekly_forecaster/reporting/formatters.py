"""
ASCII terminal formatters for CLI commands.

All formatters accept engine results and return plain multi-line strings
suitable for ``typer.echo()``. No third-party dependencies.

Weeks tagged ``[A]`` are actual (recorded), ``[P]`` are placeholders forced
to actual, and untagged weeks are projected::

    Week  Src       Revenue          Cost        Profit
    -------------------------------------------------
       1  [A]      1,813.00      4,007.00     -2,194.00
       2  [P]      3,960.00      3,310.33        649.67
       3           4,356.00      3,483.03        872.97
"""

from __future__ import annotations

from weekly_forecaster.engine.aggregate import AggregateSummary, CostBreakdownEntry
from weekly_forecaster.engine.portfolio import PortfolioSummary
from weekly_forecaster.engine.reconcile import ReconciledWeek
from weekly_forecaster.engine.risk import RiskSummary
from weekly_forecaster.engine.scenario import ScenarioTotals
from weekly_forecaster.engine.variance import VarianceRecord
from weekly_forecaster.models.projection import WeeklyProjection
from weekly_forecaster.taxonomy.finance_taxonomy import WeekSource

_SOURCE_TAGS = {
    WeekSource.ACTUAL: "[A]",
    WeekSource.ACTUAL_PLACEHOLDER: "[P]",
    WeekSource.PROJECTED: "",
}


def _money(v: float) -> str:
    return f"{v:,.2f}"


def format_projection_table(series: list[WeeklyProjection]) -> str:
    """Weekly projection: traffic, revenue, costs, profit, cumulative profit."""
    header = (
        f"  {'Week':>4}  {'Traffic':>9}  {'Revenue':>12}  {'Costs':>12}  "
        f"{'Profit':>12}  {'Cumulative':>12}"
    )
    lines = ["", "=== Weekly Projection ===", header, "  " + "-" * (len(header) - 2)]
    for row in series:
        lines.append(
            f"  {row.week:>4}  {row.foot_traffic:>9,.0f}  {_money(row.total_revenue):>12}  "
            f"{_money(row.total_costs):>12}  {_money(row.weekly_profit):>12}  "
            f"{_money(row.cumulative_profit):>12}"
        )
    if not series:
        lines.append("  (empty projection)")
    return "\n".join(lines)


def format_reconciled_table(reconciled: list[ReconciledWeek]) -> str:
    """Reconciled view showing the value each week contributes."""
    header = f"  {'Week':>4}  {'Src':<3}  {'Revenue':>12}  {'Cost':>12}  {'Profit':>12}"
    lines = ["", "=== Reconciled Weeks ===", header, "  " + "-" * (len(header) - 2)]
    for w in reconciled:
        lines.append(
            f"  {w.week:>4}  {_SOURCE_TAGS[w.source]:<3}  "
            f"{_money(w.contributing('revenue')):>12}  "
            f"{_money(w.contributing('cost')):>12}  "
            f"{_money(w.contributing('profit')):>12}"
        )
    lines.append("  [A] actual record   [P] forced-actual placeholder")
    return "\n".join(lines)


def format_summary(summary: AggregateSummary) -> str:
    return "\n".join([
        "",
        "=== Summary ===",
        f"  Total revenue:   {_money(summary.total_revenue):>14}",
        f"  Total cost:      {_money(summary.total_cost):>14}",
        f"  Total profit:    {_money(summary.total_profit):>14}",
        f"  Profit margin:   {summary.profit_margin:>13.2f}%",
        f"  Weeks actual / projected: {summary.actual_weeks} / {summary.projected_weeks}",
    ])


def format_cost_breakdown(entries: list[CostBreakdownEntry]) -> str:
    lines = ["", "=== Cost Breakdown ==="]
    shown = [e for e in entries if e.amount > 0]
    if not shown:
        lines.append("  (no cost data)")
        return "\n".join(lines)
    for e in shown:
        lines.append(f"  {e.category.value:<10}  {_money(e.amount):>14}  {e.share_pct:>6.1f}%")
    return "\n".join(lines)


def format_variance_table(records: list[VarianceRecord]) -> str:
    header = (
        f"  {'Week':>4}  {'Metric':<20}  {'Projected':>12}  {'Actual':>12}  "
        f"{'Variance':>12}  {'Var %':>8}"
    )
    lines = ["", "=== Variance (actual - projected) ===", header, "  " + "-" * (len(header) - 2)]
    if not records:
        lines.append("  (no weeks with actual records)")
    for r in records:
        lines.append(
            f"  {r.week:>4}  {r.metric:<20}  {_money(r.projected_value):>12}  "
            f"{_money(r.actual_value):>12}  {_money(r.absolute_variance):>12}  "
            f"{r.percent_variance:>+7.1f}%"
        )
    return "\n".join(lines)


def format_scenario_totals(totals: list[ScenarioTotals], baseline: str, scenario: str) -> str:
    header = f"  {'Metric':<12}  {'Baseline':>14}  {'Scenario':>14}  {'Diff':>14}  {'Diff %':>8}"
    lines = [
        "",
        f"=== Scenario Comparison: {scenario} vs {baseline} ===",
        header,
        "  " + "-" * (len(header) - 2),
    ]
    for t in totals:
        lines.append(
            f"  {t.metric:<12}  {_money(t.baseline_total):>14}  {_money(t.scenario_total):>14}  "
            f"{_money(t.diff):>14}  {t.diff_pct:>+7.1f}%"
        )
    return "\n".join(lines)


def format_portfolio(summary: PortfolioSummary) -> str:
    """Per-product totals followed by portfolio headline figures."""
    header = f"  {'Product':<24}  {'Weeks':>5}  {'Revenue':>14}  {'Costs':>14}  {'Profit':>14}"
    lines = ["", "=== Portfolio ===", header, "  " + "-" * (len(header) - 2)]
    if not summary.products:
        lines.append("  (no products)")
    for p in summary.products:
        lines.append(
            f"  {p.name:<24}  {p.weeks:>5}  {_money(p.total_revenue):>14}  "
            f"{_money(p.total_costs):>14}  {_money(p.total_profit):>14}"
        )
    lines += [
        "",
        f"  Total profit:     {_money(summary.total_profit):>14}",
        f"  Profit margin:    {summary.profit_margin:>13.2f}%",
        f"  Average profit:   {_money(summary.average_profit):>14}",
        f"  Total visitors:   {summary.total_visitors:>14,.0f}",
        f"  Most profitable:  {summary.most_profitable or '-'}",
        f"  Least profitable: {summary.least_profitable or '-'}",
    ]
    return "\n".join(lines)


def format_risk_summary(summary: RiskSummary) -> str:
    return "\n".join([
        "",
        "=== Risk Summary ===",
        f"  Risks (high / medium / low): {summary.total} "
        f"({summary.high} / {summary.medium} / {summary.low})",
        f"  Financial impact:      {_money(summary.total_financial_impact):>14}",
        f"  High-risk impact:      {_money(summary.high_financial_impact):>14}",
    ])
