"""
Export adapters: engine results → flat row dicts.

The export layer (spreadsheets, PDFs, BI tools) owns file formats; these
helpers only reshape already-final engine values into flat ``list[dict]``
rows with stable column names. Nothing is recomputed and no precedence is
re-derived: a reconciled row carries exactly what the reconciler decided.

Wide variance and scenario tables pivot the long per-metric records into one
row per week, with ``<metric>_projected`` / ``<metric>_actual`` /
``<metric>_variance`` / ``<metric>_variance_pct`` columns (or ``baseline_`` /
``scenario_`` / ``_diff`` / ``_diff_pct`` for scenarios).
"""

from __future__ import annotations

from dataclasses import asdict

from weekly_forecaster.engine.aggregate import AggregateSummary, CostBreakdownEntry
from weekly_forecaster.engine.channels import ChannelMetrics
from weekly_forecaster.engine.portfolio import PortfolioSummary
from weekly_forecaster.engine.reconcile import ReconciledWeek
from weekly_forecaster.engine.risk import RiskSummary
from weekly_forecaster.engine.scenario import ScenarioDiff
from weekly_forecaster.engine.variance import VarianceRecord
from weekly_forecaster.models.projection import WeeklyProjection


def flatten_projections_for_export(series: list[WeeklyProjection]) -> list[dict]:
    """One row per week with every projection field as a column."""
    return [row.model_dump() for row in series]


def flatten_reconciled_for_export(reconciled: list[ReconciledWeek]) -> list[dict]:
    """One row per week; ``source`` as its string tag, effective fields may be None."""
    rows: list[dict] = []
    for week in reconciled:
        row = asdict(week)
        row["source"] = week.source.value
        row["is_actual"] = week.is_actual
        rows.append(row)
    return rows


def flatten_summary_for_export(summary: AggregateSummary) -> dict:
    return asdict(summary)


def flatten_cost_breakdown_for_export(entries: list[CostBreakdownEntry]) -> list[dict]:
    return [
        {"category": e.category.value, "amount": e.amount, "share_pct": e.share_pct}
        for e in entries
    ]


def flatten_variance_for_export(records: list[VarianceRecord]) -> list[dict]:
    """Pivot long variance records into one wide row per week."""
    by_week: dict[int, dict] = {}
    for r in records:
        row = by_week.setdefault(r.week, {"week": r.week})
        prefix = r.metric.replace(".", "_")
        row[f"{prefix}_projected"]    = r.projected_value
        row[f"{prefix}_actual"]       = r.actual_value
        row[f"{prefix}_variance"]     = r.absolute_variance
        row[f"{prefix}_variance_pct"] = r.percent_variance
    return [by_week[w] for w in sorted(by_week)]


def flatten_scenario_for_export(diffs: list[ScenarioDiff]) -> list[dict]:
    """Pivot long scenario diffs into one wide row per week."""
    by_week: dict[int, dict] = {}
    for d in diffs:
        row = by_week.setdefault(d.week, {"week": d.week})
        row[f"baseline_{d.metric}"]  = d.baseline_value
        row[f"scenario_{d.metric}"]  = d.scenario_value
        row[f"{d.metric}_diff"]      = d.diff
        row[f"{d.metric}_diff_pct"]  = d.diff_pct
    return [by_week[w] for w in sorted(by_week)]


def flatten_channels_for_export(metrics: list[ChannelMetrics]) -> list[dict]:
    """One row per (week, channel); ``week`` is ``""`` for horizon totals."""
    rows: list[dict] = []
    for m in metrics:
        row = asdict(m)
        if row["week"] is None:
            row["week"] = ""
        rows.append(row)
    return rows


def flatten_portfolio_for_export(summary: PortfolioSummary) -> list[dict]:
    """One row per product, then a ``(portfolio)`` totals row."""
    rows = [asdict(p) for p in summary.products]
    rows.append({
        "name": "(portfolio)",
        "weeks": len(summary.weekly),
        "total_revenue": summary.total_revenue,
        "total_costs": summary.total_costs,
        "total_profit": summary.total_profit,
        "visitors": summary.total_visitors,
    })
    return rows


def flatten_portfolio_weeks_for_export(summary: PortfolioSummary) -> list[dict]:
    return [asdict(w) for w in summary.weekly]


def flatten_risk_summary_for_export(summary: RiskSummary) -> dict:
    return asdict(summary)
