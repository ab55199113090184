"""
Scenario comparison: diff two independently generated forecast series.

Both series must have the same length and the same week indexing, position
by position; otherwise ``ValidationError``. Metrics are compared
independently:

  revenue     total_revenue
  cost        total_costs
  profit      weekly_profit
  attendance  foot_traffic

diff     = scenario - baseline
diff_pct = diff / baseline x 100 when baseline != 0, else 0
"""

from __future__ import annotations

from dataclasses import dataclass

from weekly_forecaster.engine.errors import ValidationError
from weekly_forecaster.models.projection import (
    METRIC_ATTENDANCE,
    METRIC_COST,
    METRIC_PROFIT,
    METRIC_REVENUE,
    WeeklyProjection,
)

SCENARIO_METRICS: tuple[str, ...] = (
    METRIC_REVENUE, METRIC_COST, METRIC_PROFIT, METRIC_ATTENDANCE,
)


@dataclass(frozen=True)
class ScenarioDiff:
    """Baseline-vs-scenario comparison for one week and metric."""

    week: int
    metric: str
    baseline_value: float
    scenario_value: float
    diff: float
    diff_pct: float


@dataclass(frozen=True)
class ScenarioTotals:
    """Horizon totals for one metric across both scenarios."""

    metric: str
    baseline_total: float
    scenario_total: float
    diff: float
    diff_pct: float


def _diff_pct(diff: float, baseline: float) -> float:
    return (diff / baseline) * 100.0 if baseline != 0 else 0.0


def _check_aligned(baseline: list[WeeklyProjection], scenario: list[WeeklyProjection]) -> None:
    if len(baseline) != len(scenario):
        raise ValidationError(
            f"Scenario series length ({len(scenario)}) does not match "
            f"baseline length ({len(baseline)})."
        )
    for b, s in zip(baseline, scenario):
        if b.week != s.week:
            raise ValidationError(
                f"Scenario week indexing differs from baseline: "
                f"baseline week {b.week} paired with scenario week {s.week}."
            )


def compare_scenarios(
    baseline: list[WeeklyProjection],
    scenario: list[WeeklyProjection],
) -> list[ScenarioDiff]:
    """Per-week, per-metric differences between two forecast series.

    Raises:
        ValidationError: Length or week-indexing mismatch.
    """
    _check_aligned(baseline, scenario)
    diffs: list[ScenarioDiff] = []
    for b, s in zip(baseline, scenario):
        for metric in SCENARIO_METRICS:
            bv = b.metric(metric)
            sv = s.metric(metric)
            diff = sv - bv
            diffs.append(
                ScenarioDiff(
                    week=b.week,
                    metric=metric,
                    baseline_value=bv,
                    scenario_value=sv,
                    diff=diff,
                    diff_pct=_diff_pct(diff, bv),
                )
            )
    return diffs


def scenario_totals(diffs: list[ScenarioDiff]) -> list[ScenarioTotals]:
    """Roll per-week diffs up to horizon totals per metric."""
    totals: list[ScenarioTotals] = []
    for metric in SCENARIO_METRICS:
        rows = [d for d in diffs if d.metric == metric]
        bt = sum(d.baseline_value for d in rows)
        st = sum(d.scenario_value for d in rows)
        totals.append(
            ScenarioTotals(
                metric=metric,
                baseline_total=bt,
                scenario_total=st,
                diff=st - bt,
                diff_pct=_diff_pct(st - bt, bt),
            )
        )
    return totals
