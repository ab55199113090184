"""
Projected-vs-actual variance per week and metric.

Only weeks present in BOTH the series and the actuals are analysed; weeks
without a record (or records beyond the series) are skipped, not errors.

Metrics
-------
revenue, cost, profit            Always, from the record's headline figures.
attendance                       When the record carries ``foot_traffic``.
revenue.<stream>                 For each stream in ``revenue_by_stream``.
cost.<category>                  For each category in ``costs_by_category``.

Formulae
--------
absolute_variance = actual - projected
percent_variance  = absolute_variance / |projected| x 100   (projected != 0)
                  = 0                                        (projected == 0)

The absolute value in the denominator keeps the sign meaningful when the
projected baseline is negative (e.g. a forecast loss): beating a forecast
loss is a positive variance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from weekly_forecaster.models.actuals import ActualRecord, ActualsLedger
from weekly_forecaster.models.projection import (
    METRIC_ATTENDANCE,
    METRIC_COST,
    METRIC_PROFIT,
    METRIC_REVENUE,
    WeeklyProjection,
)


@dataclass(frozen=True)
class VarianceRecord:
    """One projected-vs-actual comparison.

    Attributes:
        week:              1-based week index.
        metric:            Metric name (see module docstring).
        projected_value:   Forecast value.
        actual_value:      Observed value.
        absolute_variance: actual - projected.
        percent_variance:  absolute / |projected| x 100, or 0.
    """

    week: int
    metric: str
    projected_value: float
    actual_value: float
    absolute_variance: float
    percent_variance: float


def variance_pct(actual: float, projected: float) -> float:
    """Percent variance with a zero-guarded, sign-safe denominator."""
    if projected == 0:
        return 0.0
    return (actual - projected) / abs(projected) * 100.0


def _record(week: int, metric: str, projected: float, actual: float) -> VarianceRecord:
    return VarianceRecord(
        week=week,
        metric=metric,
        projected_value=projected,
        actual_value=actual,
        absolute_variance=actual - projected,
        percent_variance=variance_pct(actual, projected),
    )


def _week_variances(row: WeeklyProjection, actual: ActualRecord) -> list[VarianceRecord]:
    out = [
        _record(row.week, METRIC_REVENUE, row.total_revenue, actual.revenue),
        _record(row.week, METRIC_COST, row.total_costs, actual.expenses),
        _record(row.week, METRIC_PROFIT, row.weekly_profit, actual.profit),
    ]
    if actual.foot_traffic is not None:
        out.append(_record(row.week, METRIC_ATTENDANCE, row.foot_traffic, actual.foot_traffic))
    for stream, value in (actual.revenue_by_stream or {}).items():
        out.append(_record(row.week, f"revenue.{stream.value}", row.revenue_for(stream), value))
    for category, value in (actual.costs_by_category or {}).items():
        out.append(_record(row.week, f"cost.{category.value}", row.cost_for(category), value))
    return out


def analyze_variance(
    series: list[WeeklyProjection],
    actuals: ActualsLedger | Iterable[ActualRecord],
) -> list[VarianceRecord]:
    """Compute variance records for every week present in both inputs.

    Args:
        series:  Forecast rows.
        actuals: Actual records (list or ledger; last record per week wins).

    Returns:
        Records ordered by week, then by metric in the order listed in the
        module docstring.
    """
    ledger = actuals if isinstance(actuals, ActualsLedger) else ActualsLedger.from_records(actuals)
    records: list[VarianceRecord] = []
    for row in series:
        actual = ledger.get(row.week)
        if actual is None:
            continue
        records.extend(_week_variances(row, actual))
    return records
