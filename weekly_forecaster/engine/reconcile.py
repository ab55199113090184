"""
Actuals reconciliation: overlay actual records onto a forecast series.

Precedence per week
-------------------
1. An ``ActualRecord`` exists for the week
     → ``WeekSource.ACTUAL``; effective values come from the record,
       effective_profit = revenue - expenses.
2. The week is in ``forced_actual_weeks``
     → ``WeekSource.ACTUAL_PLACEHOLDER``; effective values are set EQUAL to
       the projected values. This is a stand-in, not a second data source:
       aggregation counts it once, in place of the projection.
3. Otherwise
     → ``WeekSource.PROJECTED``; effective values are ``None``.

Projected values are always copied verbatim from the series, so any consumer
can pick "what happened" or "what was forecast" per week without re-deriving
precedence.

The reconciled view is never stored. It is recomputed from
(series, actuals) on every read; recomputing is always correct.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from weekly_forecaster.engine.errors import ValidationError
from weekly_forecaster.models.actuals import ActualRecord, ActualsLedger
from weekly_forecaster.models.projection import (
    METRIC_COST,
    METRIC_PROFIT,
    METRIC_REVENUE,
    WeeklyProjection,
)
from weekly_forecaster.taxonomy.finance_taxonomy import WeekSource

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconciledWeek:
    """Dual-track view of one week: effective (if actual) and projected.

    Attributes:
        week:              1-based week index.
        source:            How the week's effective values were derived.
        effective_revenue: Actual (or placeholder) revenue; None when projected.
        effective_cost:    Actual (or placeholder) cost; None when projected.
        effective_profit:  Actual (or placeholder) profit; None when projected.
        projected_revenue: Forecast total revenue.
        projected_cost:    Forecast total costs.
        projected_profit:  Forecast weekly profit.
    """

    week: int
    source: WeekSource
    effective_revenue: Optional[float]
    effective_cost: Optional[float]
    effective_profit: Optional[float]
    projected_revenue: float
    projected_cost: float
    projected_profit: float

    @property
    def is_actual(self) -> bool:
        return self.source != WeekSource.PROJECTED

    def projected(self, metric: str) -> float:
        return _pick(metric, self.projected_revenue, self.projected_cost, self.projected_profit)

    def effective(self, metric: str) -> Optional[float]:
        return _pick(metric, self.effective_revenue, self.effective_cost, self.effective_profit)

    def contributing(self, metric: str) -> float:
        """The single value this week contributes to totals for ``metric``."""
        if self.is_actual:
            value = self.effective(metric)
            if value is not None:
                return value
        return self.projected(metric)


def _pick(metric: str, revenue, cost, profit):
    if metric == METRIC_REVENUE:
        return revenue
    if metric == METRIC_COST:
        return cost
    if metric == METRIC_PROFIT:
        return profit
    raise KeyError(f"Unknown reconciled metric '{metric}'.")


def _ledger(actuals: ActualsLedger | Iterable[ActualRecord]) -> ActualsLedger:
    if isinstance(actuals, ActualsLedger):
        return actuals
    return ActualsLedger.from_records(actuals)


def check_actuals_in_range(actuals: ActualsLedger | Iterable[ActualRecord], horizon: int) -> None:
    """Raise ``ValidationError`` if any record's week falls outside [1, horizon]."""
    out_of_range = [w for w in _ledger(actuals).weeks() if not 1 <= w <= horizon]
    if out_of_range:
        raise ValidationError(
            f"Actual records reference weeks {out_of_range} outside the "
            f"forecast horizon [1, {horizon}]."
        )


def reconcile(
    series: list[WeeklyProjection],
    actuals: ActualsLedger | Iterable[ActualRecord],
    forced_actual_weeks: Iterable[int] = frozenset(),
) -> list[ReconciledWeek]:
    """Merge actual records into a forecast series.

    Args:
        series:              Forecast rows from ``generate_projections``.
        actuals:             Actual records (list or ledger). For duplicate
                             weeks in a plain list, the last record wins.
        forced_actual_weeks: Weeks to treat as actual even without a record.

    Returns:
        One ``ReconciledWeek`` per series row, in series order.

    Raises:
        ValidationError: If an actual record's week is outside [1, len(series)].
    """
    ledger = _ledger(actuals)
    check_actuals_in_range(ledger, len(series))
    forced = frozenset(forced_actual_weeks)

    reconciled: list[ReconciledWeek] = []
    for row in series:
        record = ledger.get(row.week)
        if record is not None:
            source = WeekSource.ACTUAL
            eff_rev: Optional[float] = record.revenue
            eff_cost: Optional[float] = record.expenses
            eff_profit: Optional[float] = record.revenue - record.expenses
        elif row.week in forced:
            source = WeekSource.ACTUAL_PLACEHOLDER
            eff_rev = row.total_revenue
            eff_cost = row.total_costs
            eff_profit = row.weekly_profit
        else:
            source = WeekSource.PROJECTED
            eff_rev = eff_cost = eff_profit = None

        reconciled.append(
            ReconciledWeek(
                week=row.week,
                source=source,
                effective_revenue=eff_rev,
                effective_cost=eff_cost,
                effective_profit=eff_profit,
                projected_revenue=row.total_revenue,
                projected_cost=row.total_costs,
                projected_profit=row.weekly_profit,
            )
        )

    log.debug(
        "Reconciled %d weeks: %d actual, %d placeholder",
        len(reconciled),
        sum(1 for r in reconciled if r.source == WeekSource.ACTUAL),
        sum(1 for r in reconciled if r.source == WeekSource.ACTUAL_PLACEHOLDER),
    )
    return reconciled
