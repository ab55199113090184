"""
Aggregate metrics over a reconciled series.

Each week contributes exactly one value per metric: the effective value when
the week is actual (recorded or placeholder), otherwise the projected value.
Never both. A forced-actual placeholder therefore replaces, and does not add
to, its week's projection.

profit_margin = total_profit / total_revenue x 100 when total_revenue > 0,
else 0. Zero denominators resolve to 0 rather than NaN or infinity.
"""

from __future__ import annotations

from dataclasses import dataclass

from weekly_forecaster.engine.reconcile import ReconciledWeek
from weekly_forecaster.models.projection import (
    METRIC_COST,
    METRIC_PROFIT,
    METRIC_REVENUE,
    WeeklyProjection,
)
from weekly_forecaster.taxonomy.finance_taxonomy import CostCategory


@dataclass(frozen=True)
class AggregateSummary:
    """Summary totals for a reconciled series.

    Attributes:
        total_revenue:   Sum of contributing revenue.
        total_cost:      Sum of contributing cost.
        total_profit:    Sum of contributing profit.
        profit_margin:   Percentage (e.g. 12.5 = 12.5 %); 0 when revenue <= 0.
        actual_weeks:    Weeks that contributed effective values.
        projected_weeks: Weeks that contributed projected values.
    """

    total_revenue: float
    total_cost: float
    total_profit: float
    profit_margin: float
    actual_weeks: int = 0
    projected_weeks: int = 0


@dataclass(frozen=True)
class CostBreakdownEntry:
    """Share of one cost category over the whole horizon.

    Attributes:
        category:  Cost category.
        amount:    Total over the horizon.
        share_pct: amount / total costs x 100; 0 when total costs are 0.
    """

    category: CostCategory
    amount: float
    share_pct: float


def profit_margin(total_profit: float, total_revenue: float) -> float:
    return (total_profit / total_revenue) * 100.0 if total_revenue > 0 else 0.0


def summarize(reconciled: list[ReconciledWeek]) -> AggregateSummary:
    """Reduce a reconciled series to totals and margin."""
    total_revenue = sum(w.contributing(METRIC_REVENUE) for w in reconciled)
    total_cost    = sum(w.contributing(METRIC_COST)    for w in reconciled)
    total_profit  = sum(w.contributing(METRIC_PROFIT)  for w in reconciled)
    n_actual = sum(1 for w in reconciled if w.is_actual)

    return AggregateSummary(
        total_revenue=total_revenue,
        total_cost=total_cost,
        total_profit=total_profit,
        profit_margin=profit_margin(total_profit, total_revenue),
        actual_weeks=n_actual,
        projected_weeks=len(reconciled) - n_actual,
    )


def cost_breakdown(series: list[WeeklyProjection]) -> list[CostBreakdownEntry]:
    """Per-category cost totals and shares over a forecast series.

    Returns one entry per ``CostCategory`` in declaration order, including
    zero-amount categories (callers filter for display).
    """
    amounts = {
        category: sum(row.cost_for(category) for row in series)
        for category in CostCategory
    }
    total = sum(amounts.values())
    return [
        CostBreakdownEntry(
            category=category,
            amount=amount,
            share_pct=(amount / total) * 100.0 if total > 0 else 0.0,
        )
        for category, amount in amounts.items()
    ]
