"""
Cost-line calculations for the projection generator.

Every function here is pure and computes one cost line for one week (or, for
setup costs, the whole horizon at once).

Amortisation
------------
An amortised setup item is split in whole cents::

    cents          = round(amount * 100)
    share, rest    = divmod(cents, horizon)
    week 1         = share + rest
    weeks 2..N     = share

The remainder lands on week 1 only; the weekly amounts sum exactly to the
original amount.

Marketing depreciation
----------------------
When enabled, marketing from ``start_week`` onwards is multiplied by
``(1 - weekly_rate) ** (week - start_week + 1)`` and floored at
``minimum_amount``. The floor never lifts a line that was already below it.
"""

from __future__ import annotations

from weekly_forecaster.models.config import (
    CogsConfig,
    CostConfig,
    EventCostItem,
    MarketingConfig,
    RevenueConfig,
    SetupCostItem,
)
from weekly_forecaster.taxonomy.finance_taxonomy import RevenueStream, StaffingMode

_CENTS = 100


def marketing_cost(marketing: MarketingConfig, growth_factor: float, week: int) -> float:
    """Weekly marketing line, including the optional depreciation policy."""
    if marketing.channels:
        base = sum(channel.budget for channel in marketing.channels)
    else:
        base = marketing.weekly_budget * growth_factor
    return _apply_depreciation(base, marketing, week)


def _apply_depreciation(amount: float, marketing: MarketingConfig, week: int) -> float:
    dep = marketing.depreciation
    if not dep.enabled or week < dep.start_week:
        return amount
    periods = week - dep.start_week + 1
    depreciated = amount * (1.0 - dep.weekly_rate) ** periods
    return min(amount, max(dep.minimum_amount, depreciated))


def staffing_cost(costs: CostConfig, event_driven: bool) -> float:
    """Weekly staffing line.

    Detailed mode sums the role roster. Simple mode uses the flat weekly
    cost, plus ``additional_staff_per_event * staff_cost_per_person`` when the
    forecast is event-driven. Detailed mode with an empty roster falls back
    to the simple calculation.
    """
    if costs.staffing_mode == StaffingMode.DETAILED and costs.staff_roles:
        return sum(role.count * role.cost_per_person for role in costs.staff_roles)
    total = costs.weekly_staff_cost
    if event_driven:
        total += costs.additional_staff_per_event * costs.staff_cost_per_person
    return total


def event_cost(items: list[EventCostItem], events_per_week: float) -> float:
    """Weekly recurring event cost: flat, or per event when ``per_event`` is set."""
    return sum(
        item.amount * events_per_week if item.per_event else item.amount
        for item in items
    )


def setup_cost_schedule(items: list[SetupCostItem], horizon: int) -> list[float]:
    """Setup cost for each week 1..horizon (index 0 = week 1).

    Non-amortised items are charged in full in week 1. Amortised items are
    spread in whole cents with the remainder on week 1.
    """
    schedule = [0.0] * horizon
    if horizon <= 0:
        return schedule
    for item in items:
        if not item.amortize:
            schedule[0] += item.amount
            continue
        cents = int(round(item.amount * _CENTS))
        share, rest = divmod(cents, horizon)
        schedule[0] += (share + rest) / _CENTS
        for i in range(1, horizon):
            schedule[i] += share / _CENTS
    return schedule


def stream_revenue(revenue: RevenueConfig, stream: RevenueStream, foot_traffic: float) -> float:
    """foot_traffic x unit_price x conversion_rate for one stream."""
    params = revenue.stream(stream)
    return foot_traffic * params.unit_price * params.conversion_rate


def stream_cogs(
    cogs: CogsConfig,
    revenue: RevenueConfig,
    stream: RevenueStream,
    stream_revenue_amount: float,
    foot_traffic: float,
) -> float:
    """COGS for one stream: percentage of revenue plus per-unit cost of units sold."""
    pct = cogs.percentages.get(stream, 0.0)
    per_unit = cogs.per_unit.get(stream, 0.0)
    total = stream_revenue_amount * pct
    if per_unit:
        units = foot_traffic * revenue.stream(stream).conversion_rate
        total += units * per_unit
    return total
