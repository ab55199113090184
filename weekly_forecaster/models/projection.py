"""
Weekly projection output model.

A forecast series is a ``list[WeeklyProjection]`` with ``week`` running
1..horizon with no gaps. Every row is frozen: consumers (presentation,
export) read the values as final and never mutate or re-derive them.

Invariant enforced by the generator, not by this model::

    cumulative_profit[1] == weekly_profit[1]
    cumulative_profit[w] == cumulative_profit[w - 1] + weekly_profit[w]
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from weekly_forecaster.taxonomy.finance_taxonomy import CostCategory, RevenueStream

# Headline metric names shared by variance and scenario comparison.
METRIC_REVENUE = "revenue"
METRIC_COST = "cost"
METRIC_PROFIT = "profit"
METRIC_ATTENDANCE = "attendance"


class WeeklyProjection(BaseModel):
    """Forecast figures for a single week.

    Attributes:
        week:                     1-based week index.
        growth_factor:            Growth factor applied this week (>= 0).
        average_event_attendance: Base attendance x growth factor.
        foot_traffic:             Average attendance x events per week.
        ticket_revenue:           Ticket stream revenue.
        fnb_revenue:              Food & beverage stream revenue.
        merchandise_revenue:      Merchandise stream revenue.
        digital_revenue:          Digital stream revenue.
        total_revenue:            Sum of stream revenues.
        marketing_costs:          Marketing line.
        staffing_costs:           Staffing line.
        event_costs:              Recurring event cost line.
        setup_costs:              One-off / amortised setup line.
        cogs:                     Cost of goods sold across all streams.
        total_costs:              Sum of the five cost lines.
        weekly_profit:            total_revenue - total_costs.
        cumulative_profit:        Running sum of weekly_profit.
    """

    model_config = ConfigDict(frozen=True)

    week: int
    growth_factor: float
    average_event_attendance: float
    foot_traffic: float
    ticket_revenue: float = 0.0
    fnb_revenue: float = 0.0
    merchandise_revenue: float = 0.0
    digital_revenue: float = 0.0
    total_revenue: float
    marketing_costs: float = 0.0
    staffing_costs: float = 0.0
    event_costs: float = 0.0
    setup_costs: float = 0.0
    cogs: float = 0.0
    total_costs: float
    weekly_profit: float
    cumulative_profit: float

    def revenue_for(self, stream: RevenueStream) -> float:
        return getattr(self, f"{stream.value}_revenue")

    def cost_for(self, category: CostCategory) -> float:
        if category == CostCategory.COGS:
            return self.cogs
        return getattr(self, f"{category.value}_costs")

    def metric(self, name: str) -> float:
        """Return a headline metric (``revenue``, ``cost``, ``profit``, ``attendance``).

        Raises:
            KeyError: For an unknown metric name.
        """
        if name == METRIC_REVENUE:
            return self.total_revenue
        if name == METRIC_COST:
            return self.total_costs
        if name == METRIC_PROFIT:
            return self.weekly_profit
        if name == METRIC_ATTENDANCE:
            return self.foot_traffic
        raise KeyError(f"Unknown projection metric '{name}'.")
