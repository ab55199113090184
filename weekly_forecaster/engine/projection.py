"""
Projection generator: ``ProjectionConfig`` → ordered weekly forecast series.

For each week w = 1..horizon::

    factor            = growth_factor(model, w, rate)            (>= 0)
    avg_attendance    = base_attendance * factor
    foot_traffic      = avg_attendance * events_per_week
    revenue[stream]   = foot_traffic * unit_price * conversion_rate
    marketing         = Σ channel budgets  |  weekly_budget * factor
    staffing          = roster sum  |  flat (+ per-event extras)
    event             = Σ items (x events_per_week when per_event)
    setup             = week-1 charges + amortised shares
    cogs              = Σ revenue[stream] * pct + units * per_unit
    total_costs       = marketing + staffing + event + setup + cogs
    weekly_profit     = total_revenue - total_costs
    cumulative_profit = running sum of weekly_profit

``generate_projections`` is pure: identical configs always yield identical
series, so callers may memoise on the config freely.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from weekly_forecaster.engine.costs import (
    event_cost,
    marketing_cost,
    setup_cost_schedule,
    staffing_cost,
    stream_cogs,
    stream_revenue,
)
from weekly_forecaster.engine.errors import ConfigurationError
from weekly_forecaster.engine.growth import growth_factor, resolve_growth_model
from weekly_forecaster.models.config import ProjectionConfig
from weekly_forecaster.models.projection import WeeklyProjection
from weekly_forecaster.taxonomy.finance_taxonomy import RevenueStream

log = logging.getLogger(__name__)


# ── Validation ────────────────────────────────────────────────────────────────


def validate_projection_config(config: ProjectionConfig) -> None:
    """Raise ``ConfigurationError`` if ``config`` cannot be projected.

    Intended to be called once when a config is saved, so fatal
    misconfiguration surfaces there instead of on every downstream read.
    ``generate_projections`` calls it too.

    Raises:
        ConfigurationError: Non-positive horizon, malformed roles or cost items.
        UnknownGrowthModelError: Growth model tag not registered.
    """
    if config.horizon_weeks <= 0:
        raise ConfigurationError(
            f"horizon_weeks must be a positive integer, got {config.horizon_weeks}."
        )

    resolve_growth_model(config.growth.model)

    costs = config.costs
    for role in costs.staff_roles:
        if not role.role.strip():
            raise ConfigurationError("Staff role name must not be empty.")
        if role.count < 0:
            raise ConfigurationError(
                f"Staff role '{role.role}' has negative count ({role.count})."
            )
        if role.cost_per_person < 0:
            raise ConfigurationError(
                f"Staff role '{role.role}' has negative cost_per_person ({role.cost_per_person})."
            )

    for label, items in (("event_costs", costs.event_costs), ("setup_costs", costs.setup_costs)):
        for item in items:
            if item.amount < 0:
                raise ConfigurationError(
                    f"{label} item '{item.name}' has negative amount ({item.amount})."
                )

    dep = costs.marketing.depreciation
    if dep.enabled and dep.start_week < 1:
        raise ConfigurationError(
            f"Marketing depreciation start_week must be >= 1, got {dep.start_week}."
        )


def parse_projection_config(raw: dict[str, Any]) -> ProjectionConfig:
    """Build a ``ProjectionConfig`` from a raw dict (TOML/JSON payload).

    Raises:
        ConfigurationError: If the payload fails model validation.
    """
    try:
        return ProjectionConfig.model_validate(raw)
    except PydanticValidationError as exc:
        raise ConfigurationError(f"Malformed projection config: {exc}") from exc


# ── Generator ─────────────────────────────────────────────────────────────────


def generate_projections(config: ProjectionConfig) -> list[WeeklyProjection]:
    """Generate the weekly forecast series for ``config``.

    Args:
        config: Complete, fully-resolved projection assumptions.

    Returns:
        ``config.horizon_weeks`` rows, weeks 1..horizon in order.

    Raises:
        ConfigurationError: See ``validate_projection_config``; also raised
            when the growth factor or any weekly total overflows.
    """
    validate_projection_config(config)

    horizon = config.horizon_weeks
    growth = config.growth
    model = resolve_growth_model(growth.model)
    setup_schedule = setup_cost_schedule(config.costs.setup_costs, horizon)
    staffing = staffing_cost(config.costs, config.is_event_driven)
    events = event_cost(config.costs.event_costs, growth.events_per_week)

    series: list[WeeklyProjection] = []
    cumulative = 0.0

    for week in range(1, horizon + 1):
        factor = growth_factor(model, week, growth.rate)
        avg_attendance = growth.base_attendance * factor
        foot_traffic = avg_attendance * growth.events_per_week

        revenue_by_stream: dict[RevenueStream, float] = {}
        cogs_total = 0.0
        for stream in RevenueStream:
            amount = stream_revenue(config.revenue, stream, foot_traffic)
            revenue_by_stream[stream] = amount
            cogs_total += stream_cogs(
                config.costs.cogs, config.revenue, stream, amount, foot_traffic
            )
        total_revenue = sum(revenue_by_stream.values())

        marketing = marketing_cost(config.costs.marketing, factor, week)
        setup = setup_schedule[week - 1]
        total_costs = marketing + staffing + events + setup + cogs_total

        weekly_profit = total_revenue - total_costs
        cumulative += weekly_profit
        if not all(map(math.isfinite, (total_revenue, total_costs, cumulative))):
            raise ConfigurationError(
                f"Projection values are not finite at week {week}; "
                "check attendance, prices and the growth rate."
            )

        series.append(
            WeeklyProjection(
                week=week,
                growth_factor=factor,
                average_event_attendance=avg_attendance,
                foot_traffic=foot_traffic,
                ticket_revenue=revenue_by_stream[RevenueStream.TICKET],
                fnb_revenue=revenue_by_stream[RevenueStream.FNB],
                merchandise_revenue=revenue_by_stream[RevenueStream.MERCHANDISE],
                digital_revenue=revenue_by_stream[RevenueStream.DIGITAL],
                total_revenue=total_revenue,
                marketing_costs=marketing,
                staffing_costs=staffing,
                event_costs=events,
                setup_costs=setup,
                cogs=cogs_total,
                total_costs=total_costs,
                weekly_profit=weekly_profit,
                cumulative_profit=cumulative,
            )
        )

    log.debug(
        "Generated %d-week projection (model=%s, rate=%s): cumulative profit %.2f",
        horizon, model.value, growth.rate, cumulative,
    )
    return series
