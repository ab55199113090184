"""
Projection configuration models.

``ProjectionConfig`` is the complete, fully-resolved set of assumptions the
projection generator needs: growth, per-stream revenue, cost lines, and the
forecast horizon.

All models are frozen. An edit replaces the whole object (e.g. via
``config.model_copy(update={...})``) and the forecast is regenerated from
scratch; there is no incremental patching of an existing series.

Numeric fields that a caller may leave out default to 0. Rates and
percentages are fractions (``0.10`` = 10 %) and are NOT clamped to [0, 1]:
out-of-range values are accepted and used as given.

Semantic checks that the engine owns (non-positive horizon, unknown growth
model tag, malformed staff roles or cost items) are not pydantic
validators. They are raised as engine ``ConfigurationError``s by
``weekly_forecaster.engine.projection.validate_projection_config``.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from weekly_forecaster.taxonomy.finance_taxonomy import (
    ForecastType,
    RevenueStream,
    StaffingMode,
)

# ── Growth ────────────────────────────────────────────────────────────────────


class GrowthConfig(BaseModel):
    """Attendance growth assumptions.

    Attributes:
        base_attendance: Average attendance per event in week 1.
        events_per_week: Number of events held each week; defaults to 1 (a
                         weekly forecast is one event per week).
        model:           Growth model tag (``"exponential"``, ``"linear"``,
                         ``"flat"``; case-insensitive).
        rate:            Weekly growth rate as a fraction.
    """

    model_config = ConfigDict(frozen=True)

    base_attendance: float = 0.0
    events_per_week: float = 1.0
    model: str = "exponential"
    rate: float = 0.0


# ── Revenue ───────────────────────────────────────────────────────────────────


class RevenueStreamConfig(BaseModel):
    """Unit price and conversion rate for one revenue stream."""

    model_config = ConfigDict(frozen=True)

    unit_price: float = 0.0
    conversion_rate: float = 0.0


class RevenueConfig(BaseModel):
    """Per-stream revenue parameters; one field per ``RevenueStream``."""

    model_config = ConfigDict(frozen=True)

    ticket: RevenueStreamConfig = RevenueStreamConfig()
    fnb: RevenueStreamConfig = RevenueStreamConfig()
    merchandise: RevenueStreamConfig = RevenueStreamConfig()
    digital: RevenueStreamConfig = RevenueStreamConfig()

    def stream(self, stream: RevenueStream) -> RevenueStreamConfig:
        return getattr(self, stream.value)


# ── Costs ─────────────────────────────────────────────────────────────────────


class MarketingChannel(BaseModel):
    """A marketing channel with a fixed weekly budget."""

    model_config = ConfigDict(frozen=True)

    name: str
    budget: float = 0.0
    target_audience: Optional[str] = None
    expected_roi: float = 0.0


class MarketingDepreciation(BaseModel):
    """Week-over-week decay of the marketing line.

    From ``start_week`` onwards the marketing amount is multiplied by
    ``(1 - weekly_rate) ** (week - start_week + 1)`` and floored at
    ``minimum_amount``.
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    start_week: int = 1
    weekly_rate: float = 0.0
    minimum_amount: float = 0.0


class MarketingConfig(BaseModel):
    """Marketing budget model.

    When ``channels`` is non-empty the weekly marketing cost is the sum of
    channel budgets. Otherwise it is ``weekly_budget`` scaled by the week's
    growth factor.
    """

    model_config = ConfigDict(frozen=True)

    weekly_budget: float = 0.0
    channels: list[MarketingChannel] = Field(default_factory=list)
    depreciation: MarketingDepreciation = MarketingDepreciation()


class StaffRole(BaseModel):
    """One line of a detailed staffing roster."""

    model_config = ConfigDict(frozen=True)

    role: str
    count: int = 1
    cost_per_person: float = 0.0


class EventCostItem(BaseModel):
    """Recurring event cost; multiplied by events per week when ``per_event``."""

    model_config = ConfigDict(frozen=True)

    name: str
    amount: float = 0.0
    per_event: bool = False


class SetupCostItem(BaseModel):
    """One-off setup cost.

    Charged entirely in week 1, unless ``amortize`` is set, in which case it
    is spread evenly across the horizon.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    amount: float = 0.0
    amortize: bool = False


class CogsConfig(BaseModel):
    """Cost of goods sold per revenue stream.

    Attributes:
        percentages: Fraction of stream revenue, e.g. ``{"fnb": 0.30}``.
        per_unit:    Cost per unit sold, where units = foot traffic x
                     conversion rate, e.g. ``{"merchandise": 15.0}``.
    """

    model_config = ConfigDict(frozen=True)

    percentages: dict[RevenueStream, float] = Field(default_factory=dict)
    per_unit: dict[RevenueStream, float] = Field(default_factory=dict)


class CostConfig(BaseModel):
    """All cost parameters of a projection."""

    model_config = ConfigDict(frozen=True)

    marketing: MarketingConfig = MarketingConfig()
    staffing_mode: StaffingMode = StaffingMode.SIMPLE
    weekly_staff_cost: float = 0.0
    additional_staff_per_event: float = 0.0
    staff_cost_per_person: float = 0.0
    staff_roles: list[StaffRole] = Field(default_factory=list)
    event_costs: list[EventCostItem] = Field(default_factory=list)
    setup_costs: list[SetupCostItem] = Field(default_factory=list)
    cogs: CogsConfig = CogsConfig()


# ── Top level ─────────────────────────────────────────────────────────────────


class ProjectionConfig(BaseModel):
    """Complete projection assumptions for one product.

    Attributes:
        horizon_weeks: Number of weeks to project (checked by the engine).
        forecast_type: ``"weekly"`` or ``"per-event"`` (event-driven).
        growth:        Attendance growth assumptions.
        revenue:       Per-stream revenue parameters.
        costs:         Cost parameters.
        name:          Optional label (e.g. product or scenario name).
    """

    model_config = ConfigDict(frozen=True)

    horizon_weeks: int = 12
    forecast_type: ForecastType = ForecastType.WEEKLY
    growth: GrowthConfig = GrowthConfig()
    revenue: RevenueConfig = RevenueConfig()
    costs: CostConfig = CostConfig()
    name: Optional[str] = None

    @property
    def is_event_driven(self) -> bool:
        return self.forecast_type == ForecastType.PER_EVENT
