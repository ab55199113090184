"""
Shared pytest fixtures for the Weekly Forecaster test suite.

Provides:
  - ``ticket_only_config``: 12-week exponential config with only the ticket
    stream populated (base 100, 1 event/week, 25 x 0.8).
  - ``full_config``: every cost line populated; mirrors
    ``config/fixtures/example_projection.toml``.
  - ``week1_actual``: an actual record for week 1 (1813 revenue, 4007 expenses).
  - ``fixtures_dir``: path to ``config/fixtures``.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from weekly_forecaster.models.actuals import ActualRecord
from weekly_forecaster.models.config import (
    CogsConfig,
    CostConfig,
    EventCostItem,
    GrowthConfig,
    MarketingConfig,
    ProjectionConfig,
    RevenueConfig,
    RevenueStreamConfig,
    SetupCostItem,
)
from weekly_forecaster.taxonomy.finance_taxonomy import RevenueStream

_REPO_ROOT = Path(__file__).parent.parent


@pytest.fixture
def fixtures_dir() -> Path:
    return _REPO_ROOT / "config" / "fixtures"


@pytest.fixture
def ticket_only_config() -> ProjectionConfig:
    """Horizon 12, exponential 10 %, base attendance 100, ticket 25 x 0.8."""
    return ProjectionConfig(
        horizon_weeks=12,
        growth=GrowthConfig(
            base_attendance=100,
            events_per_week=1,
            model="Exponential",
            rate=0.10,
        ),
        revenue=RevenueConfig(
            ticket=RevenueStreamConfig(unit_price=25, conversion_rate=0.8),
        ),
    )


@pytest.fixture
def full_config() -> ProjectionConfig:
    """All revenue streams and cost lines populated."""
    return ProjectionConfig(
        name="baseline",
        horizon_weeks=12,
        growth=GrowthConfig(
            base_attendance=100,
            events_per_week=1,
            model="exponential",
            rate=0.10,
        ),
        revenue=RevenueConfig(
            ticket=RevenueStreamConfig(unit_price=25, conversion_rate=0.8),
            fnb=RevenueStreamConfig(unit_price=15, conversion_rate=0.6),
            merchandise=RevenueStreamConfig(unit_price=30, conversion_rate=0.2),
            digital=RevenueStreamConfig(unit_price=10, conversion_rate=0.1),
        ),
        costs=CostConfig(
            marketing=MarketingConfig(weekly_budget=1000),
            weekly_staff_cost=1000,
            event_costs=[EventCostItem(name="Venue Rental", amount=500)],
            setup_costs=[SetupCostItem(name="Initial Setup", amount=1000, amortize=True)],
            cogs=CogsConfig(
                percentages={RevenueStream.FNB: 0.30},
                per_unit={RevenueStream.MERCHANDISE: 15},
            ),
        ),
    )


@pytest.fixture
def week1_actual() -> ActualRecord:
    """Week-1 actual: revenue 1813, expenses 4007 (profit -2194)."""
    return ActualRecord(
        week=1,
        date=date(2025, 3, 7),
        revenue=1813,
        expenses=4007,
    )
