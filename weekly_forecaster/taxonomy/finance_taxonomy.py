"""
Financial taxonomy for weekly projections.

Four closed vocabularies describe every projected or actual week:
  - ``RevenueStream``: where money comes in.
  - ``CostCategory`` : where money goes out.
  - ``GrowthModel``  : the law governing week-over-week attendance growth.
  - ``WeekSource``   : how a reconciled week's values were derived.

``StaffingMode`` and ``ForecastType`` are configuration switches used by the
projection generator. ``RiskLevel`` grades risk likelihood and impact.

Usage example::

    from weekly_forecaster.taxonomy.finance_taxonomy import RevenueStream

    stream = RevenueStream.TICKET

This module has NO imports from any other ``weekly_forecaster`` package.
"""

from enum import StrEnum


class RevenueStream(StrEnum):
    """Revenue line produced by foot traffic."""

    TICKET = "ticket"
    """Admission / ticket sales."""

    FNB = "fnb"
    """Food and beverage spend."""

    MERCHANDISE = "merchandise"
    """Physical merchandise sold on site."""

    DIGITAL = "digital"
    """Digital add-ons, downloads, or online sales."""


class CostCategory(StrEnum):
    """Cost line of a weekly projection."""

    MARKETING = "marketing"
    STAFFING = "staffing"
    EVENT = "event"
    SETUP = "setup"
    COGS = "cogs"


class GrowthModel(StrEnum):
    """Mathematical law for the weekly growth factor.

    Config files may spell the tag in any case (``"Exponential"``); the
    projection generator normalises before lookup.
    """

    EXPONENTIAL = "exponential"
    """(1 + rate) ** (week - 1)"""

    LINEAR = "linear"
    """1 + rate * (week - 1)"""

    FLAT = "flat"
    """Constant 1.0; no growth."""


class WeekSource(StrEnum):
    """Derivation tag for a reconciled week."""

    PROJECTED = "projected"
    """No actual record; only the forecast is available."""

    ACTUAL = "actual"
    """An actual record exists for the week."""

    ACTUAL_PLACEHOLDER = "actual_placeholder"
    """Forced to actual by the caller; effective values mirror the forecast."""


class StaffingMode(StrEnum):
    """How weekly staffing cost is computed."""

    SIMPLE = "simple"
    """Flat weekly staff cost (plus per-event extras for event-driven forecasts)."""

    DETAILED = "detailed"
    """Sum of ``count * cost_per_person`` over a role roster."""


class ForecastType(StrEnum):
    """Whether the forecast is calendar-driven or event-driven."""

    WEEKLY = "weekly"
    PER_EVENT = "per-event"


class RiskLevel(StrEnum):
    """Three-point scale used for both risk likelihood and risk impact.

    Config and data files may spell the tag in any case (``"High"``).
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
