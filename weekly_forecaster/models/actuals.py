"""
Actual (observed) weekly results.

``ActualRecord`` is one completed week as reported by the business: headline
revenue and expenses, plus optional breakdowns and marketing channel
performance. Records are keyed uniquely by ``week``; ``ActualsLedger`` holds
that keyed view and applies the "later write replaces earlier" rule.

Range checks (``week`` within the forecast horizon) belong to the engine and
are raised as ``ValidationError`` by the reconciler, since the horizon is
only known once a series exists.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field

from weekly_forecaster.taxonomy.finance_taxonomy import CostCategory, RevenueStream


class ChannelPerformance(BaseModel):
    """Observed performance of one marketing channel in one week."""

    model_config = ConfigDict(frozen=True)

    channel_id: str
    spend: float = 0.0
    revenue: float = 0.0
    impressions: int = 0
    clicks: int = 0
    conversions: int = 0


class ActualRecord(BaseModel):
    """Observed financial results for one week.

    Attributes:
        week:                1-based week index this record reports on.
        date:                Calendar date the week closed (or was reported).
        revenue:             Total revenue actually earned.
        expenses:            Total expenses actually incurred.
        foot_traffic:        Observed attendance, if tracked.
        revenue_by_stream:   Optional per-stream revenue breakdown.
        costs_by_category:   Optional per-category cost breakdown.
        channel_performance: Marketing channel results for the week.
        notes:               Free-text annotation.
    """

    model_config = ConfigDict(frozen=True)

    week: int
    date: date
    revenue: float
    expenses: float
    foot_traffic: Optional[float] = None
    revenue_by_stream: Optional[dict[RevenueStream, float]] = None
    costs_by_category: Optional[dict[CostCategory, float]] = None
    channel_performance: list[ChannelPerformance] = Field(default_factory=list)
    notes: Optional[str] = None

    @property
    def profit(self) -> float:
        return self.revenue - self.expenses


class ActualsLedger:
    """Actual records keyed by week; the last record written for a week wins.

    The ledger never mutates in place: ``with_record`` returns a new ledger,
    so a ledger handed to the engine cannot change under it.

    Example::

        ledger = ActualsLedger.from_records([r_week1, r_week2])
        ledger = ledger.with_record(r_week1_corrected)
        ledger.get(1) is r_week1_corrected   # True
    """

    __slots__ = ("_by_week",)

    def __init__(self, by_week: Optional[dict[int, ActualRecord]] = None) -> None:
        self._by_week: dict[int, ActualRecord] = dict(by_week or {})

    @classmethod
    def from_records(cls, records: Iterable[ActualRecord]) -> "ActualsLedger":
        by_week: dict[int, ActualRecord] = {}
        for record in records:
            by_week[record.week] = record
        return cls(by_week)

    def with_record(self, record: ActualRecord) -> "ActualsLedger":
        by_week = dict(self._by_week)
        by_week[record.week] = record
        return ActualsLedger(by_week)

    def without_week(self, week: int) -> "ActualsLedger":
        by_week = dict(self._by_week)
        by_week.pop(week, None)
        return ActualsLedger(by_week)

    def get(self, week: int) -> Optional[ActualRecord]:
        return self._by_week.get(week)

    def weeks(self) -> list[int]:
        return sorted(self._by_week)

    def records(self) -> list[ActualRecord]:
        """All records in ascending week order."""
        return [self._by_week[w] for w in sorted(self._by_week)]

    def __contains__(self, week: object) -> bool:
        return week in self._by_week

    def __iter__(self) -> Iterator[ActualRecord]:
        return iter(self.records())

    def __len__(self) -> int:
        return len(self._by_week)

    def __repr__(self) -> str:
        return f"ActualsLedger(weeks={self.weeks()})"
