"""
Marketing channel KPIs from actual records.

Per (week, channel) row::

  ctr             clicks / impressions x 100
  conversion_rate conversions / clicks x 100
  cpc             spend / clicks
  cpa             spend / conversions
  roi             (revenue - spend) / spend x 100

Every ratio resolves to 0 when its denominator is 0.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable

from weekly_forecaster.models.actuals import ActualRecord, ActualsLedger, ChannelPerformance


@dataclass(frozen=True)
class ChannelMetrics:
    """Derived KPIs for one channel over one week (or a whole horizon).

    ``week`` is ``None`` for horizon-level rows from ``summarize_channels``.
    """

    week: int | None
    channel_id: str
    spend: float
    revenue: float
    impressions: int
    clicks: int
    conversions: int
    ctr: float
    conversion_rate: float
    cpc: float
    cpa: float
    roi: float


def _ratio(num: float, den: float) -> float:
    return num / den if den else 0.0


def _metrics(week: int | None, perf: ChannelPerformance) -> ChannelMetrics:
    return ChannelMetrics(
        week=week,
        channel_id=perf.channel_id,
        spend=perf.spend,
        revenue=perf.revenue,
        impressions=perf.impressions,
        clicks=perf.clicks,
        conversions=perf.conversions,
        ctr=_ratio(perf.clicks, perf.impressions) * 100.0,
        conversion_rate=_ratio(perf.conversions, perf.clicks) * 100.0,
        cpc=_ratio(perf.spend, perf.clicks),
        cpa=_ratio(perf.spend, perf.conversions),
        roi=_ratio(perf.revenue - perf.spend, perf.spend) * 100.0,
    )


def channel_metrics(actuals: ActualsLedger | Iterable[ActualRecord]) -> list[ChannelMetrics]:
    """KPIs for every channel entry of every actual record, ordered by week."""
    ledger = actuals if isinstance(actuals, ActualsLedger) else ActualsLedger.from_records(actuals)
    return [
        _metrics(record.week, perf)
        for record in ledger.records()
        for perf in record.channel_performance
    ]


def summarize_channels(actuals: ActualsLedger | Iterable[ActualRecord]) -> list[ChannelMetrics]:
    """Aggregate channel performance across all weeks, one row per channel.

    Raw counts and money are summed first; ratios are recomputed from the
    sums, not averaged.
    """
    ledger = actuals if isinstance(actuals, ActualsLedger) else ActualsLedger.from_records(actuals)
    sums: dict[str, dict[str, float]] = defaultdict(lambda: defaultdict(float))
    for record in ledger.records():
        for perf in record.channel_performance:
            acc = sums[perf.channel_id]
            acc["spend"] += perf.spend
            acc["revenue"] += perf.revenue
            acc["impressions"] += perf.impressions
            acc["clicks"] += perf.clicks
            acc["conversions"] += perf.conversions

    rows: list[ChannelMetrics] = []
    for channel_id in sorted(sums):
        acc = sums[channel_id]
        total = ChannelPerformance(
            channel_id=channel_id,
            spend=acc["spend"],
            revenue=acc["revenue"],
            impressions=int(acc["impressions"]),
            clicks=int(acc["clicks"]),
            conversions=int(acc["conversions"]),
        )
        rows.append(_metrics(None, total))
    return rows
