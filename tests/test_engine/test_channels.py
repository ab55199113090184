"""
Tests for marketing channel KPIs.

What we test
------------
1. Per-week KPIs: CTR, conversion rate, CPC, CPA, ROI.
2. Zero denominators resolve to 0.
3. summarize_channels() sums raw figures first and recomputes ratios.
"""

from __future__ import annotations

from datetime import date

import pytest

from weekly_forecaster.engine.channels import channel_metrics, summarize_channels
from weekly_forecaster.models.actuals import ActualRecord, ChannelPerformance


def _record(week: int, *perf: ChannelPerformance) -> ActualRecord:
    return ActualRecord(
        week=week,
        date=date(2025, 3, 7),
        revenue=0,
        expenses=0,
        channel_performance=list(perf),
    )


_SOCIAL_W1 = ChannelPerformance(
    channel_id="social", spend=600, revenue=900, impressions=20000, clicks=400, conversions=36,
)
_EMAIL_W1 = ChannelPerformance(
    channel_id="email", spend=150, revenue=300, impressions=3000, clicks=150, conversions=12,
)


def test_week_kpis() -> None:
    rows = channel_metrics([_record(1, _SOCIAL_W1)])
    assert len(rows) == 1
    social = rows[0]
    assert social.week == 1
    assert social.ctr == pytest.approx(2.0)
    assert social.conversion_rate == pytest.approx(9.0)
    assert social.cpc == pytest.approx(1.5)
    assert social.cpa == pytest.approx(600 / 36)
    assert social.roi == pytest.approx(50.0)


def test_zero_denominators() -> None:
    idle = ChannelPerformance(channel_id="print")
    row = channel_metrics([_record(1, idle)])[0]
    assert (row.ctr, row.conversion_rate, row.cpc, row.cpa, row.roi) == (0.0, 0.0, 0.0, 0.0, 0.0)


def test_rows_ordered_by_week() -> None:
    rows = channel_metrics([_record(2, _EMAIL_W1), _record(1, _SOCIAL_W1, _EMAIL_W1)])
    assert [(r.week, r.channel_id) for r in rows] == [(1, "social"), (1, "email"), (2, "email")]


def test_summarize_channels_recomputes_ratios() -> None:
    social_w2 = ChannelPerformance(
        channel_id="social", spend=400, revenue=100, impressions=5000, clicks=100, conversions=4,
    )
    totals = summarize_channels([_record(1, _SOCIAL_W1, _EMAIL_W1), _record(2, social_w2)])

    assert [t.channel_id for t in totals] == ["email", "social"]
    social = totals[1]
    assert social.week is None
    assert social.spend == pytest.approx(1000.0)
    assert social.clicks == 500
    assert social.ctr == pytest.approx(500 / 25000 * 100)
    assert social.roi == pytest.approx(0.0)


def test_summarize_channels_empty() -> None:
    assert summarize_channels([]) == []
