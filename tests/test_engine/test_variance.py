"""
Tests for projected-vs-actual variance.

What we test
------------
1. Only weeks with an actual record produce variance records.
2. absolute_variance = actual - projected exactly.
3. percent_variance uses |projected| and is 0 when projected is 0.
4. Attendance and breakdown metrics appear only when the record carries them.
5. Records beyond the series are skipped rather than raising.
"""

from __future__ import annotations

from datetime import date

import pytest

from weekly_forecaster.engine.projection import generate_projections
from weekly_forecaster.engine.variance import analyze_variance, variance_pct
from weekly_forecaster.models.actuals import ActualRecord
from weekly_forecaster.taxonomy.finance_taxonomy import CostCategory, RevenueStream


def test_only_weeks_with_actuals(ticket_only_config, week1_actual) -> None:
    records = analyze_variance(generate_projections(ticket_only_config), [week1_actual])
    assert {r.week for r in records} == {1}
    assert [r.metric for r in records] == ["revenue", "cost", "profit"]


def test_headline_variance_exact(ticket_only_config, week1_actual) -> None:
    series = generate_projections(ticket_only_config)
    by_metric = {r.metric: r for r in analyze_variance(series, [week1_actual])}

    revenue = by_metric["revenue"]
    assert revenue.projected_value == series[0].total_revenue
    assert revenue.actual_value == 1813
    assert revenue.absolute_variance == 1813 - series[0].total_revenue
    assert revenue.percent_variance == pytest.approx(-9.35)

    profit = by_metric["profit"]
    assert profit.actual_value == pytest.approx(-2194.0)
    assert profit.absolute_variance == pytest.approx(-2194.0 - series[0].weekly_profit)


def test_no_actuals_no_records(ticket_only_config) -> None:
    assert analyze_variance(generate_projections(ticket_only_config), []) == []


def test_record_beyond_series_is_skipped(ticket_only_config) -> None:
    far = ActualRecord(week=40, date=date(2025, 12, 1), revenue=1, expenses=1)
    assert analyze_variance(generate_projections(ticket_only_config), [far]) == []


def test_breakdown_metrics(full_config) -> None:
    actual = ActualRecord(
        week=2,
        date=date(2025, 3, 14),
        revenue=4000,
        expenses=3000,
        foot_traffic=120,
        revenue_by_stream={RevenueStream.TICKET: 2500},
        costs_by_category={CostCategory.MARKETING: 900},
    )
    series = generate_projections(full_config)
    records = analyze_variance(series, [actual])
    metrics = [r.metric for r in records]

    assert metrics == [
        "revenue", "cost", "profit", "attendance", "revenue.ticket", "cost.marketing",
    ]
    by_metric = {r.metric: r for r in records}
    assert by_metric["attendance"].projected_value == pytest.approx(110.0)
    assert by_metric["attendance"].absolute_variance == pytest.approx(10.0)
    assert by_metric["revenue.ticket"].projected_value == pytest.approx(2200.0)
    assert by_metric["cost.marketing"].projected_value == pytest.approx(1100.0)
    assert by_metric["cost.marketing"].absolute_variance == pytest.approx(-200.0)


@pytest.mark.parametrize("actual,projected,expected", [
    (110.0, 100.0, 10.0),
    (90.0, 100.0, -10.0),
    (-50.0, -100.0, 50.0),     # beating a forecast loss is positive
    (-150.0, -100.0, -50.0),
    (25.0, 0.0, 0.0),
])
def test_variance_pct(actual, projected, expected) -> None:
    assert variance_pct(actual, projected) == pytest.approx(expected)
