"""
Tests for scenario comparison.

What we test
------------
1. Self-comparison yields all-zero diffs.
2. diff = scenario - baseline; diff_pct guarded for zero baselines.
3. Length or week-indexing mismatch raises ValidationError.
4. scenario_totals() rolls diffs up per metric.
"""

from __future__ import annotations

import pytest

from weekly_forecaster.engine.errors import ValidationError
from weekly_forecaster.engine.projection import generate_projections
from weekly_forecaster.engine.scenario import (
    SCENARIO_METRICS,
    compare_scenarios,
    scenario_totals,
)


def _with_base(config, base: float):
    growth = config.growth.model_copy(update={"base_attendance": base})
    return config.model_copy(update={"growth": growth})


def test_self_comparison_is_zero(full_config) -> None:
    series = generate_projections(full_config)
    diffs = compare_scenarios(series, series)

    assert len(diffs) == len(series) * len(SCENARIO_METRICS)
    assert all(d.diff == 0 for d in diffs)
    assert all(d.diff_pct == 0 for d in diffs)


def test_diff_direction(ticket_only_config) -> None:
    baseline = generate_projections(ticket_only_config)
    scenario = generate_projections(_with_base(ticket_only_config, 150))
    diffs = compare_scenarios(baseline, scenario)

    week1_revenue = next(d for d in diffs if d.week == 1 and d.metric == "revenue")
    assert week1_revenue.baseline_value == pytest.approx(2000.0)
    assert week1_revenue.scenario_value == pytest.approx(3000.0)
    assert week1_revenue.diff == pytest.approx(1000.0)
    assert week1_revenue.diff_pct == pytest.approx(50.0)

    week1_attendance = next(d for d in diffs if d.week == 1 and d.metric == "attendance")
    assert week1_attendance.diff == pytest.approx(50.0)


def test_zero_baseline_diff_pct_is_zero(ticket_only_config) -> None:
    baseline = generate_projections(_with_base(ticket_only_config, 0))
    scenario = generate_projections(ticket_only_config)
    diffs = compare_scenarios(baseline, scenario)
    revenue = [d for d in diffs if d.metric == "revenue"]
    assert all(d.diff > 0 for d in revenue)
    assert all(d.diff_pct == 0.0 for d in revenue)


def test_length_mismatch_raises(ticket_only_config) -> None:
    baseline = generate_projections(ticket_only_config)
    scenario = generate_projections(ticket_only_config.model_copy(update={"horizon_weeks": 8}))
    with pytest.raises(ValidationError, match="length"):
        compare_scenarios(baseline, scenario)


def test_week_indexing_mismatch_raises(ticket_only_config) -> None:
    baseline = generate_projections(ticket_only_config)
    shifted = [row.model_copy(update={"week": row.week + 1}) for row in baseline]
    with pytest.raises(ValidationError, match="week indexing"):
        compare_scenarios(baseline, shifted)


def test_scenario_totals(ticket_only_config) -> None:
    baseline = generate_projections(ticket_only_config)
    scenario = generate_projections(_with_base(ticket_only_config, 150))
    totals = {t.metric: t for t in scenario_totals(compare_scenarios(baseline, scenario))}

    assert list(totals) == list(SCENARIO_METRICS)
    revenue = totals["revenue"]
    assert revenue.baseline_total == pytest.approx(sum(r.total_revenue for r in baseline))
    assert revenue.scenario_total == pytest.approx(sum(r.total_revenue for r in scenario))
    assert revenue.diff_pct == pytest.approx(50.0)


def test_scenario_totals_empty() -> None:
    totals = scenario_totals([])
    assert all(t.baseline_total == 0 and t.diff_pct == 0 for t in totals)
