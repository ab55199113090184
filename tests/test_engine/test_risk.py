"""
Tests for risk scoring.

What we test
------------
1. Score = likelihood weight x impact weight over the full 3 x 3 grid.
2. Band thresholds: high >= 6, medium 3..5, low < 3.
3. Summary counts and financial impact totals.
4. Raw tags are accepted in any case; unknown tags raise.
"""

from __future__ import annotations

import pydantic
import pytest

from weekly_forecaster.config import AppConfig
from weekly_forecaster.engine.risk import risk_band, risk_score, summarize_risks
from weekly_forecaster.engine.service import ForecastEngine
from weekly_forecaster.models.risk import RiskItem
from weekly_forecaster.taxonomy.finance_taxonomy import RiskLevel

L, M, H = RiskLevel.LOW, RiskLevel.MEDIUM, RiskLevel.HIGH


@pytest.mark.parametrize("likelihood,impact,score", [
    (L, L, 1), (L, M, 2), (L, H, 3),
    (M, L, 2), (M, M, 4), (M, H, 6),
    (H, L, 3), (H, M, 6), (H, H, 9),
])
def test_score_grid(likelihood, impact, score) -> None:
    assert risk_score(likelihood, impact) == score


@pytest.mark.parametrize("score,band", [
    (1, L), (2, L), (3, M), (4, M), (5, M), (6, H), (9, H),
])
def test_band_thresholds(score, band) -> None:
    assert risk_band(score) is band


def test_raw_tags_accepted() -> None:
    assert risk_score("High", " medium ") == 6


def test_unknown_tag_raises() -> None:
    with pytest.raises(ValueError):
        risk_score("severe", "low")


def test_model_normalises_level_case() -> None:
    risk = RiskItem(name="Supplier delay", likelihood="High", impact="MEDIUM")
    assert risk.likelihood is H
    assert risk.impact is M


def test_model_rejects_unknown_level() -> None:
    with pytest.raises(pydantic.ValidationError):
        RiskItem(name="x", likelihood="certain")


@pytest.fixture
def register() -> list[RiskItem]:
    return [
        RiskItem(name="Venue cancels", likelihood=M, impact=H, financial_impact=5000),
        RiskItem(name="Low turnout", likelihood=H, impact=H, financial_impact=3000),
        RiskItem(name="Staff shortage", likelihood=M, impact=M, financial_impact=800),
        RiskItem(name="Bad weather", likelihood=L, impact=M, financial_impact=200),
    ]


def test_summary_counts_and_impact(register) -> None:
    summary = summarize_risks(register)
    assert summary.total == 4
    assert (summary.high, summary.medium, summary.low) == (2, 1, 1)
    assert summary.total_financial_impact == pytest.approx(9000.0)
    assert summary.high_financial_impact == pytest.approx(8000.0)


def test_empty_register() -> None:
    summary = summarize_risks([])
    assert summary.total == 0
    assert summary.total_financial_impact == 0.0


def test_engine_risks(register) -> None:
    summary = ForecastEngine(AppConfig()).risks(register).unwrap()
    assert summary.high == 2
