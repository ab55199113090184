"""
Risk scoring.

Each level maps to a weight (low 1, medium 2, high 3) and a risk's score is
likelihood weight x impact weight, so scores fall in 1..9::

    score >= 6      high
    3 <= score < 6  medium
    score < 3       low
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from weekly_forecaster.models.risk import RiskItem
from weekly_forecaster.taxonomy.finance_taxonomy import RiskLevel

LEVEL_WEIGHTS: dict[RiskLevel, int] = {
    RiskLevel.LOW:    1,
    RiskLevel.MEDIUM: 2,
    RiskLevel.HIGH:   3,
}

HIGH_THRESHOLD = 6
MEDIUM_THRESHOLD = 3


@dataclass(frozen=True)
class RiskSummary:
    """Counts per band and financial exposure for a set of risks.

    Attributes:
        total:                  Number of risks.
        high:                   Risks scoring >= 6.
        medium:                 Risks scoring 3..5.
        low:                    Risks scoring < 3.
        total_financial_impact: Sum of every risk's financial impact.
        high_financial_impact:  Sum over high-band risks only.
    """

    total: int
    high: int
    medium: int
    low: int
    total_financial_impact: float
    high_financial_impact: float


def _level(tag: RiskLevel | str) -> RiskLevel:
    return RiskLevel(str(tag).strip().lower())


def risk_score(likelihood: RiskLevel | str, impact: RiskLevel | str) -> int:
    """Likelihood weight x impact weight, 1..9.

    Raises:
        ValueError: If either tag is not a ``RiskLevel``.
    """
    return LEVEL_WEIGHTS[_level(likelihood)] * LEVEL_WEIGHTS[_level(impact)]


def risk_band(score: int) -> RiskLevel:
    if score >= HIGH_THRESHOLD:
        return RiskLevel.HIGH
    if score >= MEDIUM_THRESHOLD:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def summarize_risks(risks: Iterable[RiskItem]) -> RiskSummary:
    """Count risks per band and total their financial impact."""
    counts = {level: 0 for level in RiskLevel}
    total_impact = 0.0
    high_impact = 0.0
    for risk in risks:
        band = risk_band(risk_score(risk.likelihood, risk.impact))
        counts[band] += 1
        total_impact += risk.financial_impact
        if band is RiskLevel.HIGH:
            high_impact += risk.financial_impact

    return RiskSummary(
        total=sum(counts.values()),
        high=counts[RiskLevel.HIGH],
        medium=counts[RiskLevel.MEDIUM],
        low=counts[RiskLevel.LOW],
        total_financial_impact=total_impact,
        high_financial_impact=high_impact,
    )
