"""
Risk register entries.

A ``RiskItem`` grades one identified risk on the three-point ``RiskLevel``
scale for both likelihood and impact, with an estimated financial exposure.
Scoring and banding live in ``weekly_forecaster.engine.risk``.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from weekly_forecaster.taxonomy.finance_taxonomy import RiskLevel


class RiskItem(BaseModel):
    """One identified risk.

    Attributes:
        name:             Short description.
        likelihood:       How likely the risk is to occur.
        impact:           How severe it would be.
        financial_impact: Estimated cost if it occurs.
        category:         Free-form grouping (``"Financial"``, ``"Operational"``).
        mitigation:       Planned mitigation, if any.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    likelihood: RiskLevel = RiskLevel.LOW
    impact: RiskLevel = RiskLevel.LOW
    financial_impact: float = 0.0
    category: Optional[str] = None
    mitigation: Optional[str] = None

    @field_validator("likelihood", "impact", mode="before")
    @classmethod
    def normalise_level(cls, v):
        return v.strip().lower() if isinstance(v, str) else v
