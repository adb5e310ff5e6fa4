from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ContributionConfig(BaseModel):
    """Inputs for a single projection run.

    ``amount`` is the monthly contribution in recurring mode and the
    principal otherwise. Rates are percentages (12 means 12%).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    amount: float = Field(ge=0)
    annualRatePercent: float = Field(ge=0)
    horizonYears: float = Field(ge=0)
    escalationPercent: float = Field(default=0.0, ge=0)
    compoundingFrequency: int = Field(default=4, ge=1)


class YearlyPoint(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int = Field(ge=1)
    investedToDate: float
    totalValue: float


class ProjectionResult(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    investedAmount: float
    estimatedReturns: float
    totalValue: float
    yearlyData: List[YearlyPoint] = Field(default_factory=list)
