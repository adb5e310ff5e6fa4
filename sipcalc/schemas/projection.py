"""Data contracts for the projection, goal and comparison endpoints.

Numeric inputs are clamped into the ranges the calculator UI offers rather
than rejected; only missing, non-numeric or non-finite values fail
validation.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sipcalc.core.projection import DEFAULT_COMPOUNDING_FREQUENCY, ProjectionMode
from sipcalc.models import ContributionConfig

AMOUNT_RANGE = (500.0, 10_000_000.0)
RATE_RANGE = (1.0, 30.0)
YEARS_RANGE = (1.0, 40.0)
ESCALATION_RANGE = (0.0, 30.0)


def clamp(value: float, bounds: tuple) -> float:
    low, high = bounds
    return min(max(value, low), high)


class ContributionInputs(BaseModel):
    """Fields shared by every request that describes a contribution."""

    model_config = ConfigDict(extra="forbid")

    amount: float = Field(..., allow_inf_nan=False, description="Monthly contribution or principal.")
    annualRatePercent: float = Field(
        ...,
        allow_inf_nan=False,
        description="Nominal annual rate in percent (e.g. 12 for 12%).",
    )
    escalationPercent: float = Field(
        0.0,
        allow_inf_nan=False,
        description="Annual step-up of the monthly contribution, in percent.",
    )

    @field_validator("amount")
    @classmethod
    def _clamp_amount(cls, value: float) -> float:
        return clamp(value, AMOUNT_RANGE)

    @field_validator("annualRatePercent")
    @classmethod
    def _clamp_rate(cls, value: float) -> float:
        return clamp(value, RATE_RANGE)

    @field_validator("escalationPercent")
    @classmethod
    def _clamp_escalation(cls, value: float) -> float:
        return clamp(value, ESCALATION_RANGE)


class ProjectionRequest(ContributionInputs):
    """Inputs for a single projection in any mode."""

    mode: ProjectionMode = ProjectionMode.RECURRING
    horizonYears: float = Field(..., allow_inf_nan=False, description="Projection length in years.")
    compoundingFrequency: int = Field(
        DEFAULT_COMPOUNDING_FREQUENCY,
        ge=1,
        le=365,
        description="Compounding periods per year (fixed-deposit mode only).",
    )

    @field_validator("horizonYears")
    @classmethod
    def _clamp_years(cls, value: float) -> float:
        return clamp(value, YEARS_RANGE)

    def to_config(self) -> ContributionConfig:
        return ContributionConfig(
            amount=self.amount,
            annualRatePercent=self.annualRatePercent,
            horizonYears=self.horizonYears,
            escalationPercent=self.escalationPercent,
            compoundingFrequency=self.compoundingFrequency,
        )


class GoalRequest(ContributionInputs):
    """How long a monthly contribution needs to reach ``targetValue``."""

    targetValue: float = Field(..., gt=0, allow_inf_nan=False)
    maxYears: Optional[int] = Field(
        None,
        ge=1,
        le=100,
        description="Search bound in years; the server default applies when omitted.",
    )


class GoalResponse(BaseModel):
    yearsToTarget: Optional[int]
    reachable: bool
    maxYears: int


class RequiredContributionRequest(BaseModel):
    """Monthly contribution needed to reach ``targetValue`` in ``horizonYears``."""

    model_config = ConfigDict(extra="forbid")

    targetValue: float = Field(..., gt=0, allow_inf_nan=False)
    annualRatePercent: float = Field(..., allow_inf_nan=False)
    horizonYears: float = Field(..., allow_inf_nan=False)
    escalationPercent: float = Field(0.0, allow_inf_nan=False)

    @field_validator("annualRatePercent")
    @classmethod
    def _clamp_rate(cls, value: float) -> float:
        return clamp(value, RATE_RANGE)

    @field_validator("horizonYears")
    @classmethod
    def _clamp_years(cls, value: float) -> float:
        return clamp(value, YEARS_RANGE)

    @field_validator("escalationPercent")
    @classmethod
    def _clamp_escalation(cls, value: float) -> float:
        return clamp(value, ESCALATION_RANGE)


class RequiredContributionResponse(BaseModel):
    requiredMonthlyAmount: float
    horizonYears: float


class ComparisonScenarioRequest(ProjectionRequest):
    label: str = Field(..., max_length=80)


class ComparisonRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    scenarios: List[ComparisonScenarioRequest] = Field(default_factory=list)
