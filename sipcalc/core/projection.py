from __future__ import annotations

import math
from enum import Enum
from typing import List, Tuple

from sipcalc.models import ContributionConfig, ProjectionResult, YearlyPoint

MONTHS_PER_YEAR = 12

# Fixed-deposit style instruments compound quarterly unless told otherwise.
DEFAULT_COMPOUNDING_FREQUENCY = 4


class ProjectionInputError(ValueError):
    """Raised when an input cannot be turned into a projection at all."""


class ProjectionMode(str, Enum):
    RECURRING = "sip"
    LUMP_SUM = "lumpsum"
    FIXED_FREQUENCY = "fd"

    @property
    def label(self) -> str:
        return _MODE_LABELS[self]


_MODE_LABELS = {
    ProjectionMode.RECURRING: "SIP",
    ProjectionMode.LUMP_SUM: "Lumpsum",
    ProjectionMode.FIXED_FREQUENCY: "Fixed Deposit (FD)",
}


def _non_negative(value: float) -> float:
    # NaN compares false against everything, so it passes through untouched
    return 0.0 if value < 0 else float(value)


def round_half_up(value: float) -> float:
    """Round to the nearest whole unit, halves away from zero on the positive side.

    Non-finite values are returned as-is so NaN stays visible in the output.
    """
    if not math.isfinite(value):
        return value
    return float(math.floor(value + 0.5))


def horizon_months(years: float) -> int:
    years = _non_negative(years)
    if not math.isfinite(years):
        raise ProjectionInputError(f"horizon must be a finite number of years, got {years!r}")
    return int(math.floor(years * MONTHS_PER_YEAR + 0.5))


def _snapshot_years(years: float) -> int:
    """Number of yearly points emitted for the closed-form modes.

    Always at least one point so the series never degenerates, even for
    horizons under a year.
    """
    if not math.isfinite(years):
        raise ProjectionInputError(f"horizon must be a finite number of years, got {years!r}")
    return max(1, int(math.floor(years)))


def simulate_recurring(
    amount: float,
    rate_percent: float,
    months: int,
    escalation_percent: float = 0.0,
) -> Tuple[float, float, List[YearlyPoint]]:
    """
    Month-by-month accumulation of an end-of-month contribution.

    Order of operations (per month):
      1) Grow the running value by one month of interest.
      2) Add this month's contribution (it starts earning next month).
      3) On every 12th month record a rounded snapshot, then step up the
         contribution for the months that follow.

    Returns the unrounded ``(invested, value, snapshots)``.
    """
    monthly_rate = _non_negative(rate_percent) / 100 / MONTHS_PER_YEAR
    step_up = _non_negative(escalation_percent) / 100
    contribution = _non_negative(amount)

    value = 0.0
    invested = 0.0
    snapshots: List[YearlyPoint] = []

    for month in range(1, months + 1):
        value = value * (1 + monthly_rate) + contribution
        invested += contribution

        if month % MONTHS_PER_YEAR == 0:
            snapshots.append(
                YearlyPoint(
                    year=month // MONTHS_PER_YEAR,
                    investedToDate=round_half_up(invested),
                    totalValue=round_half_up(value),
                )
            )
            if step_up > 0:
                contribution = contribution * (1 + step_up)

    return invested, value, snapshots


def recurring_projection(
    amount: float,
    rate_percent: float,
    years: float,
    escalation_percent: float = 0.0,
) -> ProjectionResult:
    """Project a monthly contribution with an optional annual step-up."""
    months = horizon_months(years)
    invested, value, snapshots = simulate_recurring(amount, rate_percent, months, escalation_percent)

    invested_total = round_half_up(invested)
    value_total = round_half_up(value)

    return ProjectionResult(
        investedAmount=invested_total,
        estimatedReturns=value_total - invested_total,
        totalValue=value_total,
        yearlyData=snapshots,
    )


def _compound_projection(principal: float, years: float, growth_factor) -> ProjectionResult:
    """Shared shape of the closed-form modes.

    ``growth_factor(t)`` maps a horizon in years to the multiple of the
    principal held at that point. The series uses whole years while the
    summary uses the exact horizon, so the two can differ when ``years`` is
    fractional.
    """
    principal = _non_negative(principal)
    years = _non_negative(years)

    yearly: List[YearlyPoint] = []
    for year in range(1, _snapshot_years(years) + 1):
        yearly.append(
            YearlyPoint(
                year=year,
                investedToDate=round_half_up(principal),
                totalValue=round_half_up(principal * growth_factor(year)),
            )
        )

    total_value = principal * growth_factor(years)
    return ProjectionResult(
        investedAmount=principal,
        estimatedReturns=total_value - principal,
        totalValue=total_value,
        yearlyData=yearly,
    )


def lump_sum_projection(principal: float, rate_percent: float, years: float) -> ProjectionResult:
    """One-time investment compounded annually."""
    rate = _non_negative(rate_percent) / 100
    return _compound_projection(principal, years, lambda t: (1 + rate) ** t)


def fixed_frequency_projection(
    principal: float,
    rate_percent: float,
    years: float,
    frequency_per_year: int = DEFAULT_COMPOUNDING_FREQUENCY,
) -> ProjectionResult:
    """One-time deposit compounded ``frequency_per_year`` times a year."""
    rate = _non_negative(rate_percent) / 100
    periods = max(1, int(frequency_per_year))
    return _compound_projection(principal, years, lambda t: (1 + rate / periods) ** (periods * t))


def project(mode: ProjectionMode, config: ContributionConfig) -> ProjectionResult:
    """Run the projection selected by ``mode`` for ``config``."""
    mode = ProjectionMode(mode)
    if mode == ProjectionMode.RECURRING:
        return recurring_projection(
            config.amount,
            config.annualRatePercent,
            config.horizonYears,
            config.escalationPercent,
        )
    elif mode == ProjectionMode.LUMP_SUM:
        return lump_sum_projection(config.amount, config.annualRatePercent, config.horizonYears)
    else:  # FIXED_FREQUENCY
        return fixed_frequency_projection(
            config.amount,
            config.annualRatePercent,
            config.horizonYears,
            config.compoundingFrequency,
        )


__all__ = [
    "DEFAULT_COMPOUNDING_FREQUENCY",
    "MONTHS_PER_YEAR",
    "ProjectionInputError",
    "ProjectionMode",
    "fixed_frequency_projection",
    "horizon_months",
    "lump_sum_projection",
    "project",
    "recurring_projection",
    "round_half_up",
    "simulate_recurring",
]
