"""Goal inversion on top of the recurring projection model."""

from __future__ import annotations

import math
from typing import Optional

from sipcalc.core.projection import (
    MONTHS_PER_YEAR,
    ProjectionInputError,
    horizon_months,
    round_half_up,
    simulate_recurring,
)

DEFAULT_MAX_YEARS = 60


def _require_finite(**values: float) -> None:
    for name, value in values.items():
        if not math.isfinite(value):
            raise ProjectionInputError(f"{name} must be finite, got {value!r}")


def estimate_years_to_target(
    amount: float,
    rate_percent: float,
    escalation_percent: float,
    target_value: float,
    max_years: int = DEFAULT_MAX_YEARS,
) -> Optional[int]:
    """
    Smallest whole number of years after which a monthly contribution reaches
    ``target_value``, or ``None`` when it cannot within ``max_years``.

    The simulation follows ``recurring_projection`` month for month (interest,
    then contribution, then the annual step-up after each 12th month). The
    running value is compared in whole currency units, the same figure the
    projection reports, so any total shown by a projection is found no later
    than the year it was shown for.

    A non-positive ``amount`` or ``target_value`` is treated as unreachable.
    """
    _require_finite(
        amount=amount,
        rate_percent=rate_percent,
        escalation_percent=escalation_percent,
        target_value=target_value,
    )
    if amount <= 0 or target_value <= 0:
        return None

    monthly_rate = max(rate_percent, 0.0) / 100 / MONTHS_PER_YEAR
    step_up = max(escalation_percent, 0.0) / 100
    contribution = float(amount)
    value = 0.0

    for month in range(1, max(int(max_years), 0) * MONTHS_PER_YEAR + 1):
        value = value * (1 + monthly_rate) + contribution
        if round_half_up(value) >= target_value:
            return math.ceil(month / MONTHS_PER_YEAR)
        if month % MONTHS_PER_YEAR == 0 and step_up > 0:
            contribution = contribution * (1 + step_up)

    return None


def estimate_required_contribution(
    target_value: float,
    rate_percent: float,
    years: float,
    escalation_percent: float = 0.0,
) -> Optional[float]:
    """First-month contribution needed to hold ``target_value`` after ``years``.

    Every month's value is a fixed multiple of the starting contribution, so
    one unit-sized run gives the answer by division. Returns ``None`` when the
    horizon has no months in it.
    """
    _require_finite(
        target_value=target_value,
        rate_percent=rate_percent,
        escalation_percent=escalation_percent,
    )
    months = horizon_months(years)
    if months == 0:
        return None
    if target_value <= 0:
        return 0.0

    _, unit_value, _ = simulate_recurring(1.0, rate_percent, months, escalation_percent)
    return target_value / unit_value


__all__ = [
    "DEFAULT_MAX_YEARS",
    "estimate_required_contribution",
    "estimate_years_to_target",
]
