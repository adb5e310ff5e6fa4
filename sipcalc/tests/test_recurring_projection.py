from __future__ import annotations

import math
from math import isclose

import pytest

from sipcalc.core.projection import (
    ProjectionInputError,
    horizon_months,
    recurring_projection,
    round_half_up,
)


def test_twenty_five_thousand_monthly_for_ten_years():
    result = recurring_projection(25000, 12, 10, 0)

    assert len(result.yearlyData) == 10
    assert result.investedAmount == 3_000_000
    assert result.totalValue > result.investedAmount
    assert result.estimatedReturns == result.totalValue - result.investedAmount

    values = [point.totalValue for point in result.yearlyData]
    assert all(later > earlier for earlier, later in zip(values, values[1:]))
    assert [point.year for point in result.yearlyData] == list(range(1, 11))

    last = result.yearlyData[-1]
    assert last.investedToDate == result.investedAmount
    assert last.totalValue == result.totalValue


def test_single_year_matches_end_of_month_annuity():
    """
    1000/month at 12% p.a. is an ordinary annuity at 1% a month:
    1000 * (1.01^12 - 1) / 0.01 = 12682.50...
    """
    result = recurring_projection(1000, 12, 1)

    assert result.investedAmount == 12000
    assert result.totalValue == 12683
    assert result.estimatedReturns == 683


def test_rounding_does_not_feed_back_into_compounding():
    result = recurring_projection(1000, 12, 3)

    closed_form = 1000 * ((1.01 ** 36) - 1) / 0.01
    assert isclose(result.totalValue, closed_form, abs_tol=1.0)
    for point in result.yearlyData:
        assert point.totalValue == int(point.totalValue)
        assert point.investedToDate == int(point.investedToDate)


@pytest.mark.parametrize("amount,years", [(1234.56, 7), (500, 1), (10_000_000, 40)])
def test_zero_rate_total_equals_invested(amount, years):
    result = recurring_projection(amount, 0, years, 0)

    assert result.totalValue == result.investedAmount
    assert result.estimatedReturns == 0
    for point in result.yearlyData:
        assert point.totalValue == point.investedToDate


def test_higher_rate_grows_total():
    totals = [recurring_projection(5000, rate, 10, 5).totalValue for rate in (6, 8, 10, 12)]
    assert totals == sorted(totals)
    assert len(set(totals)) == len(totals)


def test_longer_horizon_grows_total():
    totals = [recurring_projection(5000, 10, years, 5).totalValue for years in (5, 6, 7, 8)]
    assert all(later > earlier for earlier, later in zip(totals, totals[1:]))


def test_escalation_increases_invested_total():
    flat = recurring_projection(10000, 12, 5, 0)
    stepped = recurring_projection(10000, 12, 5, 10)

    assert stepped.investedAmount > flat.investedAmount
    assert stepped.totalValue > flat.totalValue


def test_escalation_applies_after_each_year_boundary():
    result = recurring_projection(1000, 0, 2, 10)

    assert [point.investedToDate for point in result.yearlyData] == [12000, 25200]
    assert result.investedAmount == 25200
    assert result.totalValue == 25200


def test_escalation_does_not_touch_first_year():
    flat = recurring_projection(1000, 12, 1, 0)
    stepped = recurring_projection(1000, 12, 1, 25)

    assert stepped.totalValue == flat.totalValue
    assert stepped.investedAmount == flat.investedAmount


def test_zero_horizon_is_empty():
    result = recurring_projection(25000, 12, 0, 10)

    assert result.yearlyData == []
    assert result.investedAmount == 0
    assert result.estimatedReturns == 0
    assert result.totalValue == 0


def test_zero_amount_still_emits_yearly_points():
    result = recurring_projection(0, 12, 5, 10)

    assert len(result.yearlyData) == 5
    assert result.totalValue == 0
    assert result.investedAmount == 0
    assert result.estimatedReturns == 0
    assert all(point.totalValue == 0 and point.investedToDate == 0 for point in result.yearlyData)


def test_negative_inputs_are_clamped_to_zero():
    assert recurring_projection(-1000, 12, 3).totalValue == 0
    assert recurring_projection(1000, 12, -3).yearlyData == []

    no_growth = recurring_projection(1000, -5, 2, -10)
    assert no_growth.totalValue == no_growth.investedAmount == 24000


def test_fractional_horizon_counts_partial_year_in_totals():
    result = recurring_projection(1000, 0, 1.5)

    assert len(result.yearlyData) == 1
    assert result.yearlyData[0].investedToDate == 12000
    assert result.investedAmount == 18000
    assert result.totalValue == 18000


def test_nan_amount_stays_visible():
    result = recurring_projection(float("nan"), 12, 2)

    assert math.isnan(result.totalValue)
    assert math.isnan(result.yearlyData[-1].totalValue)


@pytest.mark.parametrize("years", [float("nan"), float("inf")])
def test_non_finite_horizon_is_rejected(years):
    with pytest.raises(ProjectionInputError):
        recurring_projection(1000, 12, years)


def test_month_count_rounds_half_up():
    assert horizon_months(10) == 120
    assert horizon_months(0.125) == 2
    assert horizon_months(0) == 0


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(2.49) == 2
    assert math.isnan(round_half_up(float("nan")))
