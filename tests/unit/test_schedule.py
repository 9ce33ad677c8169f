"""Unit tests for repayment schedule generation"""

import math
from dataclasses import replace

import pytest
from pawn_calculator.domain.calculator import calculate_quote
from pawn_calculator.domain.models import ALLOWED_PERIODS, RepaymentMode
from pawn_calculator.domain.result import CalcError
from pawn_calculator.domain.schedule import generate_schedule, level_payment, monthly_rate


@pytest.mark.parametrize("periods", ALLOWED_PERIODS)
def test_amortized_schedule_shape(periods):
    """N rows, last balance exactly zero, total equals the sum of payments"""
    result = generate_schedule(250_000, 3.1, periods, RepaymentMode.AMORTIZED)

    assert result.success
    rows = result.value.schedule
    assert len(rows) == periods
    assert [row.period for row in rows] == list(range(1, periods + 1))
    assert rows[-1].remaining_balance == 0
    assert sum(row.payment for row in rows) == result.value.total_paid


def test_amortized_balance_declines():
    """Each payment retires some principal"""
    rows = generate_schedule(100_000, 5.0, 12, RepaymentMode.AMORTIZED).unwrap().schedule

    balances = [100_000] + [row.remaining_balance for row in rows]
    assert all(later < earlier for earlier, later in zip(balances, balances[1:]))


def test_amortized_constant_payment():
    """Annuity payment is the same every period"""
    rows = generate_schedule(100_000, 5.0, 24, RepaymentMode.AMORTIZED).unwrap().schedule

    assert len({row.payment for row in rows}) == 1


def test_amortized_example_car_loan():
    """100,000 at 2.5% over 3 months"""
    result = generate_schedule(100_000, 2.5, 3, RepaymentMode.AMORTIZED).unwrap()

    assert monthly_rate(2.5) == pytest.approx(0.0020833, abs=1e-7)
    assert len(result.schedule) == 3
    assert result.schedule[0].payment == pytest.approx(33_472.3, abs=1)
    assert result.schedule[-1].remaining_balance == 0
    assert result.total_paid == pytest.approx(100_417, abs=5)
    assert result.effective_annual_rate_percent == 2.5


def test_amortized_last_row_close_to_zero_before_correction():
    """The forced zero only hides float drift, not a real shortfall"""
    rows = generate_schedule(100_000, 2.5, 3, RepaymentMode.AMORTIZED).unwrap().schedule
    r = monthly_rate(2.5)

    # Re-run the second-to-last balance through the final period
    balance = rows[-2].remaining_balance
    leftover = balance - (rows[-1].payment - balance * r)
    assert abs(leftover) < 1e-6


@pytest.mark.parametrize("periods", [1, 3, 12, 72])
def test_zero_rate_splits_principal_evenly(periods):
    """Zero rate: every payment is principal / N"""
    result = generate_schedule(120_000, 0, periods, RepaymentMode.AMORTIZED).unwrap()

    for row in result.schedule:
        assert row.payment == pytest.approx(120_000 / periods)
    assert result.total_paid == pytest.approx(120_000)


def test_interest_only_schedule():
    """Interest each month, principal repaid with the last payment"""
    principal = 60_000
    result = generate_schedule(principal, 3.0, 6, RepaymentMode.INTEREST_ONLY).unwrap()
    r = monthly_rate(3.0)

    rows = result.schedule
    assert len(rows) == 6
    for row in rows[:-1]:
        assert row.payment == pytest.approx(principal * r)
        assert row.remaining_balance == principal
    assert rows[-1].payment == pytest.approx(principal * r + principal)
    assert rows[-1].remaining_balance == 0
    assert result.total_paid == pytest.approx(principal * r * 6 + principal)


def test_interest_only_single_period():
    """One period is both first and last: interest plus principal"""
    result = generate_schedule(10_000, 12.0, 1, RepaymentMode.INTEREST_ONLY).unwrap()

    assert len(result.schedule) == 1
    assert result.schedule[0].payment == pytest.approx(10_100)
    assert result.schedule[0].remaining_balance == 0
    assert result.total_paid == pytest.approx(10_100)


def test_amortized_single_period():
    """One amortized period repays principal plus one month of interest"""
    result = generate_schedule(10_000, 12.0, 1, RepaymentMode.AMORTIZED).unwrap()

    assert result.schedule[0].payment == pytest.approx(10_100)
    assert result.schedule[0].remaining_balance == 0


@pytest.mark.parametrize("principal", [0, -5, None, math.nan, math.inf, 10**400])
def test_invalid_principal(principal):
    """Missing, non-positive, non-finite or unrepresentable principal is rejected"""
    result = generate_schedule(principal, 2.5, 3, RepaymentMode.AMORTIZED)

    assert not result
    assert result.error_type == CalcError.INVALID_INPUT
    assert result.value is None


@pytest.mark.parametrize("periods", [7, 0, -3, 2, 100, True])
def test_invalid_periods(periods):
    """Periods outside the allowed set are rejected"""
    result = generate_schedule(100_000, 2.5, periods, RepaymentMode.AMORTIZED)

    assert result.error_type == CalcError.INVALID_INPUT
    assert result.value is None


@pytest.mark.parametrize("rate", [-0.5, math.nan, math.inf, 10**400])
def test_invalid_rate(rate):
    """Negative or non-finite rates are rejected before any arithmetic"""
    result = generate_schedule(100_000, rate, 3, RepaymentMode.AMORTIZED)

    assert result.error_type == CalcError.INVALID_INPUT


def test_overflowing_rate_diverges():
    """A rate so large the annuity factor overflows yields no schedule"""
    result = generate_schedule(100_000, 1e300, 72, RepaymentMode.AMORTIZED)

    assert not result
    assert result.error_type == CalcError.CALCULATION_DIVERGED
    assert result.value is None


def test_unwrap_failed_result_raises():
    """Unwrapping a failure surfaces the error message"""
    result = generate_schedule(0, 2.5, 3, RepaymentMode.AMORTIZED)

    with pytest.raises(ValueError, match="principal"):
        result.unwrap()


def test_level_payment_formula():
    """Closed-form annuity payment"""
    r = 0.01
    expected = 1_000 * r * (1 + r) ** 12 / ((1 + r) ** 12 - 1)

    assert level_payment(1_000, r, 12) == pytest.approx(expected)
    assert level_payment(1_200, 0, 12) == 100


@pytest.mark.parametrize("rate, periods", [(1e-15, 3), (1e-10, 72), (1e-17, 12)])
def test_level_payment_tiny_rate(rate, periods):
    """Rates too small to change 1 + r still pay roughly P / n"""
    assert level_payment(100_000, rate, periods) == pytest.approx(100_000 / periods, rel=1e-6)


def test_tiny_annual_rate_builds_schedule():
    """A near-zero annual rate amortizes like a zero rate"""
    result = generate_schedule(100_000, 1e-12, 3, RepaymentMode.AMORTIZED)

    assert result
    rows = result.unwrap().schedule
    assert [row.payment for row in rows] == pytest.approx([100_000 / 3] * 3)
    assert rows[-1].remaining_balance == 0



def test_calculate_quote_uses_composed_rate(default_weights, car_request):
    """End to end: default weights for a 1-year-old car over 3 months"""
    result = calculate_quote(default_weights, car_request).unwrap()

    assert result.effective_annual_rate_percent == pytest.approx(2.5)
    assert result.schedule[0].payment == pytest.approx(33_472.3, abs=1)


def test_calculate_quote_rejects_bad_principal(default_weights, car_request):
    """Invalid requests fail without a partial schedule"""
    result = calculate_quote(default_weights, replace(car_request, principal=0))

    assert result.error_type == CalcError.INVALID_INPUT
    assert result.value is None
