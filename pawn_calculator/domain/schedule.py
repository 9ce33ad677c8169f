"""Repayment schedule generation for amortized and interest-only loans"""

import math
from typing import List

from pawn_calculator.domain.models import (
    ALLOWED_PERIODS,
    CalculationResult,
    RepaymentMode,
    ScheduleRow,
)
from pawn_calculator.domain.result import CalcError, Result


def monthly_rate(annual_rate_percent: float) -> float:
    """Annual percent rate -> monthly fraction (2.5 -> 0.0020833...)"""
    return annual_rate_percent / 100 / 12


def _finite_float(value) -> float | None:
    """float(value) for a finite real number, else None"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        converted = float(value)
    except OverflowError:
        # ints too large for a double
        return None
    return converted if math.isfinite(converted) else None


def _validate_inputs(principal: float, annual_rate_percent: float, periods: int) -> str | None:
    """Return a description of the first violated precondition, or None"""
    if principal is None:
        return "principal is required"
    amount = _finite_float(principal)
    if amount is None or amount <= 0:
        return "principal must be a positive amount"
    if isinstance(periods, bool) or not isinstance(periods, int) or periods not in ALLOWED_PERIODS:
        return f"periods must be one of {', '.join(str(p) for p in ALLOWED_PERIODS)}"
    if annual_rate_percent is None:
        return "annual rate is required"
    rate = _finite_float(annual_rate_percent)
    if rate is None or rate < 0:
        return "annual rate must be zero or positive"
    return None


def level_payment(principal: float, rate: float, periods: int) -> float:
    """
    Level (annuity) payment for a fully amortizing loan.

        payment = P * r * (1 + r)^n / ((1 + r)^n - 1)

    With a zero rate the formula degenerates to P / n. (1 + r)^n - 1 is
    computed as expm1(n * log1p(r)) so that rates too small to change
    1 + r still give a payment close to P / n.

    Raises:
        OverflowError: When (1 + r)^n does not fit in a float
    """
    if rate == 0:
        return principal / periods
    growth_minus_one = math.expm1(periods * math.log1p(rate))
    if growth_minus_one == 0:
        # r * n below the float resolution
        return principal / periods
    return principal * rate * (growth_minus_one + 1) / growth_minus_one


def _amortized_rows(principal: float, rate: float, periods: int, payment: float) -> List[ScheduleRow]:
    rows = []
    balance = principal
    for period in range(1, periods + 1):
        interest = balance * rate
        balance -= payment - interest

        # Float drift leaves a few cents on the last row; the loan is paid off
        remaining = 0.0 if period == periods else balance
        rows.append(ScheduleRow(period=period, payment=payment, remaining_balance=remaining))
    return rows


def _interest_only_rows(principal: float, rate: float, periods: int) -> List[ScheduleRow]:
    interest = principal * rate
    rows = []
    for period in range(1, periods + 1):
        if period == periods:
            rows.append(ScheduleRow(period=period, payment=interest + principal, remaining_balance=0.0))
        else:
            rows.append(ScheduleRow(period=period, payment=interest, remaining_balance=principal))
    return rows


def generate_schedule(
    principal: float,
    annual_rate_percent: float,
    periods: int,
    mode: RepaymentMode,
) -> Result[CalculationResult]:
    """
    Build the month-by-month repayment schedule.

    Modes:
    - AMORTIZED: constant annuity payment; last row's balance forced to 0
    - INTEREST_ONLY: interest each month, principal added to the final payment

    Amounts are kept at full precision; rounding for display happens in the
    API layer.

    Returns:
        Result.ok(CalculationResult), or Result.fail with
        CalcError.INVALID_INPUT (bad principal, periods or rate) or
        CalcError.CALCULATION_DIVERGED (payment not a finite positive number)
    """
    problem = _validate_inputs(principal, annual_rate_percent, periods)
    if problem:
        return Result.fail(problem, CalcError.INVALID_INPUT)

    principal = float(principal)
    rate = monthly_rate(float(annual_rate_percent))

    if mode == RepaymentMode.AMORTIZED:
        try:
            payment = level_payment(principal, rate, periods)
        except (OverflowError, ZeroDivisionError):
            payment = math.nan
        if not math.isfinite(payment) or payment <= 0:
            return Result.fail(
                "Unable to compute a payment for this rate and term",
                CalcError.CALCULATION_DIVERGED,
            )
        rows = _amortized_rows(principal, rate, periods, payment)
    elif mode == RepaymentMode.INTEREST_ONLY:
        rows = _interest_only_rows(principal, rate, periods)
    else:
        return Result.fail(f"Unsupported repayment mode: {mode!r}", CalcError.INVALID_INPUT)

    total_paid = sum(row.payment for row in rows)

    return Result.ok(
        CalculationResult(
            schedule=rows,
            total_paid=total_paid,
            effective_annual_rate_percent=float(annual_rate_percent),
        )
    )
