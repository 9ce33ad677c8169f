"""POST /v1/quote - loan rate and repayment schedule endpoint"""

import time
from fastapi import APIRouter, Depends, HTTPException, Request

from pawn_calculator.api.v1.schemas import ErrorResponse, QuoteRequest, QuoteResponse, ScheduleRowSchema
from pawn_calculator.api.dependencies import get_request_id, get_weight_table
from pawn_calculator.domain.calculator import calculate_quote
from pawn_calculator.domain.models import WeightTable
from pawn_calculator.domain.rates import compose_rate
from pawn_calculator.domain.schedule import monthly_rate
from pawn_calculator.infrastructure.observability.logging import log_quote
from pawn_calculator.infrastructure.observability.metrics import record_quote
from pawn_calculator.utils.formatting import format_currency, format_rate, round_currency

router = APIRouter()


@router.post(
    "/quote",
    response_model=QuoteResponse,
    responses={
        422: {"model": ErrorResponse, "description": "Invalid input or a rate/term the schedule cannot be built for"}
    },
)
def create_quote(
    request_body: QuoteRequest,
    request: Request,
    weights: WeightTable = Depends(get_weight_table),
):
    """
    Price a loan and build its month-by-month repayment schedule.

    Flow:
    1. Convert the body into an immutable LoanRequest
    2. Compose the effective annual rate from the weight table snapshot
    3. Generate the schedule for the selected repayment mode
    4. Round amounts for display and return both raw and rounded values
    """
    start_time = time.time()
    request_id = get_request_id(request)

    loan = request_body.to_domain()
    collateral_label = loan.collateral.collateral_type.name.lower()
    mode_label = loan.repayment_mode.name.lower()

    result = calculate_quote(weights, loan)
    duration_ms = (time.time() - start_time) * 1000

    if not result:
        rate = compose_rate(weights, loan)
        record_quote(collateral_label, mode_label, result.error_type.value, None)
        log_quote(
            request_id,
            collateral_label,
            loan.periods,
            mode_label,
            rate,
            "rejected",
            duration_ms,
            error_kind=result.error_type.value,
        )
        raise HTTPException(
            status_code=422,
            detail={"error": result.error_type.value, "message": result.error},
        )

    calculation = result.value
    rate = calculation.effective_annual_rate_percent
    record_quote(collateral_label, mode_label, "ok", rate)
    log_quote(request_id, collateral_label, loan.periods, mode_label, rate, "ok", duration_ms)

    return QuoteResponse(
        collateral=request_body.collateral,
        principal=loan.principal,
        periods=loan.periods,
        repayment_mode=loan.repayment_mode,
        effective_annual_rate_percent=rate,
        effective_annual_rate_display=format_rate(rate),
        monthly_rate=monthly_rate(rate),
        schedule=[
            ScheduleRowSchema(
                period=row.period,
                payment=row.payment,
                remaining_balance=row.remaining_balance,
                payment_rounded=round_currency(row.payment),
                remaining_balance_rounded=round_currency(row.remaining_balance),
            )
            for row in calculation.schedule
        ],
        total_paid=calculation.total_paid,
        total_paid_rounded=round_currency(calculation.total_paid),
        total_paid_display=format_currency(calculation.total_paid),
    )
