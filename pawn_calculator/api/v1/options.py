"""GET /v1/options - selectable labels and form defaults"""

from fastapi import APIRouter

from pawn_calculator.api.v1.schemas import OptionsResponse, QuoteDefaults
from pawn_calculator.domain.models import (
    ALLOWED_PERIODS,
    CHECK_TYPES,
    USAGE_PERIODS,
    VEHICLE_TYPES,
    CollateralType,
    RepaymentMode,
)

router = APIRouter()


@router.get("/options", response_model=OptionsResponse)
def get_options():
    """Labels accepted by POST /v1/quote; these are also the weight table keys"""
    return OptionsResponse(
        collateral_types=[c.value for c in CollateralType],
        vehicle_types=list(VEHICLE_TYPES),
        usage_periods=list(USAGE_PERIODS),
        check_types=list(CHECK_TYPES),
        periods=list(ALLOWED_PERIODS),
        repayment_modes=[m.value for m in RepaymentMode],
        defaults=QuoteDefaults(
            collateral_type=CollateralType.VEHICLE.value,
            vehicle_type=VEHICLE_TYPES[0],
            usage_period=USAGE_PERIODS[0],
            check_type=CHECK_TYPES[0],
            periods=3,
            repayment_mode=RepaymentMode.AMORTIZED.value,
        ),
    )
