"""Rate composition - base rate times the weights picked by the user's selections"""

from typing import Mapping

from pawn_calculator.domain.models import (
    DEFAULT_INITIAL_RATE,
    CheckCollateral,
    DebtConsolidation,
    JewelryPawn,
    LoanRequest,
    RealEstateSecondLien,
    VehicleCollateral,
    WeightTable,
)


def lookup_weight(weights: Mapping[str, float], key: str) -> float:
    """Multiplier for ``key``; a missing or zero entry is neutral (1)"""
    return weights.get(key) or 1.0


def compose_rate(weights: WeightTable, request: LoanRequest) -> float:
    """
    Compose the effective annual rate (percent) for a loan request.

    Start from the configured initial rate (2.5 when unset or zero), apply the
    collateral-specific multipliers, then the period and repayment-condition
    multipliers that apply to every collateral type.

    Lookups use the exact option labels. A label that has no entry in the
    table stays neutral rather than failing, so this never raises.
    """
    rate = weights.initial_rate or DEFAULT_INITIAL_RATE

    match request.collateral:
        case VehicleCollateral(vehicle_type=vehicle_type, usage_period=usage_period):
            rate *= lookup_weight(weights.vehicle_weights, vehicle_type)
            rate *= lookup_weight(weights.usage_period_weights, usage_period)
        case CheckCollateral(check_type=check_type):
            rate *= lookup_weight(weights.check_weights, check_type)
        case RealEstateSecondLien() | JewelryPawn() | DebtConsolidation():
            # No collateral-specific weighting for these types
            pass
        case other:
            raise TypeError(f"Unsupported collateral: {other!r}")

    rate *= lookup_weight(weights.period_weights, str(request.periods))
    rate *= lookup_weight(weights.repayment_condition_weights, request.repayment_mode.value)

    return rate
