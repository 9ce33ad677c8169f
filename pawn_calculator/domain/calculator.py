"""Quote entry point: compose the rate, then build the schedule from it"""

from pawn_calculator.domain.models import CalculationResult, LoanRequest, WeightTable
from pawn_calculator.domain.rates import compose_rate
from pawn_calculator.domain.result import Result
from pawn_calculator.domain.schedule import generate_schedule


def calculate_quote(weights: WeightTable, request: LoanRequest) -> Result[CalculationResult]:
    """
    Main entry point: price a loan request against a weight table snapshot.

    The weights are used as handed in; callers load a fresh snapshot per
    request rather than sharing a live reference.
    """
    rate = compose_rate(weights, request)
    return generate_schedule(
        principal=request.principal,
        annual_rate_percent=rate,
        periods=request.periods,
        mode=request.repayment_mode,
    )
