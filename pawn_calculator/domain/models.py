"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union


class CollateralType(str, Enum):
    """Category of asset securing the loan (values are the form labels)"""

    VEHICLE = "汽車機車"
    CHECK = "支票客票"
    REAL_ESTATE_SECOND_LIEN = "房屋土地二胎"
    JEWELRY_PAWN = "鑽石珠寶典當"
    DEBT_CONSOLIDATION = "代償降息整合"


class RepaymentMode(str, Enum):
    """How the loan is paid back (values double as weight keys)"""

    AMORTIZED = "本利攤還"
    INTEREST_ONLY = "先還利息"


ALLOWED_PERIODS = (1, 3, 6, 12, 24, 36, 48, 60, 72)

VEHICLE_TYPES = ("汽車", "機車")
USAGE_PERIODS = ("1年", "3年", "5年", "10年以上")
CHECK_TYPES = ("支票", "客票")

DEFAULT_INITIAL_RATE = 2.5


@dataclass(frozen=True)
class VehicleCollateral:
    """Car or motorcycle; model text is captured but not priced"""

    vehicle_type: str = "汽車"
    usage_period: str = "1年"
    model: str = ""

    collateral_type = CollateralType.VEHICLE


@dataclass(frozen=True)
class CheckCollateral:
    """Cheque or customer note; face amount and term are captured but not priced"""

    check_type: str = "支票"
    face_amount: Optional[int] = None
    term_days: Optional[int] = None

    collateral_type = CollateralType.CHECK


@dataclass(frozen=True)
class RealEstateSecondLien:
    collateral_type = CollateralType.REAL_ESTATE_SECOND_LIEN


@dataclass(frozen=True)
class JewelryPawn:
    collateral_type = CollateralType.JEWELRY_PAWN


@dataclass(frozen=True)
class DebtConsolidation:
    collateral_type = CollateralType.DEBT_CONSOLIDATION


Collateral = Union[
    VehicleCollateral,
    CheckCollateral,
    RealEstateSecondLien,
    JewelryPawn,
    DebtConsolidation,
]


@dataclass(frozen=True)
class LoanRequest:
    """One calculation's worth of user selections"""

    collateral: Collateral
    principal: float
    periods: int
    repayment_mode: RepaymentMode = RepaymentMode.AMORTIZED


@dataclass(frozen=True)
class WeightTable:
    """
    Snapshot of the rate weighting configuration.

    Multipliers are keyed by the exact option labels. Period weights are keyed
    by the period count rendered as a string ("3", "12", ...).
    """

    initial_rate: float = DEFAULT_INITIAL_RATE
    vehicle_weights: Dict[str, float] = field(default_factory=dict)
    usage_period_weights: Dict[str, float] = field(default_factory=dict)
    check_weights: Dict[str, float] = field(default_factory=dict)
    period_weights: Dict[str, float] = field(default_factory=dict)
    repayment_condition_weights: Dict[str, float] = field(default_factory=dict)


@dataclass
class ScheduleRow:
    """Single period in a repayment schedule"""

    period: int
    payment: float
    remaining_balance: float


@dataclass
class CalculationResult:
    """Output of a quote: schedule, total and the rate it was built from"""

    schedule: List[ScheduleRow]
    total_paid: float
    effective_annual_rate_percent: float
