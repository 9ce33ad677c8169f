"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import Annotated, Dict, List, Literal, Optional, Union

from pawn_calculator.domain.models import (
    CheckCollateral,
    Collateral,
    DebtConsolidation,
    JewelryPawn,
    LoanRequest,
    RealEstateSecondLien,
    RepaymentMode,
    VehicleCollateral,
    WeightTable,
)


class VehicleCollateralSchema(BaseModel):
    """Car/motorcycle collateral"""

    type: Literal["汽車機車"] = "汽車機車"
    vehicle_type: str = Field("汽車", description="汽車 or 機車")
    usage_period: str = Field("1年", description="1年, 3年, 5年 or 10年以上")
    model: str = Field("", max_length=100, description="Brand and model, e.g. Toyota Altis")

    def to_domain(self) -> Collateral:
        return VehicleCollateral(vehicle_type=self.vehicle_type, usage_period=self.usage_period, model=self.model)


class CheckCollateralSchema(BaseModel):
    """Cheque/customer note collateral"""

    type: Literal["支票客票"]
    check_type: str = Field("支票", description="支票 or 客票")
    face_amount: Optional[int] = Field(None, ge=0, description="Face amount of the cheque")
    term_days: Optional[int] = Field(None, ge=0, description="Days until the cheque matures")

    def to_domain(self) -> Collateral:
        return CheckCollateral(check_type=self.check_type, face_amount=self.face_amount, term_days=self.term_days)


class RealEstateSecondLienSchema(BaseModel):
    type: Literal["房屋土地二胎"]

    def to_domain(self) -> Collateral:
        return RealEstateSecondLien()


class JewelryPawnSchema(BaseModel):
    type: Literal["鑽石珠寶典當"]

    def to_domain(self) -> Collateral:
        return JewelryPawn()


class DebtConsolidationSchema(BaseModel):
    type: Literal["代償降息整合"]

    def to_domain(self) -> Collateral:
        return DebtConsolidation()


CollateralSchema = Annotated[
    Union[
        VehicleCollateralSchema,
        CheckCollateralSchema,
        RealEstateSecondLienSchema,
        JewelryPawnSchema,
        DebtConsolidationSchema,
    ],
    Field(discriminator="type"),
]


class QuoteRequest(BaseModel):
    """Request body for POST /v1/quote"""

    collateral: CollateralSchema = Field(default_factory=VehicleCollateralSchema)
    principal: Optional[float] = Field(None, description="Amount to borrow")
    periods: int = Field(3, description="Number of monthly periods")
    repayment_mode: RepaymentMode = RepaymentMode.AMORTIZED

    def to_domain(self) -> LoanRequest:
        return LoanRequest(
            collateral=self.collateral.to_domain(),
            principal=self.principal,
            periods=self.periods,
            repayment_mode=self.repayment_mode,
        )


class ScheduleRowSchema(BaseModel):
    """Single period of the repayment schedule"""

    period: int
    payment: float
    remaining_balance: float
    payment_rounded: int
    remaining_balance_rounded: int


class QuoteResponse(BaseModel):
    """Response for POST /v1/quote"""

    collateral: CollateralSchema
    principal: float
    periods: int
    repayment_mode: RepaymentMode
    effective_annual_rate_percent: float
    effective_annual_rate_display: str
    monthly_rate: float
    schedule: List[ScheduleRowSchema]
    total_paid: float
    total_paid_rounded: int
    total_paid_display: str


class ErrorDetail(BaseModel):
    """Kind and message of a failed quote"""

    error: str
    message: str


class ErrorResponse(BaseModel):
    """422 body of POST /v1/quote"""

    detail: ErrorDetail


MultiplierMap = Dict[str, Annotated[float, Field(ge=0)]]


class WeightTableSchema(BaseModel):
    """Weight table snapshot for GET /v1/weights"""

    initial_rate: float
    vehicle_weights: Dict[str, float]
    usage_period_weights: Dict[str, float]
    check_weights: Dict[str, float]
    period_weights: Dict[str, float]
    repayment_condition_weights: Dict[str, float]

    @classmethod
    def from_domain(cls, table: WeightTable) -> "WeightTableSchema":
        return cls(
            initial_rate=table.initial_rate,
            vehicle_weights=dict(table.vehicle_weights),
            usage_period_weights=dict(table.usage_period_weights),
            check_weights=dict(table.check_weights),
            period_weights=dict(table.period_weights),
            repayment_condition_weights=dict(table.repayment_condition_weights),
        )


class WeightTableUpdate(BaseModel):
    """Request body for PUT /v1/admin/weights; omitted fields keep their stored values"""

    initial_rate: Optional[float] = Field(None, gt=0, description="Base annual rate in percent")
    vehicle_weights: Optional[MultiplierMap] = None
    usage_period_weights: Optional[MultiplierMap] = None
    check_weights: Optional[MultiplierMap] = None
    period_weights: Optional[MultiplierMap] = None
    repayment_condition_weights: Optional[MultiplierMap] = None

    def to_document_update(self) -> Dict[str, object]:
        """Only the fields that were sent, under their stored document names"""
        fields = {
            "initialRate": self.initial_rate,
            "vehicleWeights": self.vehicle_weights,
            "usagePeriodWeights": self.usage_period_weights,
            "checkWeights": self.check_weights,
            "periodWeights": self.period_weights,
            "repaymentConditionWeights": self.repayment_condition_weights,
        }
        return {key: value for key, value in fields.items() if value is not None}


class QuoteDefaults(BaseModel):
    collateral_type: str
    vehicle_type: str
    usage_period: str
    check_type: str
    periods: int
    repayment_mode: str


class OptionsResponse(BaseModel):
    """Response for GET /v1/options"""

    collateral_types: List[str]
    vehicle_types: List[str]
    usage_periods: List[str]
    check_types: List[str]
    periods: List[int]
    repayment_modes: List[str]
    defaults: QuoteDefaults
