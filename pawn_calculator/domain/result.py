"""Result type for calculations that report failure as a value"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class CalcError(str, Enum):
    """Error kinds surfaced by the calculation core"""

    INVALID_INPUT = "invalid_input"
    CALCULATION_DIVERGED = "calculation_diverged"


@dataclass
class Result(Generic[T]):
    """
    Outcome of a calculation.

    Either ``success`` with a ``value``, or a failure carrying a message and a
    ``CalcError`` kind. A failed result never carries a partial value.

    Usage:
        result = generate_schedule(100_000, 2.5, 3, RepaymentMode.AMORTIZED)
        if result:
            rows = result.value.schedule
        else:
            log.warning(result.error, extra={"kind": result.error_type})
    """

    success: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_type: Optional[CalcError] = None

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: str, error_type: CalcError) -> "Result[T]":
        return cls(success=False, error=error, error_type=error_type)

    def __bool__(self) -> bool:
        return self.success

    def unwrap(self) -> T:
        """Return the value, raising ValueError if the calculation failed"""
        if not self.success:
            raise ValueError(f"Result unwrap failed: {self.error}")
        return self.value
