from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from app.models.transaction import FeeResult


class ErrorKind(str, Enum):
    INVALID_ARGUMENT = "invalid_argument"  # caller handed over something unusable
    INTERNAL = "internal"                  # anything else


class CalculationOutcome(BaseModel):
    """
    Tagged result of a fee calculation.

    Exactly one of ``result`` or ``error_kind`` is set. Calculators never
    raise for business conditions; they encode them here instead.
    """

    model_config = ConfigDict(frozen=True)

    result: Optional[FeeResult] = None
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @classmethod
    def success(cls, result: FeeResult) -> "CalculationOutcome":
        return cls(result=result)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "CalculationOutcome":
        return cls(error_kind=kind, error_message=message)
