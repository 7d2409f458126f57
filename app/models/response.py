from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel


class RequestOutcome(str, Enum):
    ACCEPTED = "accepted"                                # 200
    REJECTED_BAD_INPUT = "rejected_bad_input"            # 400
    REJECTED_INTERNAL_ERROR = "rejected_internal_error"  # 500


_STATUS_CODES = {
    RequestOutcome.ACCEPTED: 200,
    RequestOutcome.REJECTED_BAD_INPUT: 400,
    RequestOutcome.REJECTED_INTERNAL_ERROR: 500,
}


class ErrorResponse(BaseModel):
    title: str
    status: int
    errors: Dict[str, List[str]] = {}


class HandlerResponse(BaseModel):
    outcome: RequestOutcome
    body: Dict[str, Any]

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self.outcome]
