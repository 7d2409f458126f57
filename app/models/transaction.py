import re
from decimal import Decimal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

AMOUNT_MIN = Decimal("0.01")
AMOUNT_MAX = Decimal("999999999.99")
TRANSACTION_TYPE_MAX_LENGTH = 50

CURRENCY_LENGTH_MESSAGE = "Currency must be exactly 3 characters"
CURRENCY_PATTERN_MESSAGE = "Currency must be 3 uppercase letters (ISO 4217)"
TYPE_LENGTH_MESSAGE = "Type cannot exceed 50 characters"
TYPE_PATTERN_MESSAGE = "Type contains invalid characters"

_CURRENCY_RE = re.compile(r"[A-Z]{3}")
_TRANSACTION_TYPE_RE = re.compile(r"[a-zA-Z0-9_\-]*")


class Transaction(BaseModel):
    """A transaction submitted for fee calculation. Immutable once built."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    amount: Decimal
    currency: str
    transaction_type: str = Field(
        default="",
        validation_alias=AliasChoices("transactionType", "type", "transaction_type"),
        serialization_alias="transactionType",
        description="Free-form label (letters, digits, hyphens, underscores)",
    )
    is_token_transaction: bool = Field(
        default=False,
        validation_alias=AliasChoices("isTokenTransaction", "is_token_transaction"),
        serialization_alias="isTokenTransaction",
        description="Accepted but not used by the fee computation",
    )

    @field_validator("amount", mode="before")
    @classmethod
    def amount_present(cls, v):
        if v is None or v == "":
            raise PydanticCustomError("amount_required", "Amount is required")
        return v

    @field_validator("amount")
    @classmethod
    def amount_in_range(cls, v: Decimal) -> Decimal:
        if not v.is_finite() or v < AMOUNT_MIN or v > AMOUNT_MAX:
            raise PydanticCustomError(
                "amount_range",
                "Amount must be between 0.01 and 999,999,999.99",
            )
        return v

    @field_validator("currency", mode="before")
    @classmethod
    def currency_shape(cls, v):
        if v is None or v == "":
            raise PydanticCustomError("currency_required", "Currency is required")
        if not isinstance(v, str):
            _raise_all("currency_invalid", [CURRENCY_PATTERN_MESSAGE])
        violations = []
        if len(v) != 3:
            violations.append(CURRENCY_LENGTH_MESSAGE)
        if not _CURRENCY_RE.fullmatch(v):
            violations.append(CURRENCY_PATTERN_MESSAGE)
        if violations:
            _raise_all("currency_invalid", violations)
        return v

    @field_validator("transaction_type", mode="before")
    @classmethod
    def transaction_type_shape(cls, v):
        if not isinstance(v, str):
            _raise_all("type_invalid", [TYPE_PATTERN_MESSAGE])
        violations = []
        if len(v) > TRANSACTION_TYPE_MAX_LENGTH:
            violations.append(TYPE_LENGTH_MESSAGE)
        if not _TRANSACTION_TYPE_RE.fullmatch(v):
            violations.append(TYPE_PATTERN_MESSAGE)
        if violations:
            _raise_all("type_invalid", violations)
        return v


def _raise_all(error_type: str, messages: list[str]) -> None:
    """
    Raise one error for a field carrying every violated constraint.
    The individual messages travel in ``ctx["messages"]``.
    """
    raise PydanticCustomError(error_type, "; ".join(messages), {"messages": messages})


class FeeResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    fee: Decimal
    currency: str
