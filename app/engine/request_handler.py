import json
import logging
from decimal import Decimal
from typing import Any

from pydantic import ValidationError

from app.config import Settings
from app.models.outcome import ErrorKind
from app.models.response import ErrorResponse, HandlerResponse, RequestOutcome
from app.models.transaction import Transaction
from app.services.base import AbstractFeeCalculator

logger = logging.getLogger(__name__)

_TYPE_KEYS = ("transactionType", "type", "transaction_type")
_TOKEN_KEYS = ("isTokenTransaction", "is_token_transaction")

# Error locations are reported under their camelCase payload names.
_FIELD_NAMES = {
    "type": "transactionType",
    "transaction_type": "transactionType",
    "is_token_transaction": "isTokenTransaction",
}

_REQUIRED_MESSAGES = {
    "amount": "Amount is required",
    "currency": "Currency is required",
}

_INTERNAL_ERROR_MESSAGE = "An internal error occurred. Please try again later."


class FeeRequestHandler:
    """
    Validation and dispatch layer in front of the fee calculator.

    One request walks through:
      PARSE     -> absent or non-object payload is rejected as bad input
      DEFAULTS  -> missing currency / transactionType / isTokenTransaction
                   are filled in so validation sees a complete candidate
      VALIDATE  -> every failing field is reported in a single response
      COMPUTE   -> calculator returns a tagged outcome
      RESPOND   -> success               -> ACCEPTED (200)
                   INVALID_ARGUMENT      -> REJECTED_BAD_INPUT (400)
                   other kind / raised   -> REJECTED_INTERNAL_ERROR (500)

    Holds no per-request state; one instance serves all requests.
    """

    def __init__(self, calculator: AbstractFeeCalculator, settings: Settings):
        self._calculator = calculator
        self._default_currency = settings.DEFAULT_CURRENCY

    def handle_body(self, raw: bytes) -> HandlerResponse:
        """Decode a raw JSON request body and handle it. Empty body means no payload."""
        if not raw or not raw.strip():
            return self.handle(None)
        try:
            payload = json.loads(raw, parse_float=Decimal)
        except (ValueError, UnicodeDecodeError, RecursionError):
            logger.warning("Rejected request body: not valid JSON")
            return _bad_input({"": ["Request body is not valid JSON"]})
        return self.handle(payload)

    def handle(self, payload: Any) -> HandlerResponse:
        if payload is None:
            logger.warning("Rejected request: transaction payload is absent")
            return _bad_input({"transaction": ["Transaction cannot be null"]})
        if not isinstance(payload, dict):
            logger.warning(
                f"Rejected request: payload is {type(payload).__name__}, expected an object"
            )
            return _bad_input({"transaction": ["Transaction must be a JSON object"]})

        candidate = self._apply_defaults(payload)

        try:
            transaction = Transaction.model_validate(candidate)
        except ValidationError as exc:
            errors = _collect_errors(exc)
            logger.warning(f"Rejected request: validation failed for {sorted(errors)}")
            return _bad_input(errors)

        try:
            outcome = self._calculator.calculate(transaction)
        except Exception:
            logger.error("Fee calculation failed unexpectedly", exc_info=True)
            return _internal_error()

        if outcome.ok:
            result = outcome.result
            logger.info(
                f"Fee computed: {transaction.amount} {transaction.currency} "
                f"-> {result.fee} {result.currency}"
            )
            return HandlerResponse(
                outcome=RequestOutcome.ACCEPTED,
                body=result.model_dump(mode="json"),
            )

        if outcome.error_kind == ErrorKind.INVALID_ARGUMENT:
            logger.warning(f"Rejected request: {outcome.error_message}")
            return _bad_input({"transaction": [outcome.error_message]})

        logger.error(
            f"Fee calculation returned {outcome.error_kind.value}: {outcome.error_message}"
        )
        return _internal_error()

    def _apply_defaults(self, payload: dict) -> dict:
        candidate = dict(payload)
        if "currency" not in candidate:
            candidate["currency"] = self._default_currency
        for keys, default in ((_TYPE_KEYS, ""), (_TOKEN_KEYS, False)):
            for key in keys:
                if key in candidate and candidate[key] is None:
                    del candidate[key]
            if not any(key in candidate for key in keys):
                candidate[keys[0]] = default
        return candidate


def _collect_errors(exc: ValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        loc = err["loc"][0] if err["loc"] else ""
        field = _FIELD_NAMES.get(str(loc), str(loc))
        if err["type"] == "missing":
            messages = [_REQUIRED_MESSAGES.get(field, f"{field} is required")]
        else:
            messages = (err.get("ctx") or {}).get("messages") or [err["msg"]]
        errors.setdefault(field, []).extend(messages)
    return errors


def _bad_input(errors: dict[str, list[str]]) -> HandlerResponse:
    body = ErrorResponse(
        title="One or more validation errors occurred.",
        status=400,
        errors=errors,
    )
    return HandlerResponse(
        outcome=RequestOutcome.REJECTED_BAD_INPUT, body=body.model_dump(mode="json")
    )


def _internal_error() -> HandlerResponse:
    body = ErrorResponse(title=_INTERNAL_ERROR_MESSAGE, status=500)
    return HandlerResponse(
        outcome=RequestOutcome.REJECTED_INTERNAL_ERROR, body=body.model_dump(mode="json")
    )
