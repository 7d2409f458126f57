from decimal import Decimal, localcontext
from typing import Optional

from app.config import Settings
from app.models.outcome import CalculationOutcome, ErrorKind
from app.models.transaction import FeeResult, Transaction
from app.services.base import AbstractFeeCalculator

_HUNDRED = Decimal("100")


class FeeCalculator(AbstractFeeCalculator):
    """
    Flat percentage fee: fee = amount * FEE_PERCENTAGE / 100.

    Arithmetic stays in Decimal throughout, so 123.45 yields exactly 12.345.
    The working precision is widened to fit the operands, so amounts with
    more than 28 significant digits are never rounded.
    The result is always reported in REPORTING_CURRENCY; the transaction's
    own currency and its token flag are not consulted.
    """

    def __init__(self, settings: Settings):
        self._percentage = settings.FEE_PERCENTAGE
        self._reporting_currency = settings.REPORTING_CURRENCY

    def calculate(self, transaction: Optional[Transaction]) -> CalculationOutcome:
        if transaction is None:
            return CalculationOutcome.failure(
                ErrorKind.INVALID_ARGUMENT, "Transaction cannot be null"
            )

        amount = transaction.amount
        # A product has at most the sum of the operands' digits; dividing by 100 adds none.
        digits = len(amount.as_tuple().digits) + len(self._percentage.as_tuple().digits)
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, digits + 2)
            fee = (amount * self._percentage) / _HUNDRED
        return CalculationOutcome.success(
            FeeResult(fee=fee, currency=self._reporting_currency)
        )
