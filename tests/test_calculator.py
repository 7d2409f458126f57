"""Unit tests for the FeeCalculator.

The calculator is a pure function of its input and configuration, so the
tests call it directly with Transaction models — no HTTP involved.
"""

from decimal import Decimal

import pytest

from app.config import Settings
from app.models.outcome import CalculationOutcome, ErrorKind
from app.models.transaction import FeeResult, Transaction
from app.services.fee_calculator import FeeCalculator


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _txn(amount: str = "100", currency: str = "EUR", **extra) -> Transaction:
    return Transaction(amount=Decimal(amount), currency=currency, **extra)


@pytest.fixture
def calculator() -> FeeCalculator:
    return FeeCalculator(Settings())


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

def test_valid_transaction_returns_fee_result(calculator):
    outcome = calculator.calculate(_txn())

    assert isinstance(outcome, CalculationOutcome)
    assert outcome.ok
    assert isinstance(outcome.result, FeeResult)
    assert outcome.error_kind is None


def test_fee_is_ten_percent_of_amount(calculator):
    outcome = calculator.calculate(_txn("100"))
    assert outcome.result.fee == Decimal("10")


def test_fee_uses_exact_decimal_arithmetic(calculator):
    """123.45 must give exactly 12.345, not a float approximation."""
    outcome = calculator.calculate(_txn("123.45"))
    assert outcome.result.fee == Decimal("12.345")
    assert str(outcome.result.fee) == "12.345"


@pytest.mark.parametrize(
    "amount, expected",
    [
        ("0.01", "0.001"),
        ("1", "0.1"),
        ("999999999.99", "99999999.999"),
    ],
)
def test_fee_at_range_edges(calculator, amount, expected):
    assert calculator.calculate(_txn(amount)).result.fee == Decimal(expected)


def test_fee_keeps_every_significant_digit(calculator):
    """Amounts beyond the default 28-digit decimal precision are not rounded."""
    outcome = calculator.calculate(_txn("123456789.123456789123456789123"))

    assert outcome.result.fee == Decimal("12345678.9123456789123456789123")
    assert str(outcome.result.fee) == "12345678.9123456789123456789123"


def test_eur_transaction_reports_eur(calculator):
    assert calculator.calculate(_txn(currency="EUR")).result.currency == "EUR"


def test_gbp_transaction_still_reports_eur(calculator):
    """The transaction's own currency is not propagated to the result."""
    outcome = calculator.calculate(_txn(currency="GBP"))

    assert outcome.ok
    assert outcome.result.currency == "EUR"
    assert outcome.result.fee == Decimal("10")


def test_token_flag_does_not_change_fee(calculator):
    plain = calculator.calculate(_txn("250.50", is_token_transaction=False))
    token = calculator.calculate(_txn("250.50", is_token_transaction=True))

    assert token.result == plain.result


def test_absent_transaction_is_invalid_argument(calculator):
    outcome = calculator.calculate(None)

    assert not outcome.ok
    assert outcome.result is None
    assert outcome.error_kind == ErrorKind.INVALID_ARGUMENT
    assert outcome.error_message == "Transaction cannot be null"


def test_percentage_and_reporting_currency_come_from_settings():
    calculator = FeeCalculator(
        Settings(FEE_PERCENTAGE=Decimal("2.5"), REPORTING_CURRENCY="USD")
    )
    outcome = calculator.calculate(_txn("200", currency="EUR"))

    assert outcome.result.fee == Decimal("5")
    assert outcome.result.currency == "USD"
