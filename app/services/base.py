from abc import ABC, abstractmethod
from typing import Optional

from app.models.outcome import CalculationOutcome
from app.models.transaction import Transaction


class AbstractFeeCalculator(ABC):
    @abstractmethod
    def calculate(self, transaction: Optional[Transaction]) -> CalculationOutcome:
        """
        Compute the fee for the given transaction.
        Never raises for business conditions — an absent transaction is
        reported as an INVALID_ARGUMENT outcome.
        """
