"""
Matching strategies for transaction reconciliation.
Each strategy implements the eligibility rule of one matching pass.
"""

from abc import ABC, abstractmethod
from typing import Optional
import re

from ..models.transaction import Transaction

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]")


def normalize_description(description: str) -> str:
    """Lowercase and drop everything that is not an ASCII letter or digit."""
    return _NON_ALPHANUMERIC.sub("", description.lower())


class MatchingStrategy(ABC):
    """Abstract base class for matching strategies."""

    name: str = ""

    def __init__(self, amount_tolerance: float, confidence: float):
        """
        Args:
            amount_tolerance: Amounts differing by less than this are equal
            confidence: Confidence assigned to matches from this strategy
        """
        self.amount_tolerance = amount_tolerance
        self.confidence = confidence

    def find_match(
        self,
        bank_txn: Transaction,
        ledger_candidates: list[Transaction],
    ) -> Optional[int]:
        """
        Find the first eligible ledger candidate for a bank transaction.

        Args:
            bank_txn: Bank transaction to match
            ledger_candidates: Unmatched ledger transactions, in pool order

        Returns:
            Index of the first matching candidate, or None
        """
        for idx, ledger_txn in enumerate(ledger_candidates):
            if self.is_match(bank_txn, ledger_txn):
                return idx
        return None

    def amounts_match(self, bank_txn: Transaction, ledger_txn: Transaction) -> bool:
        return abs(ledger_txn.amount - bank_txn.amount) < self.amount_tolerance

    @abstractmethod
    def is_match(self, bank_txn: Transaction, ledger_txn: Transaction) -> bool:
        """Return True when the pair satisfies this strategy's rule."""
        pass

    @property
    @abstractmethod
    def notes(self) -> str:
        """Human-readable explanation attached to each match."""
        pass


class ExactMatchStrategy(MatchingStrategy):
    """
    Exact match strategy - matches on amount, date, and type.
    Highest confidence matching pass.
    """

    name = "exact"

    def __init__(
        self,
        amount_tolerance: float = 0.01,
        confidence: float = 1.0,
        date_tolerance_days: int = 0,
    ):
        super().__init__(amount_tolerance, confidence)
        self.date_tolerance_days = date_tolerance_days

    def is_match(self, bank_txn: Transaction, ledger_txn: Transaction) -> bool:
        return (
            self.amounts_match(bank_txn, ledger_txn)
            and abs((bank_txn.date - ledger_txn.date).days) <= self.date_tolerance_days
            and ledger_txn.type == bank_txn.type
        )

    @property
    def notes(self) -> str:
        return "Exact match on Date, Amount, and Type"


class FuzzyDateStrategy(MatchingStrategy):
    """
    Fuzzy date matching - amount and type equal, date within tolerance.
    """

    name = "fuzzy_date"

    def __init__(
        self,
        amount_tolerance: float = 0.01,
        confidence: float = 0.9,
        tolerance_days: int = 3,
    ):
        """
        Args:
            amount_tolerance: Amounts differing by less than this are equal
            confidence: Confidence assigned to matches
            tolerance_days: Maximum calendar days difference allowed
        """
        super().__init__(amount_tolerance, confidence)
        self.tolerance_days = tolerance_days

    def is_match(self, bank_txn: Transaction, ledger_txn: Transaction) -> bool:
        if not self.amounts_match(bank_txn, ledger_txn):
            return False
        if ledger_txn.type != bank_txn.type:
            return False
        date_diff = abs((bank_txn.date - ledger_txn.date).days)
        return date_diff <= self.tolerance_days

    @property
    def notes(self) -> str:
        return f"Match on Amount/Type within {self.tolerance_days} days"


class DescriptionMatchStrategy(MatchingStrategy):
    """
    Description matching - amount and type equal, and one normalized
    description contains the other. No date constraint.
    Lowest confidence pass, used as fallback.
    """

    name = "description"

    def __init__(
        self,
        amount_tolerance: float = 0.01,
        confidence: float = 0.7,
        min_length: int = 0,
    ):
        """
        Args:
            amount_tolerance: Amounts differing by less than this are equal
            confidence: Confidence assigned to matches
            min_length: Shortest normalized description allowed to match.
                With 0 an empty description is contained in every other one.
        """
        super().__init__(amount_tolerance, confidence)
        self.min_length = min_length

    def is_match(self, bank_txn: Transaction, ledger_txn: Transaction) -> bool:
        if not self.amounts_match(bank_txn, ledger_txn):
            return False
        if ledger_txn.type != bank_txn.type:
            return False

        bank_desc = normalize_description(bank_txn.description)
        ledger_desc = normalize_description(ledger_txn.description)

        if min(len(bank_desc), len(ledger_desc)) < self.min_length:
            return False

        return ledger_desc in bank_desc or bank_desc in ledger_desc

    @property
    def notes(self) -> str:
        return "Match on Amount and similar Description"
