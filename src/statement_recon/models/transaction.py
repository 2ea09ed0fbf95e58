"""Data models for reconciliation transactions and results."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class TransactionSource(str, Enum):
    """Source system for the transaction."""

    BANK = "BANK"
    LEDGER = "LEDGER"


class TransactionType(str, Enum):
    """Direction of money flow."""

    DEBIT = "DEBIT"  # Money out
    CREDIT = "CREDIT"  # Money in


@dataclass(frozen=True)
class Transaction:
    """
    A single financial event from either the bank statement or the ledger.

    Both sides are loaded into this shape before matching. Instances are
    frozen: the engine and the report exporters only ever read them.
    """

    # Unique identifier, stable within a run
    id: str

    # Transaction date (no time component)
    date: date

    # Free-text label
    description: str

    # Always non-negative, type indicates direction
    amount: float

    type: TransactionType

    source: TransactionSource

    # Check number, wire reference, etc.
    reference: Optional[str] = None


@dataclass(frozen=True)
class MatchedPair:
    """A bank transaction paired with the ledger transaction it reconciles to."""

    bank_transaction: Transaction
    ledger_transaction: Transaction

    # 0.0 to 1.0, set by the pass that produced the match
    confidence: float
    notes: str

    # Name of the matching pass
    match_pass: str = ""

    @property
    def date_variance_days(self) -> int:
        """Absolute days between the bank and ledger dates."""
        return abs((self.bank_transaction.date - self.ledger_transaction.date).days)

    @property
    def amount_variance(self) -> float:
        """Bank amount minus ledger amount."""
        return self.bank_transaction.amount - self.ledger_transaction.amount


@dataclass(frozen=True)
class ReconciliationSummary:
    """Aggregate figures derived from a reconciliation."""

    total_matched_amount: float = 0.0
    total_unmatched_bank_amount: float = 0.0
    total_unmatched_ledger_amount: float = 0.0
    match_count: int = 0
    discrepancy_count: int = 0

    # Input sizes
    total_bank_transactions: int = 0
    total_ledger_transactions: int = 0

    # Match pass breakdown
    matches_by_pass: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(
            self, "matches_by_pass", MappingProxyType(dict(self.matches_by_pass))
        )

    @property
    def match_rate_bank(self) -> float:
        """Percentage of bank transactions matched."""
        if self.total_bank_transactions == 0:
            return 0.0
        return (self.match_count / self.total_bank_transactions) * 100

    @property
    def match_rate_ledger(self) -> float:
        """Percentage of ledger transactions matched."""
        if self.total_ledger_transactions == 0:
            return 0.0
        return (self.match_count / self.total_ledger_transactions) * 100


@dataclass(frozen=True)
class ReconciliationReport:
    """Result of reconciling a bank statement against a ledger."""

    matches: tuple[MatchedPair, ...]
    unmatched_bank: tuple[Transaction, ...]
    unmatched_ledger: tuple[Transaction, ...]
    summary: ReconciliationSummary
