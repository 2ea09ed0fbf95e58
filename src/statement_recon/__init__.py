"""Bank statement to ledger reconciliation."""

from .matching.engine import ReconciliationEngine, reconcile
from .models.transaction import (
    Transaction,
    TransactionSource,
    TransactionType,
    MatchedPair,
    ReconciliationReport,
    ReconciliationSummary,
)

__version__ = "0.1.0"

__all__ = [
    "ReconciliationEngine",
    "reconcile",
    "Transaction",
    "TransactionSource",
    "TransactionType",
    "MatchedPair",
    "ReconciliationReport",
    "ReconciliationSummary",
]
