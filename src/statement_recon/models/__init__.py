"""Data models for reconciliation."""

from .transaction import (
    Transaction,
    TransactionSource,
    TransactionType,
    MatchedPair,
    ReconciliationReport,
    ReconciliationSummary,
)

__all__ = [
    "Transaction",
    "TransactionSource",
    "TransactionType",
    "MatchedPair",
    "ReconciliationReport",
    "ReconciliationSummary",
]
