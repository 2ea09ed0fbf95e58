"""Utility modules."""

from .exceptions import (
    ReconciliationError,
    TransactionParseError,
    ConfigurationError,
    ReportGenerationError,
)
from .logging_config import setup_logging

__all__ = [
    "ReconciliationError",
    "TransactionParseError",
    "ConfigurationError",
    "ReportGenerationError",
    "setup_logging",
]
