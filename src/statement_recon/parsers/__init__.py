"""Parsers for bank statement and ledger exports."""

from .csv_parser import TransactionCSVParser

__all__ = ["TransactionCSVParser"]
