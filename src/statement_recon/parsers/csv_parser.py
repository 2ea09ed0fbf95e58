"""
CSV transaction parser.
Parses bank statement and ledger CSV exports into transaction models.
"""

from datetime import date, datetime
from pathlib import Path
from typing import Optional, Union
import logging
import math

import pandas as pd

from ..models.transaction import (
    Transaction,
    TransactionSource,
    TransactionType,
)
from ..config import ReconConfig
from ..utils.exceptions import TransactionParseError

logger = logging.getLogger(__name__)


class TransactionCSVParser:
    """
    Parser for tabular transaction exports.

    Expects one row per transaction with date, description, amount, type
    and reference columns (names configurable). When the type column is
    absent or blank the direction is taken from the amount's sign.
    """

    def __init__(
        self,
        config: ReconConfig,
        source: Union[TransactionSource, str] = TransactionSource.BANK,
    ):
        """
        Initialize the parser with configuration.

        Args:
            config: Application configuration object
            source: Which side of the reconciliation the file belongs to
        """
        self.config = config
        if not isinstance(source, TransactionSource):
            source = TransactionSource(source.upper())
        self.source = source
        self.csv_config = config.input.csv
        self.column_mappings = self.csv_config.column_mappings

    def parse_file(self, file_path: Path) -> list[Transaction]:
        """
        Parse a CSV file and return transactions.

        Args:
            file_path: Path to the CSV file

        Returns:
            List of transactions in file order

        Raises:
            TransactionParseError: If the file cannot be read
        """
        logger.info(f"Parsing {self.source.value} CSV file: {file_path}")

        try:
            df = pd.read_csv(
                file_path,
                encoding=self.csv_config.encoding,
                delimiter=self.csv_config.delimiter,
                dtype=str,
                keep_default_na=False,
            )
        except Exception as e:
            logger.error(f"Failed to read CSV file: {e}")
            raise TransactionParseError(f"Failed to read CSV file: {e}") from e

        transactions = self.parse_dataframe(df)
        logger.info(
            f"Extracted {len(transactions)} transactions from {self.source.value} CSV"
        )

        return transactions

    def parse_dataframe(self, df: pd.DataFrame) -> list[Transaction]:
        """
        Convert DataFrame rows to transactions, skipping invalid rows.

        Args:
            df: DataFrame holding the export

        Returns:
            List of transactions
        """
        date_col = self.column_mappings.get("date", "Date")
        amount_col = self.column_mappings.get("amount", "Amount")
        missing = [c for c in (date_col, amount_col) if c not in df.columns]
        if missing:
            raise TransactionParseError(
                f"Missing required column(s): {', '.join(missing)}"
            )

        transactions: list[Transaction] = []

        for idx, row in df.iterrows():
            txn = self._normalize_row(row, int(idx))
            if txn:
                transactions.append(txn)

        return transactions

    def _normalize_row(self, row: pd.Series, idx: int) -> Optional[Transaction]:
        """
        Convert a DataFrame row to a Transaction.

        Args:
            row: Pandas Series representing a row
            idx: Row index

        Returns:
            Transaction or None if row is invalid
        """
        date_col = self.column_mappings.get("date", "Date")
        desc_col = self.column_mappings.get("description", "Description")
        amount_col = self.column_mappings.get("amount", "Amount")
        type_col = self.column_mappings.get("type", "Type")
        ref_col = self.column_mappings.get("reference", "Reference")

        txn_date = self._parse_date(row.get(date_col))
        if not txn_date:
            logger.warning(f"Row {idx}: Invalid date, skipping")
            return None

        amount = self._parse_amount(row.get(amount_col))
        if amount is None:
            logger.warning(f"Row {idx}: No valid amount found, skipping")
            return None

        txn_type = self._parse_type(row.get(type_col))
        if txn_type is None:
            txn_type = TransactionType.DEBIT if amount < 0 else TransactionType.CREDIT

        description = self._clean(row.get(desc_col)) or ""
        reference = self._clean(row.get(ref_col))

        return Transaction(
            id=f"{self.source.value}-{idx:05d}",
            date=txn_date,
            description=description,
            amount=abs(amount),
            type=txn_type,
            source=self.source,
            reference=reference,
        )

    def _parse_date(self, date_value) -> Optional[date]:
        """
        Parse a date value from the CSV.

        Args:
            date_value: Date value (string or datetime)

        Returns:
            Python date object or None
        """
        if date_value is None or pd.isna(date_value) or date_value == "":
            return None

        if isinstance(date_value, datetime):
            return date_value.date()
        if isinstance(date_value, date):
            return date_value

        try:
            return datetime.strptime(
                str(date_value).strip(), self.csv_config.date_format
            ).date()
        except ValueError:
            # Try pandas parser as fallback
            try:
                return pd.to_datetime(date_value).date()
            except (ValueError, TypeError):
                return None

    def _parse_amount(self, amount_value) -> Optional[float]:
        """
        Parse a (possibly signed) amount value from the CSV.

        Args:
            amount_value: Amount value (string, float, or None)

        Returns:
            Float amount or None
        """
        if amount_value is None or pd.isna(amount_value) or amount_value == "":
            return None

        if isinstance(amount_value, str):
            cleaned = amount_value.replace("$", "").replace(",", "").strip()
            # Accounting negatives: (123.45)
            if cleaned.startswith("(") and cleaned.endswith(")"):
                cleaned = "-" + cleaned[1:-1]
            amount_value = cleaned

        try:
            value = float(amount_value)
        except (TypeError, ValueError):
            return None

        # float() accepts "nan" and "inf"
        if not math.isfinite(value):
            return None
        return value

    def _parse_type(self, type_value) -> Optional[TransactionType]:
        """Map a type cell to a TransactionType, None when blank or unknown."""
        cleaned = self._clean(type_value)
        if not cleaned:
            return None
        try:
            return TransactionType(cleaned.upper())
        except ValueError:
            logger.debug(f"Unrecognized transaction type: {cleaned}")
            return None

    @staticmethod
    def _clean(value) -> Optional[str]:
        if value is None or pd.isna(value):
            return None
        text = str(value).strip()
        return text or None
