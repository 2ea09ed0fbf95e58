"""Flat CSV export of reconciliation results."""

from datetime import date
from pathlib import Path
from typing import Optional
import csv
import logging
import re

import pandas as pd

from ..models.transaction import ReconciliationReport, Transaction
from ..utils.exceptions import ReportGenerationError

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "Status",
    "Source",
    "Date",
    "Description",
    "Amount",
    "Reference",
    "Type",
    "Match Notes",
]


def safe_filename(name: str) -> str:
    """Replace every character that is not a letter or digit with '_'."""
    return re.sub(r"[^a-zA-Z0-9]", "_", name)


def _row(status: str, txn: Transaction, notes: str) -> list:
    return [
        status,
        txn.source.value,
        txn.date.isoformat(),
        txn.description,
        txn.amount,
        txn.reference or "",
        txn.type.value,
        notes,
    ]


class CSVReportExporter:
    """
    Writes a reconciliation report as one flat CSV table.

    Matched bank rows come first, then matched ledger rows, then the
    unmatched rows of each side.
    """

    def build_rows(self, report: ReconciliationReport) -> pd.DataFrame:
        rows = [_row("MATCHED", m.bank_transaction, m.notes) for m in report.matches]
        rows += [_row("MATCHED", m.ledger_transaction, m.notes) for m in report.matches]
        rows += [_row("UNMATCHED", t, "Only in Bank") for t in report.unmatched_bank]
        rows += [
            _row("UNMATCHED", t, "Only in Ledger") for t in report.unmatched_ledger
        ]
        return pd.DataFrame(rows, columns=CSV_COLUMNS)

    def export(
        self,
        report: ReconciliationReport,
        output_path: Path,
        company_name: Optional[str] = None,
    ) -> Path:
        """
        Write the report to a CSV file.

        Args:
            report: Reconciliation report to export
            output_path: Destination file
            company_name: Optional company shown in the header line

        Returns:
            Path to the written file
        """
        logger.info(f"Generating CSV report: {output_path}")

        table = self.build_rows(report)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", newline="", encoding="utf-8") as f:
                writer = csv.writer(f, lineterminator="\n")
                if company_name:
                    writer.writerow([f"Company: {company_name}"])
                writer.writerow([f"Generated: {date.today().isoformat()}"])
                writer.writerow([])
                table.to_csv(f, index=False, lineterminator="\n")
        except OSError as e:
            logger.error(f"Failed to write CSV report: {e}")
            raise ReportGenerationError(f"Failed to write CSV report: {e}") from e

        logger.info(f"Report saved: {output_path}")
        return output_path
