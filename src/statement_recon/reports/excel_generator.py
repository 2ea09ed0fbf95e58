"""
Excel report generator for reconciliation results.
Creates multi-sheet workbooks with formatted output.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional
import logging

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Border, Side
from openpyxl.worksheet.worksheet import Worksheet

from ..models.transaction import ReconciliationReport, Transaction
from ..config import ReconConfig
from ..utils.exceptions import ReportGenerationError

logger = logging.getLogger(__name__)

# Style definitions
HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
HEADER_FONT = Font(color="FFFFFF", bold=True)
MATCH_FILL = PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid")
WEAK_MATCH_FILL = PatternFill(
    start_color="FFEB9C", end_color="FFEB9C", fill_type="solid"
)
UNMATCHED_FILL = PatternFill(
    start_color="FFC7CE", end_color="FFC7CE", fill_type="solid"
)
THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)

TRANSACTION_HEADERS = ["Date", "Description", "Amount", "Type", "Reference"]


class ExcelReportGenerator:
    """Generates Excel reconciliation reports with multiple sheets."""

    def __init__(self, config: Optional[ReconConfig] = None):
        """
        Initialize the report generator.

        Args:
            config: Application configuration
        """
        self.config = config or ReconConfig()
        self.output_config = self.config.output
        self.sheet_config = self.output_config.sheets

    def generate_report(
        self,
        report: ReconciliationReport,
        output_path: Path,
        company_name: Optional[str] = None,
    ) -> Path:
        """
        Generate the complete reconciliation workbook.

        Args:
            report: Reconciliation report
            output_path: Path for output file
            company_name: Company shown on the summary sheet

        Returns:
            Path to generated report
        """
        logger.info(f"Generating Excel report: {output_path}")

        company = company_name or self.output_config.company_name or "My Company"

        wb = Workbook()

        # Remove default sheet
        if wb.active:
            wb.remove(wb.active)

        if self.sheet_config.summary.enabled:
            self._create_summary_sheet(wb, report, company)

        if self.sheet_config.matched.enabled:
            self._create_matched_sheet(wb, report)

        if self.sheet_config.unmatched_bank.enabled:
            self._create_transaction_sheet(
                wb, self.sheet_config.unmatched_bank.name, report.unmatched_bank
            )

        if self.sheet_config.unmatched_ledger.enabled:
            self._create_transaction_sheet(
                wb, self.sheet_config.unmatched_ledger.name, report.unmatched_ledger
            )

        if not wb.sheetnames:
            raise ReportGenerationError("All report sheets are disabled")

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            wb.save(output_path)
        except OSError as e:
            logger.error(f"Failed to save workbook: {e}")
            raise ReportGenerationError(f"Failed to save workbook: {e}") from e

        logger.info(f"Report saved: {output_path}")

        return output_path

    def _create_summary_sheet(
        self, wb: Workbook, report: ReconciliationReport, company: str
    ) -> None:
        """Create the summary sheet with totals per category."""
        ws = wb.create_sheet(self.sheet_config.summary.name)
        summary = report.summary

        ws["A1"] = "Reconciliation Report"
        ws["A1"].font = Font(size=16, bold=True)
        ws.merge_cells("A1:C1")

        ws["A2"] = f"Company: {company}"
        ws["A3"] = f"Generated: {datetime.now().strftime('%Y-%m-%d')}"

        self._write_header(ws, 5, ["Category", "Count", "Total Amount"])

        rows = [
            ("Matched Transactions", summary.match_count, summary.total_matched_amount),
            (
                "Unmatched (Bank)",
                len(report.unmatched_bank),
                summary.total_unmatched_bank_amount,
            ),
            (
                "Unmatched (Ledger)",
                len(report.unmatched_ledger),
                summary.total_unmatched_ledger_amount,
            ),
        ]
        for row_num, row_data in enumerate(rows, start=6):
            for col, value in enumerate(row_data, start=1):
                cell = ws.cell(row=row_num, column=col, value=value)
                cell.border = THIN_BORDER
            ws.cell(row=row_num, column=3).number_format = "#,##0.00"

        ws["A10"] = "Currency:"
        ws["B10"] = self.output_config.currency_code

        ws["A12"] = "Matches by Pass"
        ws["A12"].font = Font(bold=True)

        row = 13
        for pass_name, count in summary.matches_by_pass.items():
            ws[f"A{row}"] = pass_name
            ws[f"B{row}"] = count
            row += 1

        ws.column_dimensions["A"].width = 30
        ws.column_dimensions["B"].width = 12
        ws.column_dimensions["C"].width = 18

    def _create_matched_sheet(self, wb: Workbook, report: ReconciliationReport) -> None:
        """Create the matched transactions sheet."""
        ws = wb.create_sheet(self.sheet_config.matched.name)

        headers = [
            "Bank Date",
            "Bank Description",
            "Bank Ref",
            "Amount",
            "Type",
            "Ledger Date",
            "Ledger Description",
            "Ledger Ref",
            "Match Confidence",
            "Notes",
            "Amount Variance",
            "Days Apart",
        ]
        self._write_header(ws, 1, headers)

        for row_num, match in enumerate(report.matches, start=2):
            bank_txn = match.bank_transaction
            ledger_txn = match.ledger_transaction

            row_data = [
                bank_txn.date,
                bank_txn.description,
                bank_txn.reference or "",
                bank_txn.amount,
                bank_txn.type.value,
                ledger_txn.date,
                ledger_txn.description,
                ledger_txn.reference or "",
                match.confidence,
                match.notes,
                round(match.amount_variance, 2),
                match.date_variance_days,
            ]

            fill = MATCH_FILL if match.confidence >= 1.0 else WEAK_MATCH_FILL
            for col, value in enumerate(row_data, start=1):
                cell = ws.cell(row=row_num, column=col, value=value)
                cell.border = THIN_BORDER
                cell.fill = fill

        self._auto_fit_columns(ws)

    def _create_transaction_sheet(
        self, wb: Workbook, sheet_name: str, transactions: tuple[Transaction, ...]
    ) -> None:
        """Create a sheet listing unmatched transactions from one side."""
        ws = wb.create_sheet(sheet_name)
        self._write_header(ws, 1, TRANSACTION_HEADERS)

        for row_num, txn in enumerate(transactions, start=2):
            row_data = [
                txn.date,
                txn.description,
                txn.amount,
                txn.type.value,
                txn.reference or "",
            ]

            for col, value in enumerate(row_data, start=1):
                cell = ws.cell(row=row_num, column=col, value=value)
                cell.border = THIN_BORDER
                cell.fill = UNMATCHED_FILL

        self._auto_fit_columns(ws)

    @staticmethod
    def _write_header(ws: Worksheet, row: int, headers: list[str]) -> None:
        for col, header in enumerate(headers, start=1):
            cell = ws.cell(row=row, column=col, value=header)
            cell.fill = HEADER_FILL
            cell.font = HEADER_FONT
            cell.border = THIN_BORDER

    def _auto_fit_columns(self, ws: Worksheet) -> None:
        """Auto-fit column widths based on content."""
        for column_cells in ws.columns:
            max_length = max(
                (len(str(cell.value)) for cell in column_cells if cell.value is not None),
                default=0,
            )
            column = column_cells[0].column_letter
            ws.column_dimensions[column].width = min(max_length + 2, 50)
