"""
Command-line interface for the bank statement to ledger reconciliation tool.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional
import logging
import sys

import click
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from . import __version__
from .config import load_config, generate_default_config
from .matching.engine import ReconciliationEngine
from .models.transaction import ReconciliationReport, TransactionSource
from .parsers.csv_parser import TransactionCSVParser
from .reports.csv_exporter import CSVReportExporter, safe_filename
from .reports.excel_generator import ExcelReportGenerator
from .sample_data import generate_sample_csv
from .utils.logging_config import setup_logging

console = Console()


@click.group()
@click.version_option(version=__version__)
def main():
    """Bank Statement / Ledger Reconciliation Tool."""
    pass


@main.command()
@click.argument("bank_file", type=click.Path(exists=True, path_type=Path))
@click.argument("ledger_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file (YAML)",
)
@click.option("-o", "--output", type=click.Path(path_type=Path), help="Output Excel file path")
@click.option(
    "--csv",
    "csv_output",
    is_flag=False,
    flag_value="auto",
    default=None,
    help="Also write a CSV report; without a path it is named from the config template",
)
@click.option("--company", default=None, help="Company name shown in reports")
@click.option(
    "--fuzzy-days", type=int, default=None, help="Override fuzzy date window in days"
)
@click.option(
    "--amount-tolerance",
    type=float,
    default=None,
    help="Override amount tolerance",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option(
    "--dry-run", is_flag=True, help="Reconcile and show summary without writing reports"
)
def reconcile(
    bank_file: Path,
    ledger_file: Path,
    config: Optional[Path],
    output: Optional[Path],
    csv_output: Optional[str],
    company: Optional[str],
    fuzzy_days: Optional[int],
    amount_tolerance: Optional[float],
    verbose: bool,
    dry_run: bool,
):
    """
    Reconcile a bank statement export with a ledger export.

    BANK_FILE: Path to the bank statement CSV
    LEDGER_FILE: Path to the ledger CSV
    """
    try:
        recon_config = load_config(config)

        log_level = logging.DEBUG if verbose else recon_config.logging.level
        log_file = Path(recon_config.logging.file) if recon_config.logging.file else None
        setup_logging(log_level, log_file, recon_config.logging.format)

        # Apply command-line overrides
        if fuzzy_days is not None:
            recon_config.matching.fuzzy_date_tolerance_days = fuzzy_days
        if amount_tolerance is not None:
            recon_config.matching.amount_tolerance = amount_tolerance

        company = company or recon_config.output.company_name

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Parsing bank statement...", total=None)
            bank_transactions = TransactionCSVParser(
                recon_config, TransactionSource.BANK
            ).parse_file(bank_file)
            progress.update(task, completed=True)

            task = progress.add_task("Parsing ledger...", total=None)
            ledger_transactions = TransactionCSVParser(
                recon_config, TransactionSource.LEDGER
            ).parse_file(ledger_file)
            progress.update(task, completed=True)

            task = progress.add_task("Running reconciliation...", total=None)
            engine = ReconciliationEngine(recon_config)
            report = engine.reconcile(bank_transactions, ledger_transactions)
            progress.update(task, completed=True)

        _display_summary(report, recon_config.output.currency_code)

        if dry_run:
            console.print("\n[yellow]Dry run - no report generated[/yellow]")
            return

        if output is None:
            output = Path(
                _render_filename(recon_config.output.excel_filename_template, company)
            )

        report_path = ExcelReportGenerator(recon_config).generate_report(
            report, output, company_name=company
        )
        console.print(f"\n[green]Report generated: {report_path}[/green]")

        if csv_output is not None:
            if csv_output == "auto":
                csv_output = _render_filename(
                    recon_config.output.csv_filename_template, company
                )
            csv_path = CSVReportExporter().export(
                report, Path(csv_output), company_name=company
            )
            console.print(f"[green]CSV report generated: {csv_path}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            console.print_exception()
        sys.exit(1)


@main.command("parse")
@click.argument("csv_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "-s",
    "--source",
    type=click.Choice(["bank", "ledger"], case_sensitive=False),
    default="bank",
    show_default=True,
)
@click.option("-c", "--config", type=click.Path(exists=True, path_type=Path))
def parse(csv_file: Path, source: str, config: Optional[Path]):
    """
    Parse a transaction CSV and display its contents.

    CSV_FILE: Path to a bank statement or ledger CSV
    """
    try:
        recon_config = load_config(config)
        parser = TransactionCSVParser(recon_config, source)
        transactions = parser.parse_file(csv_file)
    except Exception as e:
        console.print(f"[red]Error parsing file: {e}[/red]")
        sys.exit(1)

    table = Table(title=f"{parser.source.value.title()} Transactions: {csv_file.name}")
    table.add_column("ID")
    table.add_column("Date")
    table.add_column("Reference")
    table.add_column("Amount", justify="right")
    table.add_column("Type")
    table.add_column("Description")

    for txn in transactions[:20]:  # Show first 20
        table.add_row(
            txn.id,
            str(txn.date),
            txn.reference or "-",
            f"{txn.amount:,.2f}",
            txn.type.value,
            (
                txn.description[:40] + "..."
                if len(txn.description) > 40
                else txn.description
            ),
        )

    console.print(table)

    if len(transactions) > 20:
        console.print(f"\n... and {len(transactions) - 20} more transactions")

    console.print(f"\nTotal transactions: {len(transactions)}")


@main.command("sample")
@click.argument(
    "output_dir", type=click.Path(file_okay=False, path_type=Path), default=Path(".")
)
def sample(output_dir: Path):
    """Write the bundled sample bank statement and ledger as CSV files."""
    output_dir.mkdir(parents=True, exist_ok=True)
    for source in TransactionSource:
        path = output_dir / f"sample_{source.value.lower()}.csv"
        path.write_text(generate_sample_csv(source), encoding="utf-8")
        console.print(f"[green]Sample file written: {path}[/green]")


@main.command("init-config")
@click.option(
    "-o", "--output", type=click.Path(path_type=Path), default=Path("config.yaml")
)
def init_config(output: Path):
    """Generate a sample configuration file."""
    generate_default_config(output)
    console.print(f"[green]Configuration file generated: {output}[/green]")


def _render_filename(template: str, company: Optional[str]) -> str:
    """Fill the company/date placeholders of an output filename template."""
    return template.format(
        company=safe_filename(company or "My Company"),
        date=datetime.now().strftime("%Y-%m-%d"),
    )


def _display_summary(report: ReconciliationReport, currency_code: str) -> None:
    """Display reconciliation summary in console."""
    summary = report.summary

    table = Table(title="Reconciliation Summary")
    table.add_column("Category", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Total Amount", justify="right")

    table.add_row(
        "Matched Transactions",
        str(summary.match_count),
        f"{currency_code} {summary.total_matched_amount:,.2f}",
    )
    table.add_row(
        "Unmatched (Bank)",
        str(len(report.unmatched_bank)),
        f"{currency_code} {summary.total_unmatched_bank_amount:,.2f}",
    )
    table.add_row(
        "Unmatched (Ledger)",
        str(len(report.unmatched_ledger)),
        f"{currency_code} {summary.total_unmatched_ledger_amount:,.2f}",
    )

    console.print(table)

    console.print(
        f"Discrepancies: {summary.discrepancy_count}  "
        f"Bank match rate: {summary.match_rate_bank:.1f}%  "
        f"Ledger match rate: {summary.match_rate_ledger:.1f}%"
    )
    for pass_name, count in summary.matches_by_pass.items():
        console.print(f"  {pass_name}: {count}")


if __name__ == "__main__":
    main()
