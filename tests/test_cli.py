"""Tests for the command-line interface."""

import logging
from datetime import datetime

import pytest
import yaml
from click.testing import CliRunner
from openpyxl import load_workbook

from statement_recon.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("statement_recon")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


@pytest.fixture
def sample_files(runner, tmp_path):
    result = runner.invoke(main, ["sample", str(tmp_path)])
    assert result.exit_code == 0, result.output
    return tmp_path / "sample_bank.csv", tmp_path / "sample_ledger.csv"


def test_version(runner):
    result = runner.invoke(main, ["--version"])

    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_sample_writes_both_files(sample_files):
    bank_path, ledger_path = sample_files

    assert bank_path.read_text().startswith("Date,Description,Amount,Type,Reference")
    assert ledger_path.exists()


def test_reconcile_writes_reports(runner, sample_files, tmp_path):
    bank_path, ledger_path = sample_files
    xlsx_path = tmp_path / "report.xlsx"
    csv_path = tmp_path / "report.csv"

    result = runner.invoke(
        main,
        [
            "reconcile",
            str(bank_path),
            str(ledger_path),
            "-o",
            str(xlsx_path),
            "--csv",
            str(csv_path),
            "--company",
            "Acme",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Reconciliation Summary" in result.output
    assert "Report generated" in result.output
    assert load_workbook(xlsx_path)["Summary"]["B6"].value == 4
    assert csv_path.read_text().splitlines()[0] == "Company: Acme"


def test_reconcile_dry_run(runner, sample_files, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    bank_path, ledger_path = sample_files

    result = runner.invoke(main, ["reconcile", str(bank_path), str(ledger_path), "--dry-run"])

    assert result.exit_code == 0, result.output
    assert "Dry run" in result.output
    assert list(tmp_path.glob("*.xlsx")) == []


def test_reconcile_default_output_name(runner, sample_files, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    bank_path, ledger_path = sample_files

    result = runner.invoke(
        main, ["reconcile", str(bank_path), str(ledger_path), "--company", "Acme Co"]
    )

    assert result.exit_code == 0, result.output
    today = datetime.now().strftime("%Y-%m-%d")
    assert (tmp_path / f"Acme_Co_reconciliation_report_{today}.xlsx").exists()


def test_fuzzy_days_override(runner, sample_files, tmp_path):
    bank_path, ledger_path = sample_files
    csv_path = tmp_path / "report.csv"

    result = runner.invoke(
        main,
        [
            "reconcile",
            str(bank_path),
            str(ledger_path),
            "-o",
            str(tmp_path / "report.xlsx"),
            "--csv",
            str(csv_path),
            "--fuzzy-days",
            "2",
        ],
    )

    assert result.exit_code == 0, result.output
    rows = csv_path.read_text().splitlines()
    # The 3-day check deposit no longer pairs up
    assert sum(1 for r in rows if r.startswith("UNMATCHED")) == 5


def test_reconcile_with_config_file(runner, sample_files, tmp_path):
    bank_path, ledger_path = sample_files
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.dump({"output": {"sheets": {"matched": {"enabled": False}}}})
    )
    xlsx_path = tmp_path / "report.xlsx"

    result = runner.invoke(
        main,
        ["reconcile", str(bank_path), str(ledger_path), "-c", str(config_path), "-o", str(xlsx_path)],
    )

    assert result.exit_code == 0, result.output
    assert "Matched Transactions" not in load_workbook(xlsx_path).sheetnames


def test_reconcile_reports_parse_errors(runner, sample_files, tmp_path):
    _, ledger_path = sample_files
    bad_bank = tmp_path / "bad.csv"
    bad_bank.write_text("Date,Description\n2024-03-01,No amount column\n")

    result = runner.invoke(main, ["reconcile", str(bad_bank), str(ledger_path)])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_parse_command(runner, sample_files):
    bank_path, _ = sample_files

    result = runner.invoke(main, ["parse", str(bank_path), "--source", "bank"])

    assert result.exit_code == 0, result.output
    assert "Total transactions: 6" in result.output


def test_init_config(runner, tmp_path):
    path = tmp_path / "config.yaml"

    result = runner.invoke(main, ["init-config", "-o", str(path)])

    assert result.exit_code == 0, result.output
    assert yaml.safe_load(path.read_text())["matching"]["fuzzyDateToleranceDays"] == 3


def test_csv_flag_without_path_uses_template(runner, sample_files, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    bank_path, ledger_path = sample_files

    result = runner.invoke(
        main,
        ["reconcile", str(bank_path), str(ledger_path), "--company", "Acme Co", "--csv"],
    )

    assert result.exit_code == 0, result.output
    today = datetime.now().strftime("%Y-%m-%d")
    csv_path = tmp_path / f"Acme_Co_reconciliation_report_{today}.csv"
    assert csv_path.read_text().splitlines()[0] == "Company: Acme Co"


def test_csv_template_from_config(runner, sample_files, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    bank_path, ledger_path = sample_files
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.dump({"output": {"csv_filename_template": "recon_{company}.csv"}})
    )

    result = runner.invoke(
        main,
        ["reconcile", str(bank_path), str(ledger_path), "-c", str(config_path), "--csv"],
    )

    assert result.exit_code == 0, result.output
    assert (tmp_path / "recon_My_Company.csv").exists()
