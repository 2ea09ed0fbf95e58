"""Shared fixtures for reconciliation tests."""

from datetime import date

import pytest

from statement_recon.config import ReconConfig
from statement_recon.models.transaction import (
    Transaction,
    TransactionSource,
    TransactionType,
)
from statement_recon.sample_data import (
    SAMPLE_BANK_DATA,
    SAMPLE_LEDGER_DATA,
    generate_sample_csv,
)


def _txn(
    txn_id,
    day,
    amount,
    txn_type=TransactionType.DEBIT,
    description="",
    source=TransactionSource.BANK,
    reference=None,
):
    if isinstance(day, str):
        day = date.fromisoformat(day)
    return Transaction(
        id=txn_id,
        date=day,
        description=description,
        amount=amount,
        type=txn_type,
        source=source,
        reference=reference,
    )


@pytest.fixture
def bank_txn():
    """Factory for bank-side transactions."""

    def _make(txn_id, day, amount, txn_type=TransactionType.DEBIT, description="", **kw):
        return _txn(txn_id, day, amount, txn_type, description, TransactionSource.BANK, **kw)

    return _make


@pytest.fixture
def ledger_txn():
    """Factory for ledger-side transactions."""

    def _make(txn_id, day, amount, txn_type=TransactionType.DEBIT, description="", **kw):
        return _txn(
            txn_id, day, amount, txn_type, description, TransactionSource.LEDGER, **kw
        )

    return _make


@pytest.fixture
def default_config():
    return ReconConfig()


@pytest.fixture
def sample_bank():
    return list(SAMPLE_BANK_DATA)


@pytest.fixture
def sample_ledger():
    return list(SAMPLE_LEDGER_DATA)


@pytest.fixture
def sample_csv_files(tmp_path):
    """Write the sample bank statement and ledger CSVs to a temp directory."""
    bank_path = tmp_path / "bank.csv"
    ledger_path = tmp_path / "ledger.csv"
    bank_path.write_text(generate_sample_csv("BANK"), encoding="utf-8")
    ledger_path.write_text(generate_sample_csv("LEDGER"), encoding="utf-8")
    return bank_path, ledger_path
