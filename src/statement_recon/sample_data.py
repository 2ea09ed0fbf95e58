"""Bundled sample bank statement and ledger for demos and smoke tests."""

from datetime import date
from typing import Union
import io

import pandas as pd

from .models.transaction import Transaction, TransactionSource, TransactionType

SAMPLE_COLUMNS = ["Date", "Description", "Amount", "Type", "Reference"]

SAMPLE_BANK_DATA: list[Transaction] = [
    Transaction(
        id="bank-1",
        date=date(2024, 3, 1),
        description="TechSolutions Inc - Inv #2024-001",
        amount=12500.00,
        type=TransactionType.CREDIT,
        source=TransactionSource.BANK,
        reference="WIRE-998877",
    ),
    Transaction(
        id="bank-2",
        date=date(2024, 3, 3),
        description="Office Depot - Supplies",
        amount=245.50,
        type=TransactionType.DEBIT,
        source=TransactionSource.BANK,
    ),
    Transaction(
        id="bank-3",
        date=date(2024, 3, 5),
        description="Uber Ride - Client Meeting",
        amount=45.20,
        type=TransactionType.DEBIT,
        source=TransactionSource.BANK,
    ),
    Transaction(
        id="bank-4",
        date=date(2024, 3, 10),
        description="Monthly Bank Service Fee",
        amount=35.00,
        type=TransactionType.DEBIT,
        source=TransactionSource.BANK,
    ),
    Transaction(
        id="bank-5",
        date=date(2024, 3, 15),
        description="Check Deposit - Client B",
        amount=4500.00,
        type=TransactionType.CREDIT,
        source=TransactionSource.BANK,
        reference="CHK-1002",
    ),
    Transaction(
        id="bank-6",
        date=date(2024, 3, 20),
        description="AWS Cloud Services",
        amount=890.00,
        type=TransactionType.DEBIT,
        source=TransactionSource.BANK,
    ),
]

SAMPLE_LEDGER_DATA: list[Transaction] = [
    Transaction(
        id="ledger-1",
        date=date(2024, 3, 1),
        description="TechSolutions Invoice Payment",
        amount=12500.00,
        type=TransactionType.CREDIT,
        source=TransactionSource.LEDGER,
    ),
    Transaction(
        id="ledger-2",
        date=date(2024, 3, 3),
        description="Office Supplies",
        amount=245.50,
        type=TransactionType.DEBIT,
        source=TransactionSource.LEDGER,
    ),
    # Booked 3 days before the bank cleared it
    Transaction(
        id="ledger-3",
        date=date(2024, 3, 12),
        description="Client B Payment (Check)",
        amount=4500.00,
        type=TransactionType.CREDIT,
        source=TransactionSource.LEDGER,
    ),
    Transaction(
        id="ledger-4",
        date=date(2024, 3, 20),
        description="Amazon Web Services",
        amount=890.00,
        type=TransactionType.DEBIT,
        source=TransactionSource.LEDGER,
    ),
    Transaction(
        id="ledger-5",
        date=date(2024, 3, 25),
        description="Software License Annual",
        amount=1200.00,
        type=TransactionType.DEBIT,
        source=TransactionSource.LEDGER,
    ),
]


def generate_sample_csv(source: Union[TransactionSource, str]) -> str:
    """
    Render one of the sample data sets as CSV text.

    Args:
        source: BANK or LEDGER

    Returns:
        CSV content with a header row, readable by TransactionCSVParser
    """
    if not isinstance(source, TransactionSource):
        source = TransactionSource(source.upper())
    data = SAMPLE_BANK_DATA if source == TransactionSource.BANK else SAMPLE_LEDGER_DATA

    df = pd.DataFrame(
        [
            [
                t.date.isoformat(),
                t.description,
                f"{t.amount:.2f}",
                t.type.value,
                t.reference or "",
            ]
            for t in data
        ],
        columns=SAMPLE_COLUMNS,
    )

    buffer = io.StringIO()
    df.to_csv(buffer, index=False, lineterminator="\n")
    return buffer.getvalue()
