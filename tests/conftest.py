"""
Shared fixtures for the test suite.
"""
import io
from datetime import datetime

import pytest
from openpyxl import Workbook

from cid_dashboard.core.config import reset_settings
from cid_dashboard.core.schema import Transaction

HEADER_ROWS = [
    ["CID - Investigaciones Financieras"],
    ["Account statement"],
    ["Holder: J. Doe"],
    ["Period: 01/03/2024 - 31/03/2024"],
    ["Generated: 01/04/2024"],
    ["Date", "Ref", "Amount", "Type", "Origin", "Destination"],
]

ENV_VARS = (
    "APP_NAME", "HOST", "PORT", "LOG_LEVEL", "HEADER_ROWS", "MAX_UPLOAD_MB",
    "DAY_FORMAT", "DEPOSIT_KEYWORD", "TRANSFER_KEYWORD", "EMPTY_SENTINEL",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Each test starts from default settings."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    reset_settings()
    yield
    reset_settings()


def build_workbook(rows) -> bytes:
    """Write rows to the first sheet of an in-memory .xlsx file."""
    wb = Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def statement_rows():
    """Six header rows, two deposits, one transfer and one row with a bad date."""
    return HEADER_ROWS + [
        ["15/03/2024 10:30", "R3", 75, "Transfer", "ACC-1", "ACC-9"],
        [datetime(2024, 3, 1, 9, 0), "R1", "$1,234.56", " Deposit ", "ACC-7", "ACC-1"],
        ["pending", "R4", 10, "deposit", "ACC-7", "ACC-1"],
        [45352, "R2", 200, "DEPOSIT-CASH", "", "ACC-2"],
    ]


@pytest.fixture
def statement_xlsx(statement_rows) -> bytes:
    return build_workbook(statement_rows)


def tx(day, amount, type_="deposit", destination="ACC-1", origin="ACC-0", hour=0):
    return Transaction(
        date=datetime(2024, 3, day, hour),
        amount=amount,
        type=type_,
        origin=origin,
        destination=destination,
    )


@pytest.fixture
def sample_records():
    """Three deposits (100, 200, 300) and two transfers (50, 75)."""
    return [
        tx(1, 100, "deposit", "ACC-1"),
        tx(2, 50, "transfer", "ACC-2"),
        tx(2, 200, "deposit", "ACC-3", hour=5),
        tx(3, 75, "transfer", "ACC-1"),
        tx(4, 300, "deposit", "ACC-2"),
    ]


@pytest.fixture
def make_tx():
    return tx


@pytest.fixture
def make_workbook():
    return build_workbook
