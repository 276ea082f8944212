"""
Row normalization.
Maps raw spreadsheet rows to canonical Transaction records, tolerating
heterogeneous date encodings, locale-formatted amounts and missing cells.
"""
import math
import numbers
import re
from datetime import date, datetime, timedelta, timezone
from typing import Any, Iterable, Optional, Sequence

import numpy as np
import pandas as pd

from cid_dashboard.core.logger import setup_logger
from cid_dashboard.core.reader import extract_data_rows
from cid_dashboard.core.schema import NormalizationResult, Transaction

logger = setup_logger(__name__)

# Fixed column offsets (A, C, D, E, F)
DATE_COL = 0
AMOUNT_COL = 2
TYPE_COL = 3
ORIGIN_COL = 4
DESTINATION_COL = 5

# Spreadsheet serial day 25569 is 1970-01-01 (serial 0 is 1899-12-30)
EXCEL_UNIX_EPOCH_OFFSET = 25569
MS_PER_DAY = 86_400_000
UNIX_EPOCH = datetime(1970, 1, 1)

# D/M/Y with optional "H:M[:S]" separated by a space or "T"
DMY_PATTERN = re.compile(
    r"^(\d{1,2})/(\d{1,2})/(\d{2,4})"
    r"(?:[ T](\d{1,2}):(\d{1,2})(?::(\d{1,2}))?)?$"
)

# Everything except digits, minus sign and period
AMOUNT_JUNK = re.compile(r"[^0-9.\-]")


def _is_missing(value: Any) -> bool:
    """True for None and pandas/numpy missing markers (NaN, NaT)."""
    if value is None:
        return True
    if pd.api.types.is_scalar(value):
        try:
            return bool(pd.isna(value))
        except (TypeError, ValueError):
            return False
    return False


def _is_real_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _naive(moment: datetime) -> datetime:
    """Convert aware datetimes to naive UTC; naive ones pass through."""
    if moment.tzinfo is not None:
        return moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment


def excel_serial_to_datetime(serial: float) -> Optional[datetime]:
    """
    Convert a spreadsheet date serial to a datetime.

    Millisecond precision, half-up rounding. Returns None for
    non-finite or out-of-range serials.
    """
    try:
        serial = float(serial)
        if not math.isfinite(serial):
            return None
        unix_ms = math.floor((serial - EXCEL_UNIX_EPOCH_OFFSET) * MS_PER_DAY + 0.5)
        return UNIX_EPOCH + timedelta(milliseconds=unix_ms)
    except (OverflowError, ValueError):
        return None


def _from_native(value: Any) -> Optional[datetime]:
    if isinstance(value, np.datetime64):
        value = pd.Timestamp(value)
    if isinstance(value, pd.Timestamp):
        return _naive(value.to_pydatetime())
    if isinstance(value, datetime):
        return _naive(value)
    # plain date, no time component
    return datetime(value.year, value.month, value.day)


def _expand_year(year_text: str) -> int:
    year = int(year_text)
    if len(year_text) == 2:
        # Same pivot as strptime's %y
        year += 2000 if year < 69 else 1900
    return year


def _from_text(text: str) -> Optional[datetime]:
    text = text.strip()
    if not text:
        return None

    match = DMY_PATTERN.match(text)
    if match:
        day, month, year, hour, minute, second = match.groups()
        try:
            return datetime(
                _expand_year(year),
                int(month),
                int(day),
                int(hour or 0),
                int(minute or 0),
                int(second or 0),
            )
        except ValueError:
            # Matched the day-first shape but is not a real calendar date
            return None

    try:
        parsed = pd.to_datetime(text, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if _is_missing(parsed):
        return None
    return _naive(parsed.to_pydatetime())


def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse a date cell.

    Encodings are tried in order: spreadsheet serial number, native
    date/datetime/datetime64 value, then "D/M/Y[ H:M[:S]]" text with a free-form
    text fallback.

    Args:
        value: Raw cell value

    Returns:
        Naive datetime, or None if the cell is unparseable
    """
    if _is_missing(value):
        return None
    if _is_real_number(value):
        return excel_serial_to_datetime(value)
    if isinstance(value, (datetime, date, np.datetime64)):
        return _from_native(value)
    if isinstance(value, str):
        return _from_text(value)
    return None


def parse_amount(value: Any) -> Optional[float]:
    """
    Parse an amount cell.
    Thousands separators, currency symbols and whitespace are stripped.

    Args:
        value: Raw amount value (string or number)

    Returns:
        Signed float, or None if the cell is unparseable
    """
    if _is_missing(value) or isinstance(value, bool):
        return None

    if _is_real_number(value):
        result = float(value)
        return result if math.isfinite(result) else None

    amount_str = str(value).strip()
    if not amount_str:
        return None

    # A comma after the last period means a decimal comma ("1.234,56"),
    # which cannot be told apart from a thousands separator safely
    last_period = amount_str.rfind(".")
    if last_period != -1 and amount_str.rfind(",") > last_period:
        logger.debug(f"Rejected decimal-comma amount: '{value}'")
        return None

    cleaned = AMOUNT_JUNK.sub("", amount_str)
    if not cleaned:
        return None

    try:
        result = float(cleaned)
    except ValueError:
        return None
    return result if math.isfinite(result) else None


def cell_text(value: Any) -> str:
    """
    Coerce a cell to text, returning "" when absent.
    Integral floats (account numbers read as numbers) lose the trailing ".0".
    """
    if _is_missing(value):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def normalize_type(value: Any) -> str:
    return cell_text(value).strip().lower()


def _cell(row: Sequence[Any], index: int) -> Any:
    return row[index] if index < len(row) else None


def normalize_row(row: Optional[Sequence[Any]]) -> Optional[Transaction]:
    """
    Build a Transaction from one raw row.

    Args:
        row: Raw cell values at fixed offsets

    Returns:
        Transaction, or None if the date or amount cannot be parsed
    """
    if not row:
        return None

    tx_date = parse_date(_cell(row, DATE_COL))
    if tx_date is None:
        logger.debug(f"Dropped row with unparseable date: {_cell(row, DATE_COL)!r}")
        return None

    amount = parse_amount(_cell(row, AMOUNT_COL))
    if amount is None:
        logger.debug(f"Dropped row with unparseable amount: {_cell(row, AMOUNT_COL)!r}")
        return None

    return Transaction(
        date=tx_date,
        amount=amount,
        type=normalize_type(_cell(row, TYPE_COL)),
        origin=cell_text(_cell(row, ORIGIN_COL)),
        destination=cell_text(_cell(row, DESTINATION_COL)),
    )


def normalize_rows(rows: Iterable[Optional[Sequence[Any]]]) -> NormalizationResult:
    """
    Normalize data rows and order the accepted records chronologically.

    Args:
        rows: Data rows (header region already removed)

    Returns:
        NormalizationResult with records sorted by date (stable) and the rejected count
    """
    accepted = []
    rejected = 0

    for row in rows:
        transaction = normalize_row(row)
        if transaction is None:
            rejected += 1
        else:
            accepted.append(transaction)

    accepted.sort(key=lambda t: t.date)

    logger.info(f"Normalized {len(accepted)} transactions ({rejected} rows rejected)")
    return NormalizationResult(transactions=accepted, rejected=rejected)


def normalize_grid(grid: Sequence[Sequence[Any]], header_rows: Optional[int] = None) -> NormalizationResult:
    """Skip the header region of a full sheet grid, then normalize the rest."""
    return normalize_rows(extract_data_rows(grid, header_rows))
