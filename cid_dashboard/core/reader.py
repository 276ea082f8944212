"""
Spreadsheet decoding.
Turns an uploaded workbook blob (legacy .xls or zipped .xlsx) into a grid of raw cell values.
"""
import io
from typing import Any, List, Optional, Sequence

import pandas as pd

from cid_dashboard.core.config import get_settings
from cid_dashboard.core.exceptions import ReadError
from cid_dashboard.core.logger import setup_logger

logger = setup_logger(__name__)

# Container signatures
OLE2_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
ZIP_SIGNATURE = b"PK\x03\x04"

Grid = List[List[Any]]


def detect_engine(content: bytes) -> Optional[str]:
    """
    Pick the pandas Excel engine from the container signature.

    Args:
        content: Raw file bytes

    Returns:
        "xlrd" for OLE2 (legacy .xls), "openpyxl" for ZIP (.xlsx), None otherwise
    """
    if content.startswith(OLE2_SIGNATURE):
        return "xlrd"
    if content.startswith(ZIP_SIGNATURE):
        return "openpyxl"
    return None


def _clean_cell(value: Any) -> Any:
    """Map pandas missing markers (NaN, NaT) to None."""
    if value is None:
        return None
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return None
    return value


def read_spreadsheet(content: bytes, filename: Optional[str] = None) -> Grid:
    """
    Decode the first sheet of a workbook into rows of raw cell values.

    Args:
        content: Uploaded file bytes
        filename: Original file name, used for diagnostics only

    Returns:
        Grid of rows; missing cells are None

    Raises:
        ReadError: If the blob is not a recognized spreadsheet or cannot be decoded
    """
    details = {"filename": filename, "size": len(content or b"")}

    if not content:
        raise ReadError("Uploaded file is empty", details=details)

    engine = detect_engine(content)
    if engine is None:
        raise ReadError("Unrecognized spreadsheet container", details=details)

    logger.info(f"Decoding {filename or 'upload'} ({len(content)} bytes, engine={engine})")

    try:
        df = pd.read_excel(
            io.BytesIO(content),
            sheet_name=0,
            header=None,
            engine=engine,
            # Keep each cell as the engine decoded it; only truly empty cells are missing
            dtype=object,
            keep_default_na=False,
            na_values=[""],
        )
    except Exception as e:
        logger.error(f"Failed to decode {filename or 'upload'}: {e}")
        raise ReadError(
            "Invalid spreadsheet file",
            details={**details, "engine": engine, "error": str(e)},
        )

    grid = [
        [_clean_cell(value) for value in row]
        for row in df.itertuples(index=False, name=None)
    ]

    logger.info(f"Decoded {len(grid)} rows x {len(df.columns)} columns")
    return grid


def extract_data_rows(grid: Sequence[Sequence[Any]], header_rows: Optional[int] = None) -> List[Sequence[Any]]:
    """
    Drop the fixed header region at the top of the sheet.

    Args:
        grid: Full sheet grid
        header_rows: Rows to skip (defaults to configured HEADER_ROWS)

    Returns:
        Data rows only
    """
    if header_rows is None:
        header_rows = get_settings().header_rows
    return list(grid[header_rows:])
