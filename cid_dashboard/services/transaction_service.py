"""
Transaction loading service.
Runs reader and normalizer for one upload and turns decode failures into a LoadResult.
"""
from typing import Optional, Tuple

from cid_dashboard.core.config import get_settings
from cid_dashboard.core.exceptions import ReadError
from cid_dashboard.core.logger import setup_logger
from cid_dashboard.core.normalize import normalize_rows
from cid_dashboard.core.reader import extract_data_rows, read_spreadsheet
from cid_dashboard.core.schema import LoadResult, NormalizationResult

logger = setup_logger(__name__)


class TransactionService:
    """Service for turning an uploaded workbook into canonical transactions."""

    def __init__(self):
        """Initialize transaction service."""
        self.settings = get_settings()

    def load(
        self,
        content: bytes,
        filename: Optional[str] = None,
    ) -> Tuple[LoadResult, NormalizationResult]:
        """
        Decode and normalize one file.

        Unreadable files do not raise: they produce an empty record set and
        a LoadResult with status "unreadable" so callers can tell them
        apart from readable files without transactions.

        Args:
            content: Uploaded file bytes
            filename: Original file name

        Returns:
            Tuple of (load outcome, normalized records)
        """
        try:
            grid = read_spreadsheet(content, filename)
        except ReadError as e:
            logger.error(f"Unreadable upload {filename or ''}: {e.message} {e.details}")
            return (
                LoadResult(status="unreadable", filename=filename, error=e.message),
                NormalizationResult(),
            )

        rows = extract_data_rows(grid, self.settings.header_rows)
        result = normalize_rows(rows)

        accepted = len(result.transactions)
        if accepted == 0:
            logger.warning(f"No transactions found in {filename or 'upload'} ({len(rows)} data rows)")

        outcome = LoadResult(
            status="loaded" if accepted else "empty",
            filename=filename,
            row_count=len(rows),
            accepted=accepted,
            rejected=result.rejected,
        )
        return outcome, result
