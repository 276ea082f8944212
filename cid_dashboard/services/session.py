"""
Dashboard session state.
Holds the canonical record set plus filter and sort selections, and derives
the view, summary and chart data from them on every access.
"""
import asyncio
from typing import List, Optional

from cid_dashboard.core.aggregate import build_charts, summarize
from cid_dashboard.core.logger import setup_logger
from cid_dashboard.core.schema import (
    ChartData,
    LoadResult,
    NormalizationResult,
    SortState,
    SummaryMetrics,
    Transaction,
    TypeFilter,
)
from cid_dashboard.core.view import (
    apply_type_filter,
    make_sort_state,
    set_filter_kind,
    sort_records,
    toggle_sort,
)
from cid_dashboard.services.transaction_service import TransactionService

logger = setup_logger(__name__)


class DashboardSession:
    """
    One user's in-memory dashboard.

    The record set is replaced wholesale by each completed upload. Only the
    most recently initiated upload may commit; an older decode that finishes
    later is discarded.
    """

    def __init__(self, service: Optional[TransactionService] = None):
        self.service = service or TransactionService()
        self.type_filter = TypeFilter()
        self.sort_state = SortState()
        self.last_load: Optional[LoadResult] = None
        self._transactions: List[Transaction] = []
        self._generation = 0

    async def load_file(self, content: bytes, filename: Optional[str] = None) -> LoadResult:
        """
        Decode an upload off the event loop and commit it if still current.

        Args:
            content: Uploaded file bytes
            filename: Original file name

        Returns:
            LoadResult of this upload (committed or not)
        """
        self._generation += 1
        generation = self._generation
        logger.info(f"Load #{generation} started for {filename or 'upload'}")

        loop = asyncio.get_running_loop()
        outcome, result = await loop.run_in_executor(None, self.service.load, content, filename)

        if generation != self._generation:
            logger.warning(
                f"Load #{generation} for {filename or 'upload'} superseded by load "
                f"#{self._generation}, discarding"
            )
            return outcome

        self._commit(outcome, result)
        return outcome

    def _commit(self, outcome: LoadResult, result: NormalizationResult) -> None:
        self._transactions = list(result.transactions)
        self.last_load = outcome
        logger.info(
            f"Committed {outcome.accepted} transactions from {outcome.filename or 'upload'} "
            f"(status={outcome.status}, rejected={outcome.rejected})"
        )

    def clear(self) -> None:
        """Drop all records; any upload still decoding will not commit."""
        self._generation += 1
        self._transactions = []
        self.last_load = None
        logger.info("Session cleared")

    def set_type_filter(self, kind: str, enabled: bool) -> TypeFilter:
        self.type_filter = set_filter_kind(self.type_filter, kind, enabled)
        return self.type_filter

    def set_sort(self, key: str, direction: Optional[str] = "asc") -> SortState:
        self.sort_state = make_sort_state(key, direction)
        return self.sort_state

    def toggle_sort(self, key: str) -> SortState:
        """Column-header click: same key flips direction, new key starts ascending."""
        self.sort_state = toggle_sort(self.sort_state, key)
        return self.sort_state

    @property
    def transactions(self) -> List[Transaction]:
        """All normalized records, chronological, unfiltered."""
        return list(self._transactions)

    @property
    def filtered(self) -> List[Transaction]:
        """Records passing the type filter, still in chronological order."""
        return apply_type_filter(self._transactions, self.type_filter)

    @property
    def records(self) -> List[Transaction]:
        """Filtered records in the active sort order."""
        return sort_records(self.filtered, self.sort_state)

    @property
    def summary(self) -> SummaryMetrics:
        # Chronological input keeps the top-entry tie-break stable
        return summarize(self.filtered)

    @property
    def charts(self) -> ChartData:
        return build_charts(self.filtered)
