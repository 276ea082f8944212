"""
Pydantic models shared across the pipeline.
Canonical transaction record, derived metrics, chart series and load outcome.
"""
import math
from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

SortKey = Literal["date", "amount", "type", "origin", "destination"]
SortDirection = Literal["asc", "desc"]
LoadStatus = Literal["loaded", "empty", "unreadable"]

SORT_KEYS = ("date", "amount", "type", "origin", "destination")
SORT_DIRECTIONS = ("asc", "desc")


class Transaction(BaseModel):
    """
    Canonical transaction record built from one spreadsheet row.
    Immutable once constructed; date and amount are always valid.
    """
    model_config = ConfigDict(frozen=True)

    date: datetime
    amount: float
    type: str = ""
    origin: str = ""
    destination: str = ""

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v):
        """Reject NaN and infinities."""
        if not math.isfinite(v):
            raise ValueError("Amount must be a finite number")
        return v


class NormalizationResult(BaseModel):
    """Accepted records in chronological order plus the number of dropped rows."""
    transactions: List[Transaction] = Field(default_factory=list)
    rejected: int = 0


class SummaryMetrics(BaseModel):
    """Summary values derived from the currently filtered record set."""
    total_deposits: float = 0.0
    total_transfers: float = 0.0
    balance: float = 0.0
    totals_by_destination: Dict[str, float] = Field(default_factory=dict)
    distinct_destinations: int = 0
    counts_by_day: Dict[str, int] = Field(default_factory=dict)
    top_account: str = "-"
    most_active_day: str = "-"
    transaction_count: int = 0


class DistributionBar(BaseModel):
    """One bar of the deposits vs transfers chart."""
    label: str
    amount: float


class TimelinePoint(BaseModel):
    """One bar of the chronological timeline chart."""
    label: str
    date: datetime
    amount: float
    type: str
    destination: str


class ChartData(BaseModel):
    distribution: List[DistributionBar] = Field(default_factory=list)
    timeline: List[TimelinePoint] = Field(default_factory=list)


class TypeFilter(BaseModel):
    """Deposit/transfer toggles; a record must match an enabled category."""
    model_config = ConfigDict(frozen=True)

    show_deposits: bool = True
    show_transfers: bool = True


class SortState(BaseModel):
    """Single active sort column and its direction."""
    model_config = ConfigDict(frozen=True)

    key: SortKey = "date"
    direction: SortDirection = "asc"


class LoadResult(BaseModel):
    """
    Outcome of a file load.

    `empty` means the file was readable but produced no transactions;
    `unreadable` means decoding failed and `error` holds the cause.
    """
    status: LoadStatus
    filename: Optional[str] = None
    row_count: int = 0
    accepted: int = 0
    rejected: int = 0
    error: Optional[str] = None
