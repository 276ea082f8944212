"""
Summary metrics and chart series over a transaction list.
All functions are pure and recomputed in full on every call.
"""
from typing import Dict, List, Mapping, Optional, Sequence

from cid_dashboard.core.config import get_settings
from cid_dashboard.core.schema import (
    ChartData,
    DistributionBar,
    SummaryMetrics,
    TimelinePoint,
    Transaction,
)

TIMELINE_LABEL_FORMAT = "%d/%m/%Y %H:%M:%S"


def matches_type(transaction: Transaction, substring: str) -> bool:
    """Case-insensitive containment check on the transaction type."""
    return substring.lower() in transaction.type.lower()


def total_by_type_substring(records: Sequence[Transaction], substring: str) -> float:
    return sum((t.amount for t in records if matches_type(t, substring)), 0.0)


def total_deposits(records: Sequence[Transaction]) -> float:
    return total_by_type_substring(records, get_settings().deposit_keyword)


def total_transfers(records: Sequence[Transaction]) -> float:
    return total_by_type_substring(records, get_settings().transfer_keyword)


def balance(records: Sequence[Transaction]) -> float:
    """Deposits minus transfers."""
    return total_deposits(records) - total_transfers(records)


def totals_by_destination(records: Sequence[Transaction]) -> Dict[str, float]:
    """Summed amount per destination account, in first-seen order."""
    totals: Dict[str, float] = {}
    for t in records:
        totals[t.destination] = totals.get(t.destination, 0.0) + t.amount
    return totals


def counts_by_day(records: Sequence[Transaction], day_format: Optional[str] = None) -> Dict[str, int]:
    """Transaction count per calendar day, keyed by the formatted day, in first-seen order."""
    day_format = day_format or get_settings().day_format
    counts: Dict[str, int] = {}
    for t in records:
        day = t.date.strftime(day_format)
        counts[day] = counts.get(day, 0) + 1
    return counts


def top_entry(values: Mapping[str, float], sentinel: Optional[str] = None) -> str:
    """
    Key with the largest value.

    Ties go to the key inserted first. Callers build the mapping from
    records in chronological order, so a tie resolves to the earliest one.
    Returns the sentinel ("-" by default) for an empty mapping.
    """
    if sentinel is None:
        sentinel = get_settings().empty_sentinel
    best_key = None
    best_value = None
    for key, value in values.items():
        if best_value is None or value > best_value:
            best_key, best_value = key, value
    return sentinel if best_key is None else best_key


def top_account(records: Sequence[Transaction]) -> str:
    return top_entry(totals_by_destination(records))


def most_active_day(records: Sequence[Transaction]) -> str:
    return top_entry(counts_by_day(records))


def distinct_destination_count(records: Sequence[Transaction]) -> int:
    return len({t.destination for t in records})


def summarize(records: Sequence[Transaction]) -> SummaryMetrics:
    """
    Compute every summary metric for a record set.

    Args:
        records: Filtered transactions in chronological order

    Returns:
        SummaryMetrics; empty input yields zeros and "-" sentinels
    """
    settings = get_settings()
    deposits = total_by_type_substring(records, settings.deposit_keyword)
    transfers = total_by_type_substring(records, settings.transfer_keyword)
    by_destination = totals_by_destination(records)
    by_day = counts_by_day(records, settings.day_format)

    return SummaryMetrics(
        total_deposits=deposits,
        total_transfers=transfers,
        balance=deposits - transfers,
        totals_by_destination=by_destination,
        distinct_destinations=len(by_destination),
        counts_by_day=by_day,
        top_account=top_entry(by_destination, settings.empty_sentinel),
        most_active_day=top_entry(by_day, settings.empty_sentinel),
        transaction_count=len(records),
    )


def distribution(records: Sequence[Transaction]) -> List[DistributionBar]:
    """Deposits vs transfers bars."""
    return [
        DistributionBar(label="deposits", amount=total_deposits(records)),
        DistributionBar(label="transfers", amount=total_transfers(records)),
    ]


def timeline(records: Sequence[Transaction]) -> List[TimelinePoint]:
    """One point per record, in the order given."""
    return [
        TimelinePoint(
            label=t.date.strftime(TIMELINE_LABEL_FORMAT),
            date=t.date,
            amount=t.amount,
            type=t.type,
            destination=t.destination,
        )
        for t in records
    ]


def build_charts(records: Sequence[Transaction]) -> ChartData:
    return ChartData(distribution=distribution(records), timeline=timeline(records))
