"""
Type filtering and column sorting for the detail view.
Neither operation mutates its input; both return new lists.
"""
from typing import List, Optional, Sequence

from cid_dashboard.core.aggregate import matches_type
from cid_dashboard.core.config import get_settings
from cid_dashboard.core.exceptions import ValidationError
from cid_dashboard.core.schema import SORT_DIRECTIONS, SORT_KEYS, SortState, Transaction, TypeFilter

FILTER_KINDS = ("deposit", "transfer")


def apply_type_filter(records: Sequence[Transaction], type_filter: TypeFilter) -> List[Transaction]:
    """
    Keep records whose type contains an enabled category keyword.
    Records matching neither enabled category are dropped.
    """
    settings = get_settings()
    return [
        t for t in records
        if (type_filter.show_deposits and matches_type(t, settings.deposit_keyword))
        or (type_filter.show_transfers and matches_type(t, settings.transfer_keyword))
    ]


def set_filter_kind(type_filter: TypeFilter, kind: str, enabled: bool) -> TypeFilter:
    """
    Return a new filter with one category toggled.

    Raises:
        ValidationError: If kind is not "deposit" or "transfer"
    """
    kind = (kind or "").strip().lower()
    if kind == "deposit":
        return type_filter.model_copy(update={"show_deposits": enabled})
    if kind == "transfer":
        return type_filter.model_copy(update={"show_transfers": enabled})
    raise ValidationError(
        f"Unknown filter kind: {kind!r}",
        details={"allowed": list(FILTER_KINDS)},
    )


def make_sort_state(key: str, direction: Optional[str] = "asc") -> SortState:
    """
    Validate a sort request.

    Raises:
        ValidationError: If the key or direction is unknown
    """
    if key not in SORT_KEYS:
        raise ValidationError(f"Unknown sort key: {key!r}", details={"allowed": list(SORT_KEYS)})
    direction = (direction or "asc").lower()
    if direction not in SORT_DIRECTIONS:
        raise ValidationError(
            f"Unknown sort direction: {direction!r}",
            details={"allowed": list(SORT_DIRECTIONS)},
        )
    return SortState(key=key, direction=direction)


def toggle_sort(state: SortState, key: str) -> SortState:
    """Same key flips the direction; a new key starts ascending."""
    if key == state.key:
        return make_sort_state(key, "desc" if state.direction == "asc" else "asc")
    return make_sort_state(key, "asc")


def sort_records(records: Sequence[Transaction], state: SortState) -> List[Transaction]:
    """
    Stable sort on the active column.

    Descending order keeps ties in their original relative order, so it
    is not simply the reverse of the ascending result.
    """
    key = state.key
    return sorted(
        records,
        key=lambda t: getattr(t, key),
        reverse=state.direction == "desc",
    )
