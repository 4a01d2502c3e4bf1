"""Filter engine -- status filter then free-text search, ANDed

Filtering never mutates or re-sorts its input.
"""

from collections.abc import Iterable
from datetime import date
from enum import StrEnum

from taskboard.core.models import Priority, Record, is_overdue, utc_today


class StatusFilter(StrEnum):
    """Status filter applied before the search term"""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"
    HIGH_PRIORITY = "high-priority"
    OVERDUE = "overdue"


def matches_status(record: Record, status: StatusFilter, today: date) -> bool:
    if status == StatusFilter.ACTIVE:
        return not record.completed
    if status == StatusFilter.COMPLETED:
        return record.completed
    if status == StatusFilter.HIGH_PRIORITY:
        return record.priority == Priority.HIGH
    if status == StatusFilter.OVERDUE:
        return is_overdue(record, today)
    return True


def matches_search(record: Record, search: str) -> bool:
    """Case-insensitive substring match over title, description and category"""
    term = search.strip().casefold()
    if not term:
        return True
    return any(
        term in field.casefold()
        for field in (record.title, record.description, record.category)
    )


def filter_records(
    records: Iterable[Record],
    status: StatusFilter | str = StatusFilter.ALL,
    search: str = "",
    today: date | None = None,
) -> list[Record]:
    """Visible subset of records, input order preserved

    Args:
        records: cached records, newest first
        status: StatusFilter or its string value
        search: free-text term, blank means no search
        today: UTC date for the overdue filter (defaults to now)

    Raises:
        ValueError: unknown status value
    """
    status = StatusFilter(status)
    today = today or utc_today()
    return [
        record
        for record in records
        if matches_status(record, status, today) and matches_search(record, search)
    ]
