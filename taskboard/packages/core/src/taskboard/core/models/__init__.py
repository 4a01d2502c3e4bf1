"""Taskboard Core Domain Models -- public type exports

All public model types are imported from here.
"""

from .enums import DEFAULT_PRIORITY, Priority
from .record import (
    DEFAULT_CATEGORY,
    PriorityBreakdown,
    Record,
    RecordDraft,
    RecordPatch,
    RecordStats,
    apply_patch,
    build_record,
    compute_stats,
    is_overdue,
    parse_draft,
    parse_patch,
    utc_now,
    utc_today,
)

__all__ = [
    # Enums
    "Priority",
    "DEFAULT_PRIORITY",
    # Record
    "Record",
    "RecordDraft",
    "RecordPatch",
    "DEFAULT_CATEGORY",
    "build_record",
    "apply_patch",
    "parse_draft",
    "parse_patch",
    # Derived views
    "RecordStats",
    "PriorityBreakdown",
    "compute_stats",
    "is_overdue",
    # Clock
    "utc_now",
    "utc_today",
]
