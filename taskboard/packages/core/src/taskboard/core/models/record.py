"""Record Domain Model -- task/appointment record lifecycle

A Record is created from a RecordDraft (store assigns id + timestamps),
changed only through RecordPatch sparse merges, and hard-deleted.
Overdue is derived at read time by is_overdue() and never persisted.
"""

from collections.abc import Iterable, Mapping
from datetime import UTC, date, datetime
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from ..exceptions import RecordValidationError
from .enums import DEFAULT_PRIORITY, Priority

DEFAULT_CATEGORY = "General"

# Patch fields where an explicit null is meaningful (clears the value)
NULLABLE_FIELDS: frozenset[str] = frozenset({"due_date"})

TITLE_REQUIRED = "Title is required"


def utc_now() -> datetime:
    """Current time, timezone-aware UTC"""
    return datetime.now(UTC)


def utc_today(now: datetime | None = None) -> date:
    """UTC calendar date of `now` (defaults to the current time)"""
    now = now or utc_now()
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return now.astimezone(UTC).date()


def _blank_to_none(value: Any) -> Any:
    """Empty form inputs arrive as "" and mean "not provided\""""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _date_part(value: Any) -> Any:
    """Accept full ISO timestamps for date fields, keeping the UTC date part"""
    value = _blank_to_none(value)
    if isinstance(value, datetime):
        return utc_today(value)
    if isinstance(value, str) and "T" in value:
        try:
            return utc_today(datetime.fromisoformat(value))
        except ValueError:
            return value
    return value


class _CamelModel(BaseModel):
    """JSON uses camelCase keys; Python attributes stay snake_case"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Record(_CamelModel):
    """Persisted record"""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Opaque unique id, assigned by the store")
    title: str = Field(min_length=1, description="Trimmed, never blank")
    description: str = Field(default="")
    completed: bool = Field(default=False)
    priority: Priority = Field(default=DEFAULT_PRIORITY)
    due_date: date | None = Field(default=None, description="None means no deadline")
    category: str = Field(default=DEFAULT_CATEGORY)
    created_at: datetime = Field(description="Set once at creation")
    updated_at: datetime = Field(description="Refreshed on every mutation")

    normalize_due_date = field_validator("due_date", mode="before")(_date_part)


class RecordDraft(_CamelModel):
    """Create payload; title presence is checked by build_record()

    Blank priority or due date strings fall back to the defaults.
    """

    title: str | None = None
    description: str | None = None
    priority: Priority | None = None
    due_date: date | None = Field(default=None, description="YYYY-MM-DD or ISO timestamp")
    category: str | None = None

    normalize_due_date = field_validator("due_date", mode="before")(_date_part)
    blank_priority = field_validator("priority", mode="before")(_blank_to_none)


class RecordPatch(_CamelModel):
    """Sparse patch: only keys present in the payload are applied

    An explicit null (or "") clears due_date; for every other field it is
    ignored. A blank priority counts as absent.
    """

    title: str | None = None
    description: str | None = None
    completed: bool | None = None
    priority: Priority | None = None
    due_date: date | None = None
    category: str | None = None

    normalize_due_date = field_validator("due_date", mode="before")(_date_part)
    blank_priority = field_validator("priority", mode="before")(_blank_to_none)

    def changes(self) -> dict[str, Any]:
        """Fields to merge, keyed by attribute name"""
        data = self.model_dump(exclude_unset=True)
        return {
            key: value
            for key, value in data.items()
            if value is not None or key in NULLABLE_FIELDS
        }


class PriorityBreakdown(BaseModel):
    """Record count per priority"""

    high: int = 0
    medium: int = 0
    low: int = 0


class RecordStats(BaseModel):
    """Aggregate counts, evaluated at query time"""

    total: int = 0
    completed: int = 0
    pending: int = 0
    overdue: int = 0
    priority: PriorityBreakdown = Field(default_factory=PriorityBreakdown)


_M = TypeVar("_M", bound=BaseModel)


def _parse(model: type[_M], fields: _M | Mapping[str, Any]) -> _M:
    if isinstance(fields, model):
        return fields
    try:
        return model.model_validate(dict(fields))
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}"
            for err in e.errors()
        )
        raise RecordValidationError(details) from e


def parse_draft(fields: RecordDraft | Mapping[str, Any]) -> RecordDraft:
    """Coerce a mapping into a RecordDraft, raising RecordValidationError"""
    return _parse(RecordDraft, fields)


def parse_patch(patch: RecordPatch | Mapping[str, Any]) -> RecordPatch:
    """Coerce a mapping into a RecordPatch, raising RecordValidationError"""
    return _parse(RecordPatch, patch)


def _clean_title(value: str | None) -> str:
    title = (value or "").strip()
    if not title:
        raise RecordValidationError(
            "title must be a non-empty string", error=TITLE_REQUIRED
        )
    return title


def _clean_category(value: str | None) -> str:
    return (value or "").strip() or DEFAULT_CATEGORY


def build_record(draft: RecordDraft, record_id: str, now: datetime) -> Record:
    """Validate a draft and fill defaults

    Raises:
        RecordValidationError: title missing or blank after trimming
    """
    return Record(
        id=record_id,
        title=_clean_title(draft.title),
        description=(draft.description or "").strip(),
        completed=False,
        priority=draft.priority or DEFAULT_PRIORITY,
        due_date=draft.due_date,
        category=_clean_category(draft.category),
        created_at=now,
        updated_at=now,
    )


def apply_patch(record: Record, patch: RecordPatch, now: datetime) -> Record:
    """Merge a sparse patch into a record

    Present-and-set keys override, absent keys preserve. id and created_at
    are never touched; updated_at is always refreshed.

    Raises:
        RecordValidationError: patched title is blank after trimming
    """
    changes = patch.changes()
    if "title" in changes:
        changes["title"] = _clean_title(changes["title"])
    if "description" in changes:
        changes["description"] = changes["description"].strip()
    if "category" in changes:
        changes["category"] = _clean_category(changes["category"])

    merged = record.model_dump()
    merged.update(changes)
    merged["updated_at"] = now
    return Record.model_validate(merged)


def is_overdue(record: Record, today: date) -> bool:
    """Due date strictly before today (UTC calendar day) and not completed"""
    return record.due_date is not None and record.due_date < today and not record.completed


def compute_stats(records: Iterable[Record], today: date) -> RecordStats:
    """Aggregate counts over records; shared by the stores and the client"""
    stats = RecordStats()
    for record in records:
        stats.total += 1
        if record.completed:
            stats.completed += 1
        else:
            stats.pending += 1
        if is_overdue(record, today):
            stats.overdue += 1
        if record.priority == Priority.HIGH:
            stats.priority.high += 1
        elif record.priority == Priority.MEDIUM:
            stats.priority.medium += 1
        else:
            stats.priority.low += 1
    return stats
