"""Markup rendering -- derived display fields, computed at render time

Overdue flag, relative due label and priority label are never persisted.
All user-supplied text goes through html.escape.
"""

from collections.abc import Sequence
from datetime import date, timedelta
from html import escape

from taskboard.core.models import Priority, Record, is_overdue

EMPTY_STATE = "No tasks found. Add a new task to get started! 🚀"

_PRIORITY_LABELS: dict[Priority, tuple[str, str]] = {
    Priority.HIGH: ("🔴", "High"),
    Priority.MEDIUM: ("🟡", "Medium"),
    Priority.LOW: ("🟢", "Low"),
}


def due_label(due: date, today: date) -> str:
    """Relative due label: Today / Tomorrow / Jan 5, 2020"""
    if due == today:
        return "Today"
    if due == today + timedelta(days=1):
        return "Tomorrow"
    return f"{due:%b} {due.day}, {due.year}"


def priority_label(priority: Priority) -> str:
    icon, label = _PRIORITY_LABELS[priority]
    return f"{icon} {label}"


def render_record(record: Record, today: date) -> str:
    """One task item as HTML"""
    overdue = is_overdue(record, today)
    classes = ["task-item", f"priority-{record.priority.value}"]
    if record.completed:
        classes.append("completed")
    if overdue:
        classes.append("overdue")

    record_id = escape(record.id)
    parts = [
        f'<div class="{" ".join(classes)}" data-id="{record_id}">',
        f'<input type="checkbox" class="task-checkbox"{" checked" if record.completed else ""}>',
        '<div class="task-content">',
        f'<div class="task-title">{escape(record.title)}</div>',
    ]
    if record.description:
        parts.append(f'<div class="task-description">{escape(record.description)}</div>')

    meta = [
        f'<span class="task-priority">{priority_label(record.priority)}</span>',
        f'<span class="task-category">{escape(record.category)}</span>',
    ]
    if record.due_date is not None:
        meta.append(f'<span class="task-due">{due_label(record.due_date, today)}</span>')
    if overdue:
        meta.append('<span class="task-overdue">Overdue</span>')
    parts.append(f'<div class="task-meta">{"".join(meta)}</div>')

    parts.append("</div>")
    parts.append(
        '<div class="task-actions">'
        '<button class="btn-edit">Edit</button>'
        '<button class="btn-delete">Delete</button>'
        "</div>"
    )
    parts.append("</div>")
    return "".join(parts)


def render_record_list(records: Sequence[Record], today: date) -> str:
    """Task list markup; an empty list renders the empty-state message"""
    if not records:
        return f'<div class="empty-state"><p>{EMPTY_STATE}</p></div>'
    return "\n".join(render_record(record, today) for record in records)
