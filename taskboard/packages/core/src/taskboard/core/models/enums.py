"""Enum definitions -- record priority

Priority is persisted as its lowercase string value.
"""

from enum import StrEnum


class Priority(StrEnum):
    """Record priority"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


DEFAULT_PRIORITY: Priority = Priority.MEDIUM
