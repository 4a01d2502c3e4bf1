"""Dependency injection -- RecordStore via FastAPI Depends

The store lives on app.state and is created/closed in the lifespan.
"""

from fastapi import Request
from taskboard.core.store import RecordStore


def get_record_store(request: Request) -> RecordStore:
    """RecordStore instance from app.state"""
    return request.app.state.record_store
