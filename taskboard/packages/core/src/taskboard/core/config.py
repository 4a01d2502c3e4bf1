"""Configuration module -- overridable through environment variables

Data directory, database path and store backend selection.
"""

import os
from pathlib import Path

STORE_BACKENDS: tuple[str, ...] = ("sqlite", "memory")


def _get_base_dir() -> Path:
    """Project data base directory"""
    return Path(os.environ.get("TASKBOARD_DATA_DIR", "data"))


def get_db_path() -> str:
    """SQLite database path"""
    return os.environ.get(
        "TASKBOARD_DB_PATH",
        str(_get_base_dir() / "sqlite" / "taskboard.db"),
    )


def get_store_backend() -> str:
    """Record store backend: "sqlite" (default) or "memory"

    Raises:
        ValueError: unknown backend name
    """
    backend = os.environ.get("TASKBOARD_STORE_BACKEND", "sqlite").strip().lower()
    if backend not in STORE_BACKENDS:
        raise ValueError(
            f"TASKBOARD_STORE_BACKEND must be one of {', '.join(STORE_BACKENDS)}, got {backend!r}"
        )
    return backend
