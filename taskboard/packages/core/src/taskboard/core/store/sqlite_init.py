"""SQLite database initialization

PRAGMA settings + records table DDL + indexes, via aiosqlite.
"""

import aiosqlite

# records table DDL
_RECORDS_DDL = """
CREATE TABLE IF NOT EXISTS records (
    record_id    TEXT PRIMARY KEY,
    title        TEXT NOT NULL CHECK (length(trim(title)) > 0),
    description  TEXT NOT NULL DEFAULT '',
    completed    INTEGER NOT NULL DEFAULT 0,
    priority     TEXT NOT NULL DEFAULT 'medium'
                 CHECK (priority IN ('low', 'medium', 'high')),
    due_date     TEXT,
    category     TEXT NOT NULL DEFAULT 'General',
    created_at   TEXT NOT NULL,
    updated_at   TEXT NOT NULL
);
"""

_RECORDS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_records_created_at ON records(created_at DESC);",
    "CREATE INDEX IF NOT EXISTS idx_records_completed ON records(completed);",
    "CREATE INDEX IF NOT EXISTS idx_records_due_date ON records(due_date);",
]


async def init_db(conn: aiosqlite.Connection) -> None:
    """Initialize the database: PRAGMA + tables + indexes

    Args:
        conn: aiosqlite connection
    """
    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute("PRAGMA busy_timeout = 5000;")

    await conn.execute(_RECORDS_DDL)
    for idx_sql in _RECORDS_INDEXES:
        await conn.execute(idx_sql)

    await conn.commit()


async def verify_wal_mode(conn: aiosqlite.Connection) -> bool:
    """Whether WAL journal mode is active"""
    cursor = await conn.execute("PRAGMA journal_mode;")
    row = await cursor.fetchone()
    return row is not None and row[0].lower() == "wal"
