"""CLI entry module -- python -m taskboard.core <command>

Supported commands:
  init-db  create the SQLite schema at the configured path
  stats    print the record stats summary as JSON
"""

import asyncio
import sys

from .config import get_db_path


def main() -> None:
    """CLI main entry"""
    if len(sys.argv) < 2:
        print("Usage: python -m taskboard.core <command>")
        print("Commands:")
        print("  init-db  create the SQLite schema")
        print("  stats    print the record stats summary")
        sys.exit(1)

    command = sys.argv[1]

    if command == "init-db":
        asyncio.run(init_database())
    elif command == "stats":
        asyncio.run(print_stats())
    else:
        print(f"Unknown command: {command}")
        print("Available commands: init-db, stats")
        sys.exit(1)


async def init_database() -> None:
    """Create the records table and indexes"""
    from .store import open_sqlite_store

    db_path = get_db_path()
    print(f"Database path: {db_path}")

    store = await open_sqlite_store(db_path)
    await store.close()
    print("Schema ready")


async def print_stats() -> None:
    """Print stats for the configured SQLite database"""
    from .store import open_sqlite_store

    store = await open_sqlite_store(get_db_path())
    try:
        stats = await store.get_stats()
        print(stats.model_dump_json(indent=2))
    finally:
        await store.close()


if __name__ == "__main__":
    main()
