"""SQLite-based durable key-value storage.

Server-side stand-in for browser local storage: the viewed-cards history is
kept here so a restart restores the session history.
"""

import asyncio
import contextlib
import sqlite3
from datetime import UTC, datetime
from pathlib import Path


class SqliteKeyValueStore:
    """KeyValueStorage implementation backed by a single SQLite table.

    Async-safe: statements run in a worker thread via asyncio.to_thread,
    serialized by an asyncio.Lock so writes land in call order.
    """

    def __init__(self, db_path: str = "history.db"):
        """Initialize the store.

        Args:
            db_path: Path to SQLite database file

        The table is created synchronously on construction.
        """
        self._db_path = Path(db_path)
        self._lock = asyncio.Lock()
        # Initialize table synchronously (safe during startup)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        """Create SQLite connection with lightweight durability settings."""
        conn = sqlite3.connect(self._db_path)
        conn.execute("PRAGMA synchronous=NORMAL")
        conn.execute("PRAGMA temp_store=MEMORY")
        return conn

    def _init_db(self) -> None:
        """Initialize database schema."""
        with contextlib.closing(self._connect()) as conn, conn:
            # WAL mode persists to database file (only needs to be set once)
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """
            )

    async def get(self, key: str) -> str | None:
        """Get stored value, or None if absent."""
        async with self._lock:
            return await asyncio.to_thread(self._get_sync, key)

    def _get_sync(self, key: str) -> str | None:
        with contextlib.closing(self._connect()) as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
            return row[0] if row else None

    async def set(self, key: str, value: str) -> None:
        """Insert or replace value under key."""
        async with self._lock:
            await asyncio.to_thread(self._set_sync, key, value)

    def _set_sync(self, key: str, value: str) -> None:
        """Synchronous upsert implementation."""
        with contextlib.closing(self._connect()) as conn, conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value, datetime.now(UTC).isoformat()),
            )


class InMemoryKeyValueStore:
    """Non-durable KeyValueStorage for development and tests."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value
