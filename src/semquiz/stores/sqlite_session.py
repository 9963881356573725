# src/semquiz/stores/sqlite_session.py
"""SQLite quiz session store implementation."""

import sqlite3
import time
from collections.abc import Callable
from pathlib import Path

from semquiz.models import QuizSession
from semquiz.stores.base import SessionStore


class SQLiteSessionStore(SessionStore):
    """SQLite-based session store.

    Each key maps to one JSON-serialized QuizSession. Sessions idle for longer
    than ``ttl_seconds`` are treated as expired and dropped on load.
    """

    def __init__(
        self,
        db_path: str,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the SQLite store.

        Args:
            db_path: Path to the SQLite database file.
            ttl_seconds: Idle lifetime of a session. None disables expiry.
            clock: Time source, in seconds.
        """
        self.db_path = db_path
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        """Create tables if they don't exist."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS sessions (
                    key TEXT PRIMARY KEY,
                    data TEXT NOT NULL,
                    updated_at REAL NOT NULL
                )
            """)
            conn.commit()

    def load(self, key: str) -> QuizSession | None:
        """Load a session, dropping it if expired."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(
                "SELECT data, updated_at FROM sessions WHERE key = ?",
                (key,),
            )
            row = cursor.fetchone()
            if row is None:
                return None

            data, updated_at = row
            if self.ttl_seconds is not None and self._clock() - updated_at > self.ttl_seconds:
                conn.execute("DELETE FROM sessions WHERE key = ?", (key,))
                conn.commit()
                return None

            return QuizSession.model_validate_json(data)

    def save(self, key: str, session: QuizSession) -> None:
        """Store a session, overwriting if exists."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                "INSERT OR REPLACE INTO sessions (key, data, updated_at) VALUES (?, ?, ?)",
                (key, session.model_dump_json(), self._clock()),
            )
            conn.commit()

    def clear(self, key: str) -> None:
        """Delete a session by key."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("DELETE FROM sessions WHERE key = ?", (key,))
            conn.commit()

    def list_keys(self) -> list[str]:
        """List all stored session keys, including expired ones not yet dropped."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute("SELECT key FROM sessions ORDER BY key")
            return [row[0] for row in cursor.fetchall()]
