"""SQLite database for moods, check-ins, chats and exercises."""

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)

_TABLES = (
    """
    CREATE TABLE IF NOT EXISTS moods (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        rating INTEGER NOT NULL,
        description TEXT NOT NULL,
        tags TEXT NOT NULL,
        created_at TIMESTAMP NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS checkins (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        data TEXT NOT NULL,
        created_at TIMESTAMP NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS chats (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id TEXT NOT NULL,
        message TEXT NOT NULL,
        response TEXT NOT NULL,
        timestamp TIMESTAMP NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS exercises (
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        description TEXT NOT NULL,
        category TEXT NOT NULL,
        difficulty TEXT NOT NULL,
        difficulty_rank INTEGER NOT NULL,
        duration INTEGER NOT NULL,
        steps TEXT NOT NULL,
        benefits TEXT NOT NULL,
        is_active INTEGER NOT NULL DEFAULT 1
    )
    """,
)

_INDEXES = (
    "CREATE INDEX IF NOT EXISTS idx_moods_user_created ON moods(user_id, created_at)",
    "CREATE INDEX IF NOT EXISTS idx_checkins_user_created ON checkins(user_id, created_at)",
    "CREATE INDEX IF NOT EXISTS idx_chats_user_timestamp ON chats(user_id, timestamp)",
    "CREATE INDEX IF NOT EXISTS idx_exercises_category ON exercises(category)",
)


class Database:
    """Owns the SQLite file and hands out short-lived connections.

    Nested fields are stored as JSON text; timestamps as ISO-8601 UTC strings,
    which sort chronologically.
    """

    def __init__(self, path: str | Path):
        """Initialize the database, creating the file and tables if needed.

        Args:
            path: Path to SQLite database file, or ``:memory:``
        """
        self.path = path if str(path) == ":memory:" else Path(path).expanduser()
        self._memory_conn: sqlite3.Connection | None = None
        if isinstance(self.path, Path):
            self.path.parent.mkdir(parents=True, exist_ok=True)
        else:
            # A single shared connection keeps an in-memory database alive
            self._memory_conn = sqlite3.connect(":memory:", check_same_thread=False)
        self._initialize_db()

    def _initialize_db(self) -> None:
        """Create tables and indexes if they don't exist."""
        with self.connect() as conn:
            for statement in _TABLES:
                conn.execute(statement)
            for statement in _INDEXES:
                conn.execute(statement)
        logger.debug("Database ready at %s", self.path)

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection with ``sqlite3.Row`` rows, committing on success."""
        if self._memory_conn is not None:
            conn = self._memory_conn
            conn.row_factory = sqlite3.Row
            with conn:
                yield conn
            return

        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def close(self) -> None:
        if self._memory_conn is not None:
            self._memory_conn.close()
            self._memory_conn = None
