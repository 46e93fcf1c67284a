"""Chat exchange repository."""

from nexus.storage.database import Database
from nexus.storage.query import from_db_time, to_db_time
from nexus.storage.schema import ChatRecord


class ChatRepository:
    """Append-only store of chat exchanges, cleared per user."""

    def __init__(self, db: Database):
        self.db = db

    def save(self, record: ChatRecord) -> ChatRecord:
        with self.db.connect() as conn:
            conn.execute(
                "INSERT INTO chats (user_id, message, response, timestamp) VALUES (?, ?, ?, ?)",
                (record.user_id, record.message, record.response, to_db_time(record.timestamp)),
            )
        return record

    def recent(self, user_id: str, limit: int = 50) -> list[ChatRecord]:
        """Return up to ``limit`` exchanges, newest first."""
        with self.db.connect() as conn:
            rows = conn.execute(
                """
                SELECT * FROM chats WHERE user_id = ?
                ORDER BY timestamp DESC, id DESC LIMIT ?
            """,
                (user_id, limit),
            ).fetchall()
        return [
            ChatRecord(
                user_id=row["user_id"],
                message=row["message"],
                response=row["response"],
                timestamp=from_db_time(row["timestamp"]),
            )
            for row in rows
        ]

    def delete_all(self, user_id: str) -> int:
        """Delete every exchange for ``user_id``. Returns the number removed."""
        with self.db.connect() as conn:
            cursor = conn.execute("DELETE FROM chats WHERE user_id = ?", (user_id,))
        return cursor.rowcount
