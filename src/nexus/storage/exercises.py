"""Read-mostly repository of guided exercises."""

import json
import logging
import random
import sqlite3
from collections.abc import Iterable

from nexus.storage.database import Database
from nexus.storage.query import new_id
from nexus.storage.schema import Difficulty, Exercise

logger = logging.getLogger(__name__)

LIST_LIMIT = 10


def _row_to_exercise(row: sqlite3.Row) -> Exercise:
    return Exercise(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        category=row["category"],
        difficulty=row["difficulty"],
        duration=row["duration"],
        steps=json.loads(row["steps"]),
        benefits=json.loads(row["benefits"]),
        is_active=bool(row["is_active"]),
    )


class ExerciseRepository:
    def __init__(self, db: Database):
        self.db = db

    def list(
        self,
        category: str | None = None,
        difficulty: Difficulty | None = None,
        max_duration: int | None = None,
    ) -> list[Exercise]:
        """Active exercises matching the filters, easiest and shortest first.

        Args:
            category: Exact category match
            difficulty: Exact difficulty match
            max_duration: Only exercises lasting at most this many minutes

        Returns:
            At most ten exercises
        """
        sql = "SELECT * FROM exercises WHERE is_active = 1"
        params: list[object] = []
        if category:
            sql += " AND category = ?"
            params.append(category)
        if difficulty:
            sql += " AND difficulty = ?"
            params.append(str(difficulty))
        if max_duration:
            sql += " AND duration <= ?"
            params.append(max_duration)
        sql += " ORDER BY difficulty_rank, duration LIMIT ?"
        params.append(LIST_LIMIT)

        with self.db.connect() as conn:
            rows = conn.execute(sql, params).fetchall()
        return [_row_to_exercise(r) for r in rows]

    def random(self, category: str | None = None) -> Exercise | None:
        """Pick one active exercise uniformly at random, or None if none match."""
        sql = "SELECT * FROM exercises WHERE is_active = 1"
        params: list[object] = []
        if category:
            sql += " AND category = ?"
            params.append(category)

        with self.db.connect() as conn:
            rows = conn.execute(sql, params).fetchall()
        if not rows:
            return None
        return _row_to_exercise(random.choice(rows))

    def count(self) -> int:
        with self.db.connect() as conn:
            return conn.execute("SELECT COUNT(*) FROM exercises").fetchone()[0]

    def seed(self, exercises: Iterable[Exercise]) -> int:
        """Insert exercises, assigning ids where missing. Returns the number inserted."""
        inserted = 0
        with self.db.connect() as conn:
            for exercise in exercises:
                conn.execute(
                    """
                    INSERT INTO exercises
                    (id, title, description, category, difficulty, difficulty_rank,
                     duration, steps, benefits, is_active)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                    (
                        exercise.id or new_id(),
                        exercise.title,
                        exercise.description,
                        exercise.category,
                        str(exercise.difficulty),
                        exercise.difficulty.rank,
                        exercise.duration,
                        json.dumps(exercise.steps),
                        json.dumps(exercise.benefits),
                        int(exercise.is_active),
                    ),
                )
                inserted += 1
        logger.info("Seeded %d exercises", inserted)
        return inserted
