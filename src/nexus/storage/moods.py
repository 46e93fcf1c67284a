"""Mood entry repository and statistics."""

import json
import logging
import sqlite3
from collections import Counter
from datetime import UTC, date, datetime, timedelta

from nexus.errors import NotFoundError
from nexus.storage.database import Database
from nexus.storage.query import (
    date_range_clause,
    from_db_time,
    new_id,
    offset_for,
    start_of_day,
    to_db_time,
)
from nexus.storage.schema import (
    MoodCreate,
    MoodRecord,
    MoodStats,
    MoodTrend,
    MoodUpdate,
    OverallStats,
    Page,
    TagFrequency,
)

logger = logging.getLogger(__name__)

WEEKLY_BUCKETS = 4
MONTHLY_BUCKETS = 6
TOP_TAGS = 10


def _row_to_record(row: sqlite3.Row) -> MoodRecord:
    return MoodRecord(
        id=row["id"],
        user_id=row["user_id"],
        rating=row["rating"],
        description=row["description"],
        tags=json.loads(row["tags"]),
        created_at=from_db_time(row["created_at"]),
    )


def _average(ratings: list[int]) -> float:
    if not ratings:
        return 0
    return round(sum(ratings) / len(ratings), 2)


def _shift_month(day: date, months: int) -> date:
    index = day.year * 12 + day.month - 1 + months
    return date(index // 12, index % 12 + 1, 1)


class MoodRepository:
    """CRUD for mood entries, scoped to their owner."""

    def __init__(self, db: Database):
        self.db = db

    def create(self, user_id: str, data: MoodCreate) -> MoodRecord:
        record = MoodRecord(id=new_id(), user_id=user_id, **data.model_dump())
        with self.db.connect() as conn:
            conn.execute(
                """
                INSERT INTO moods (id, user_id, rating, description, tags, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
            """,
                (
                    record.id,
                    record.user_id,
                    record.rating,
                    record.description,
                    json.dumps(record.tags),
                    to_db_time(record.created_at),
                ),
            )
        logger.debug("Created mood %s for %s", record.id, user_id)
        return record

    def get(self, user_id: str, mood_id: str) -> MoodRecord:
        """Fetch a mood entry.

        Raises:
            NotFoundError: If the id is unknown or owned by another user
        """
        with self.db.connect() as conn:
            row = conn.execute(
                "SELECT * FROM moods WHERE id = ? AND user_id = ?", (mood_id, user_id)
            ).fetchone()
        if row is None:
            raise NotFoundError("Mood entry", mood_id)
        return _row_to_record(row)

    def latest(self, user_id: str) -> MoodRecord | None:
        with self.db.connect() as conn:
            row = conn.execute(
                "SELECT * FROM moods WHERE user_id = ? ORDER BY created_at DESC LIMIT 1",
                (user_id,),
            ).fetchone()
        return _row_to_record(row) if row else None

    def find_paginated(
        self,
        user_id: str,
        page: int = 1,
        limit: int = 10,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Page[MoodRecord]:
        """List mood entries newest first.

        Args:
            user_id: Owner
            page: 1-based page number
            limit: Page size (1-100)
            start_date: Earliest day included
            end_date: Last day included

        Returns:
            The requested page and the total number of matching entries
        """
        offset = offset_for(page, limit)
        clause, params = date_range_clause("created_at", start_date, end_date)
        where = "WHERE user_id = ?" + clause
        with self.db.connect() as conn:
            total = conn.execute(
                f"SELECT COUNT(*) FROM moods {where}", (user_id, *params)
            ).fetchone()[0]
            rows = conn.execute(
                f"SELECT * FROM moods {where} ORDER BY created_at DESC LIMIT ? OFFSET ?",
                (user_id, *params, limit, offset),
            ).fetchall()
        return Page(items=[_row_to_record(r) for r in rows], total=total, page=page, limit=limit)

    def update(self, user_id: str, mood_id: str, data: MoodUpdate) -> MoodRecord:
        """Merge the fields present in ``data`` into the stored entry."""
        current = self.get(user_id, mood_id)
        merged = current.model_copy(update=data.model_dump(exclude_unset=True))
        merged = MoodRecord.model_validate(merged.model_dump())
        with self.db.connect() as conn:
            conn.execute(
                "UPDATE moods SET rating = ?, description = ?, tags = ? WHERE id = ? AND user_id = ?",
                (merged.rating, merged.description, json.dumps(merged.tags), mood_id, user_id),
            )
        return merged

    def delete(self, user_id: str, mood_id: str) -> None:
        with self.db.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM moods WHERE id = ? AND user_id = ?", (mood_id, user_id)
            )
        if cursor.rowcount == 0:
            raise NotFoundError("Mood entry", mood_id)

    def stats(self, user_id: str, now: datetime | None = None) -> MoodStats:
        """Compute overall statistics, trend buckets and popular tags.

        Weekly buckets are 7-day windows starting at midnight 0, 7, 14 and 21
        days ago; monthly buckets are calendar months. Both are returned
        oldest first.
        """
        now = now or datetime.now(UTC)
        with self.db.connect() as conn:
            rows = conn.execute(
                "SELECT rating, tags, created_at FROM moods WHERE user_id = ?", (user_id,)
            ).fetchall()

        entries = [(r["rating"], json.loads(r["tags"]), from_db_time(r["created_at"])) for r in rows]
        ratings = [rating for rating, _, _ in entries]

        overall = OverallStats(
            average_rating=_average(ratings),
            total_entries=len(entries),
            highest_rating=max(ratings, default=0),
            lowest_rating=min(ratings, default=0),
        )

        def bucket(start: datetime, end: datetime) -> MoodTrend:
            in_range = [rating for rating, _, ts in entries if start <= ts < end]
            return MoodTrend(
                date=start.date().isoformat(),
                average_rating=_average(in_range),
                count=len(in_range),
            )

        today = now.date()
        weekly = []
        for i in range(WEEKLY_BUCKETS):
            start = start_of_day(today - timedelta(days=7 * i))
            weekly.append(bucket(start, start + timedelta(days=7)))

        monthly = []
        for i in range(MONTHLY_BUCKETS):
            first = _shift_month(today, -i)
            monthly.append(bucket(start_of_day(first), start_of_day(_shift_month(first, 1))))

        tag_counts = Counter(tag for _, tags, _ in entries for tag in tags)
        popular = [TagFrequency(tag=tag, count=count) for tag, count in tag_counts.most_common(TOP_TAGS)]

        return MoodStats(
            overall_stats=overall,
            weekly_trends=list(reversed(weekly)),
            monthly_trends=list(reversed(monthly)),
            popular_tags=popular,
        )
