"""Daily check-in repository."""

import json
import logging
import sqlite3
from datetime import UTC, date, datetime, timedelta
from typing import Any

from nexus.errors import CheckinAlreadySubmittedError, NotFoundError
from nexus.storage.database import Database
from nexus.storage.query import (
    date_range_clause,
    from_db_time,
    new_id,
    offset_for,
    start_of_day,
    to_db_time,
)
from nexus.storage.schema import CheckinCreate, CheckinRecord, CheckinUpdate, Page

logger = logging.getLogger(__name__)

_BODY_FIELDS = set(CheckinCreate.model_fields)


def _row_to_record(row: sqlite3.Row) -> CheckinRecord:
    return CheckinRecord(
        id=row["id"],
        user_id=row["user_id"],
        created_at=from_db_time(row["created_at"]),
        **json.loads(row["data"]),
    )


def _body_json(record: CheckinRecord) -> str:
    return record.model_dump_json(include=_BODY_FIELDS)


def deep_merge(base: dict[str, Any], changes: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``changes`` applied; nested dicts merge key by key."""
    merged = dict(base)
    for key, value in changes.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class CheckinRepository:
    """CRUD for check-ins with at most one check-in per user per UTC day."""

    def __init__(self, db: Database):
        self.db = db

    def _day_bounds(self, now: datetime) -> tuple[str, str]:
        start = start_of_day(now.astimezone(UTC).date())
        return to_db_time(start), to_db_time(start + timedelta(days=1))

    def create(self, user_id: str, data: CheckinCreate, now: datetime | None = None) -> CheckinRecord:
        """Store a check-in.

        Raises:
            CheckinAlreadySubmittedError: If the user already checked in today
        """
        now = now or datetime.now(UTC)
        record = CheckinRecord(id=new_id(), user_id=user_id, created_at=now, **data.model_dump())
        day_start, day_end = self._day_bounds(now)
        with self.db.connect() as conn:
            existing = conn.execute(
                """
                SELECT 1 FROM checkins
                WHERE user_id = ? AND created_at >= ? AND created_at < ?
                LIMIT 1
            """,
                (user_id, day_start, day_end),
            ).fetchone()
            if existing:
                logger.info("Rejected second check-in today for %s", user_id)
                raise CheckinAlreadySubmittedError()
            conn.execute(
                "INSERT INTO checkins (id, user_id, data, created_at) VALUES (?, ?, ?, ?)",
                (record.id, user_id, _body_json(record), to_db_time(record.created_at)),
            )
        return record

    def today(self, user_id: str, now: datetime | None = None) -> CheckinRecord | None:
        day_start, day_end = self._day_bounds(now or datetime.now(UTC))
        with self.db.connect() as conn:
            row = conn.execute(
                """
                SELECT * FROM checkins
                WHERE user_id = ? AND created_at >= ? AND created_at < ?
                ORDER BY created_at DESC LIMIT 1
            """,
                (user_id, day_start, day_end),
            ).fetchone()
        return _row_to_record(row) if row else None

    def get(self, user_id: str, checkin_id: str) -> CheckinRecord:
        with self.db.connect() as conn:
            row = conn.execute(
                "SELECT * FROM checkins WHERE id = ? AND user_id = ?", (checkin_id, user_id)
            ).fetchone()
        if row is None:
            raise NotFoundError("Check-in", checkin_id)
        return _row_to_record(row)

    def find_paginated(
        self,
        user_id: str,
        page: int = 1,
        limit: int = 10,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Page[CheckinRecord]:
        offset = offset_for(page, limit)
        clause, params = date_range_clause("created_at", start_date, end_date)
        where = "WHERE user_id = ?" + clause
        with self.db.connect() as conn:
            total = conn.execute(
                f"SELECT COUNT(*) FROM checkins {where}", (user_id, *params)
            ).fetchone()[0]
            rows = conn.execute(
                f"SELECT * FROM checkins {where} ORDER BY created_at DESC LIMIT ? OFFSET ?",
                (user_id, *params, limit, offset),
            ).fetchall()
        return Page(items=[_row_to_record(r) for r in rows], total=total, page=page, limit=limit)

    def update(self, user_id: str, checkin_id: str, data: CheckinUpdate) -> CheckinRecord:
        """Deep-merge ``data`` into the stored check-in and re-validate the result.

        Raises:
            NotFoundError: If the id is unknown or owned by another user
            pydantic.ValidationError: If the merged check-in is invalid
        """
        current = self.get(user_id, checkin_id)
        changes = data.model_dump(exclude_unset=True)
        merged = CheckinRecord.model_validate(deep_merge(current.model_dump(), changes))
        with self.db.connect() as conn:
            conn.execute(
                "UPDATE checkins SET data = ? WHERE id = ? AND user_id = ?",
                (_body_json(merged), checkin_id, user_id),
            )
        return merged

    def delete(self, user_id: str, checkin_id: str) -> None:
        with self.db.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM checkins WHERE id = ? AND user_id = ?", (checkin_id, user_id)
            )
        if cursor.rowcount == 0:
            raise NotFoundError("Check-in", checkin_id)
