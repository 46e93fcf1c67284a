"""Helpers shared by the repositories: timestamps, ids and date filters."""

import uuid
from datetime import UTC, date, datetime, time, timedelta
from typing import Any


def new_id() -> str:
    return uuid.uuid4().hex


def to_db_time(value: datetime) -> str:
    """Format a datetime as a fixed-width UTC ISO string so text order is time order."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def from_db_time(value: str) -> datetime:
    return datetime.fromisoformat(value)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=UTC)


def date_range_clause(
    column: str,
    start_date: date | None = None,
    end_date: date | None = None,
) -> tuple[str, list[Any]]:
    """Build a WHERE fragment for an optional inclusive date range.

    The end date covers the whole day.

    Returns:
        (sql fragment beginning with " AND", parameters)
    """
    sql = ""
    params: list[Any] = []
    if start_date is not None:
        sql += f" AND {column} >= ?"
        params.append(to_db_time(start_of_day(start_date)))
    if end_date is not None:
        sql += f" AND {column} < ?"
        params.append(to_db_time(start_of_day(end_date + timedelta(days=1))))
    return sql, params


def offset_for(page: int, limit: int) -> int:
    if page < 1:
        raise ValueError("page must be at least 1")
    if not 1 <= limit <= 100:
        raise ValueError("limit must be between 1 and 100")
    return (page - 1) * limit
