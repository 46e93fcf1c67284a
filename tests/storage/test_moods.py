"""Tests for the mood repository."""

from datetime import UTC, date, datetime, timedelta

import pytest
from pydantic import ValidationError

from nexus.errors import NotFoundError
from nexus.storage import MoodRepository
from nexus.storage.query import to_db_time
from nexus.storage.schema import MoodCreate, MoodUpdate


@pytest.fixture
def moods(db):
    return MoodRepository(db)


def _backdate(db, mood_id: str, when: datetime) -> None:
    with db.connect() as conn:
        conn.execute("UPDATE moods SET created_at = ? WHERE id = ?", (to_db_time(when), mood_id))


class TestMoodValidation:
    @pytest.mark.parametrize("rating", [0, 11])
    def test_rating_out_of_range_rejected(self, rating):
        with pytest.raises(ValidationError):
            MoodCreate(rating=rating, description="x")

    @pytest.mark.parametrize("rating", [1, 10])
    def test_rating_bounds_accepted(self, rating):
        assert MoodCreate(rating=rating, description="x").rating == rating

    def test_description_too_long(self):
        with pytest.raises(ValidationError):
            MoodCreate(rating=5, description="x" * 501)

    def test_tag_too_long(self):
        with pytest.raises(ValidationError):
            MoodCreate(rating=5, description="x", tags=["t" * 31])

    def test_tags_are_a_set(self):
        mood = MoodCreate(rating=5, description="x", tags=["calm", " calm ", "", "tired"])
        assert mood.tags == ["calm", "tired"]

    def test_empty_update_rejected(self):
        with pytest.raises(ValidationError, match="At least one field"):
            MoodUpdate()


class TestMoodCrud:
    def test_create_echoes_fields(self, moods):
        record = moods.create("u1", MoodCreate(rating=8, description="felt good", tags=["happy"]))

        data = record.model_dump(by_alias=True, mode="json")
        assert data["_id"]
        assert data["createdAt"]
        assert data["userId"] == "u1"
        assert (data["rating"], data["description"], data["tags"]) == (8, "felt good", ["happy"])

    def test_get_round_trip(self, moods):
        created = moods.create("u1", MoodCreate(rating=3, description="meh", tags=["work"]))

        assert moods.get("u1", created.id) == created

    def test_get_wrong_owner_is_not_found(self, moods):
        created = moods.create("u1", MoodCreate(rating=3, description="meh"))

        with pytest.raises(NotFoundError):
            moods.get("u2", created.id)

    def test_update_merges_fields(self, moods):
        created = moods.create("u1", MoodCreate(rating=3, description="meh", tags=["work"]))

        updated = moods.update("u1", created.id, MoodUpdate(rating=7))

        assert updated.rating == 7
        assert updated.description == "meh"
        assert updated.tags == ["work"]
        assert moods.get("u1", created.id).rating == 7

    def test_update_unknown(self, moods):
        with pytest.raises(NotFoundError):
            moods.update("u1", "missing", MoodUpdate(rating=7))

    def test_delete(self, moods):
        created = moods.create("u1", MoodCreate(rating=3, description="meh"))

        moods.delete("u1", created.id)

        with pytest.raises(NotFoundError):
            moods.delete("u1", created.id)

    def test_latest(self, moods, db):
        assert moods.latest("u1") is None
        old = moods.create("u1", MoodCreate(rating=2, description="old"))
        _backdate(db, old.id, datetime.now(UTC) - timedelta(days=1))
        new = moods.create("u1", MoodCreate(rating=9, description="new"))

        assert moods.latest("u1").id == new.id


class TestMoodPagination:
    def test_pages_newest_first(self, moods, db):
        now = datetime.now(UTC)
        for i in range(5):
            record = moods.create("u1", MoodCreate(rating=i + 1, description=f"m{i}"))
            _backdate(db, record.id, now - timedelta(hours=5 - i))

        page = moods.find_paginated("u1", page=1, limit=2)
        assert [m.description for m in page.items] == ["m4", "m3"]
        assert page.total == 5
        assert page.total_pages == 3

        last = moods.find_paginated("u1", page=3, limit=2)
        assert [m.description for m in last.items] == ["m0"]

    def test_end_date_inclusive(self, moods, db):
        record = moods.create("u1", MoodCreate(rating=5, description="late"))
        _backdate(db, record.id, datetime(2024, 3, 10, 23, 30, tzinfo=UTC))
        other = moods.create("u1", MoodCreate(rating=5, description="next day"))
        _backdate(db, other.id, datetime(2024, 3, 11, 0, 30, tzinfo=UTC))

        page = moods.find_paginated(
            "u1", start_date=date(2024, 3, 10), end_date=date(2024, 3, 10)
        )

        assert [m.description for m in page.items] == ["late"]
        assert page.to_dict("moods")["totalPages"] == 1

    @pytest.mark.parametrize("page, limit", [(0, 10), (1, 0), (1, 101)])
    def test_invalid_pagination(self, moods, page, limit):
        with pytest.raises(ValueError):
            moods.find_paginated("u1", page=page, limit=limit)


class TestMoodStats:
    def test_empty_history_is_zeros(self, moods):
        stats = moods.stats("u1")

        assert stats.overall_stats.total_entries == 0
        assert stats.overall_stats.average_rating == 0
        assert stats.overall_stats.highest_rating == 0
        assert stats.overall_stats.lowest_rating == 0
        assert len(stats.weekly_trends) == 4
        assert len(stats.monthly_trends) == 6
        assert stats.popular_tags == []

    def test_stats_and_trends(self, moods, db):
        now = datetime(2024, 6, 15, 12, tzinfo=UTC)
        entries = [
            (8, ["calm", "sleep"], now - timedelta(days=1)),
            (6, ["calm"], now - timedelta(days=2)),
            (3, ["work"], now - timedelta(days=10)),
            (5, ["calm"], now - timedelta(days=40)),
        ]
        for rating, tags, when in entries:
            record = moods.create("u1", MoodCreate(rating=rating, description="", tags=tags))
            _backdate(db, record.id, when)

        stats = moods.stats("u1", now=now)

        overall = stats.overall_stats
        assert overall.total_entries == 4
        assert overall.average_rating == 5.5
        assert (overall.highest_rating, overall.lowest_rating) == (8, 3)

        # Oldest first; the last weekly bucket starts today
        assert stats.weekly_trends[-1].date == "2024-06-15"
        assert stats.weekly_trends[-1].count == 0
        assert stats.weekly_trends[-2].count == 2
        assert stats.weekly_trends[-2].average_rating == 7
        assert stats.weekly_trends[-3].count == 1
        assert stats.weekly_trends[-3].average_rating == 3

        assert [t.date for t in stats.monthly_trends] == [
            "2024-01-01",
            "2024-02-01",
            "2024-03-01",
            "2024-04-01",
            "2024-05-01",
            "2024-06-01",
        ]
        assert stats.monthly_trends[-1].count == 3
        assert stats.monthly_trends[-1].average_rating == pytest.approx(5.67)
        assert stats.monthly_trends[-2].count == 1

        assert stats.popular_tags[0].tag == "calm"
        assert stats.popular_tags[0].count == 3
