"""Pydantic models for persisted records and their request bodies.

Records serialize with camelCase keys and ``_id`` as the identifier, so
``model_dump(by_alias=True, mode="json")`` produces the wire format.
"""

import math
from datetime import UTC, datetime
from enum import StrEnum
from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class MoodDescription(StrEnum):
    VERY_HAPPY = "Very Happy"
    HAPPY = "Happy"
    CONTENT = "Content"
    NEUTRAL = "Neutral"
    ANXIOUS = "Anxious"
    STRESSED = "Stressed"
    SAD = "Sad"
    VERY_SAD = "Very Sad"


class Activity(StrEnum):
    EXERCISE = "Exercise"
    READING = "Reading"
    MEDITATION = "Meditation"
    WORK = "Work"
    STUDY = "Study"
    SOCIAL_ACTIVITY = "Social Activity"
    HOBBY = "Hobby"
    ENTERTAINMENT = "Entertainment"
    OUTDOOR_ACTIVITY = "Outdoor Activity"
    REST = "Rest"


class GratitudeCategory(StrEnum):
    FAMILY = "Family"
    FRIENDS = "Friends"
    HEALTH = "Health"
    CAREER = "Career"
    PERSONAL_GROWTH = "Personal Growth"
    NATURE = "Nature"
    HOME = "Home"
    LEARNING = "Learning"
    EXPERIENCES = "Experiences"
    BASIC_NEEDS = "Basic Needs"


class Difficulty(StrEnum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @property
    def rank(self) -> int:
        return list(Difficulty).index(self)


Tag = Annotated[str, Field(max_length=30)]
GoalItem = Annotated[str, Field(max_length=100)]


def utcnow() -> datetime:
    return datetime.now(UTC)


class CamelModel(BaseModel):
    """Base model accepting and emitting camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _dedupe(tags: list[str]) -> list[str]:
    """Tags behave as a set: strip whitespace, drop blanks and repeats, keep order."""
    return list(dict.fromkeys(tag.strip() for tag in tags if tag.strip()))


def _require_any_field(model: BaseModel) -> BaseModel:
    if not model.model_fields_set:
        raise ValueError("At least one field must be provided for update")
    return model


# Moods


class MoodCreate(CamelModel):
    """Body of a new mood entry."""

    rating: int = Field(ge=1, le=10, description="Mood rating from 1 to 10")
    description: str = Field(max_length=500)
    tags: list[Tag] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, tags: list[str]) -> list[str]:
        return _dedupe(tags)


class MoodUpdate(CamelModel):
    """Partial mood update. At least one field is required."""

    rating: int | None = Field(default=None, ge=1, le=10)
    description: str | None = Field(default=None, max_length=500)
    tags: list[Tag] | None = None

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, tags: list[str] | None) -> list[str] | None:
        return None if tags is None else _dedupe(tags)

    @model_validator(mode="after")
    def check_not_empty(self) -> "MoodUpdate":
        return _require_any_field(self)  # type: ignore[return-value]


class MoodRecord(MoodCreate):
    id: str = Field(alias="_id")
    user_id: str
    created_at: datetime = Field(default_factory=utcnow)


# Check-ins


class CheckinMood(CamelModel):
    rating: int = Field(ge=1, le=10)
    description: MoodDescription


class Gratitude(CamelModel):
    category: GratitudeCategory
    detail: str = Field(max_length=200)


class Goals(CamelModel):
    completed: list[GoalItem] = Field(default_factory=list)
    upcoming: list[GoalItem] = Field(default_factory=list)


class Sleep(CamelModel):
    hours: float = Field(ge=0, le=24)
    quality: int = Field(ge=1, le=10)


class CheckinCreate(CamelModel):
    """Body of a daily check-in."""

    mood: CheckinMood
    activities: list[Activity] = Field(min_length=1, max_length=5)
    thoughts: str = Field(max_length=1000)
    gratitude: list[Gratitude] = Field(min_length=1, max_length=3)
    goals: Goals = Field(default_factory=Goals)
    sleep: Sleep


class CheckinMoodUpdate(CamelModel):
    rating: int | None = Field(default=None, ge=1, le=10)
    description: MoodDescription | None = None


class SleepUpdate(CamelModel):
    hours: float | None = Field(default=None, ge=0, le=24)
    quality: int | None = Field(default=None, ge=1, le=10)


class GoalsUpdate(CamelModel):
    completed: list[GoalItem] | None = None
    upcoming: list[GoalItem] | None = None


class CheckinUpdate(CamelModel):
    """Partial check-in update; nested objects merge into the stored ones."""

    mood: CheckinMoodUpdate | None = None
    activities: list[Activity] | None = Field(default=None, min_length=1, max_length=5)
    thoughts: str | None = Field(default=None, max_length=1000)
    gratitude: list[Gratitude] | None = Field(default=None, min_length=1, max_length=3)
    goals: GoalsUpdate | None = None
    sleep: SleepUpdate | None = None

    @model_validator(mode="after")
    def check_not_empty(self) -> "CheckinUpdate":
        return _require_any_field(self)  # type: ignore[return-value]


class CheckinRecord(CheckinCreate):
    id: str = Field(alias="_id")
    user_id: str
    created_at: datetime = Field(default_factory=utcnow)


# Chats and exercises


class ChatRecord(CamelModel):
    """One persisted chat exchange."""

    user_id: str
    message: str
    response: str
    timestamp: datetime = Field(default_factory=utcnow)


class Exercise(CamelModel):
    """A guided wellbeing exercise."""

    id: str | None = Field(default=None, alias="_id")
    title: str
    description: str
    category: str
    difficulty: Difficulty = Difficulty.BEGINNER
    duration: int = Field(gt=0, description="Length in minutes")
    steps: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)
    is_active: bool = True


# Aggregates

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """A page of records plus pagination totals."""

    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def to_dict(self, key: str) -> dict[str, Any]:
        return {
            key: [item.model_dump(by_alias=True, mode="json") for item in self.items],  # type: ignore[attr-defined]
            "total": self.total,
            "page": self.page,
            "totalPages": self.total_pages,
        }


class OverallStats(CamelModel):
    average_rating: float = 0
    total_entries: int = 0
    highest_rating: int = 0
    lowest_rating: int = 0


class MoodTrend(CamelModel):
    date: str
    average_rating: float
    count: int


class TagFrequency(CamelModel):
    tag: str
    count: int


class MoodStats(CamelModel):
    overall_stats: OverallStats
    weekly_trends: list[MoodTrend]
    monthly_trends: list[MoodTrend]
    popular_tags: list[TagFrequency]
