"""SQLite persistence for moods, check-ins, chats and exercises."""

from nexus.storage.chats import ChatRepository
from nexus.storage.checkins import CheckinRepository
from nexus.storage.database import Database
from nexus.storage.exercises import ExerciseRepository
from nexus.storage.moods import MoodRepository

__all__ = [
    "ChatRepository",
    "CheckinRepository",
    "Database",
    "ExerciseRepository",
    "MoodRepository",
]
