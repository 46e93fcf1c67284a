"""Wiring of repositories and conversation services for the HTTP layer."""

from dataclasses import dataclass
from datetime import timedelta

from nexus.config.schema import NexusConfig
from nexus.conversation.chat import ChatService
from nexus.conversation.emotion import EmotionClassifier
from nexus.conversation.sessions import SessionStore
from nexus.conversation.voice import VoiceService
from nexus.llm.client import LLMClient
from nexus.llm.provider import AIProvider
from nexus.server.ratelimit import RateLimiter
from nexus.storage import (
    ChatRepository,
    CheckinRepository,
    Database,
    ExerciseRepository,
    MoodRepository,
)


@dataclass
class Services:
    """Everything a router needs, built once per application."""

    config: NexusConfig
    db: Database
    provider: AIProvider
    sessions: SessionStore
    voice: VoiceService
    chat: ChatService
    emotion: EmotionClassifier
    moods: MoodRepository
    checkins: CheckinRepository
    exercises: ExerciseRepository
    chat_limiter: RateLimiter
    ai_limiter: RateLimiter

    async def close(self) -> None:
        await self.provider.close()
        self.db.close()


def build_services(
    config: NexusConfig,
    llm_client: LLMClient | None = None,
    db: Database | None = None,
) -> Services:
    """Build the service graph from configuration.

    Args:
        config: Nexus configuration
        llm_client: Use this client instead of one built from ``config.provider``
        db: Use this database instead of opening ``config.database.path``
    """
    db = db or Database(config.database.path)
    provider = AIProvider.from_config(config, client=llm_client)

    idle = config.sessions.idle_timeout_minutes
    sessions = SessionStore(
        max_turns=config.sessions.max_turns,
        idle_timeout=timedelta(minutes=idle) if idle else None,
    )

    limits = config.rate_limit
    return Services(
        config=config,
        db=db,
        provider=provider,
        sessions=sessions,
        voice=VoiceService(provider, sessions),
        chat=ChatService(
            provider,
            ChatRepository(db),
            context_messages=config.chat.context_messages,
            history_limit=config.chat.history_limit,
            idle_timeout=timedelta(minutes=config.chat.context_idle_minutes),
        ),
        emotion=EmotionClassifier(provider),
        moods=MoodRepository(db),
        checkins=CheckinRepository(db),
        exercises=ExerciseRepository(db),
        chat_limiter=RateLimiter("chat", limits.chat_per_window, limits.window_seconds),
        ai_limiter=RateLimiter(
            "ai",
            limits.ai_per_window,
            limits.window_seconds,
            message="Too many AI requests, please try again later.",
        ),
    )
