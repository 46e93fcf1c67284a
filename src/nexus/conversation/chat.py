"""Text chat with the companion persona, persisted per user."""

import logging
from datetime import timedelta

from nexus.conversation.prompt import build_prompt
from nexus.conversation.sessions import SessionStore
from nexus.llm.provider import AIProvider
from nexus.storage.chats import ChatRepository
from nexus.storage.schema import ChatRecord

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT_IDLE = timedelta(hours=1)


class ChatService:
    """Answers chat messages using the user's recent messages as context.

    Recent context lives in memory, keyed by user id, and is dropped after
    ``idle_timeout`` without messages. Every exchange is also persisted so
    history survives restarts.
    """

    def __init__(
        self,
        provider: AIProvider,
        chats: ChatRepository,
        context_messages: int = 5,
        history_limit: int = 50,
        idle_timeout: timedelta | None = DEFAULT_CONTEXT_IDLE,
    ):
        self.provider = provider
        self.chats = chats
        self.context_messages = context_messages
        self.history_limit = history_limit
        # Each exchange is two turns; keep enough for the user-message window
        self.sessions = SessionStore(max_turns=context_messages * 2, idle_timeout=idle_timeout)

    def _context(self, user_id: str, message: str) -> str:
        previous = [t.content for t in self.sessions.get_context(user_id) if t.role == "user"]
        recent = (previous + [message])[-self.context_messages :]
        return "\n".join(f"User: {text}" for text in recent)

    async def process_message(self, user_id: str, message: str) -> ChatRecord:
        """Reply to ``message`` and persist the exchange.

        The canned fallback reply is persisted like any other reply.
        """
        self.sessions.evict_idle()
        prompt = build_prompt(message, self._context(user_id, message))
        reply = await self.provider.generate_reply(prompt)
        if not reply.succeeded:
            logger.warning("Chat reply for %s used the fallback message", user_id)

        await self.sessions.append_turn(user_id, message, reply.text)
        return self.chats.save(ChatRecord(user_id=user_id, message=message, response=reply.text))

    def history(self, user_id: str) -> list[ChatRecord]:
        """Persisted exchanges for ``user_id``, newest first."""
        return self.chats.recent(user_id, self.history_limit)

    def clear(self, user_id: str) -> int:
        """Delete persisted history and in-memory context. Returns rows removed."""
        self.sessions.end_session(user_id)
        removed = self.chats.delete_all(user_id)
        logger.info("Cleared %d chat records for %s", removed, user_id)
        return removed
