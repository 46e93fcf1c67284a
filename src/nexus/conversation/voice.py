"""Voice companion chat over ephemeral sessions."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from nexus.conversation.prompt import build_voice_prompt
from nexus.conversation.sessions import ConversationTurn, SessionStore
from nexus.llm.provider import AIProvider

logger = logging.getLogger(__name__)


@dataclass
class VoiceReply:
    response: str
    history: list[ConversationTurn]
    session_id: str


class VoiceService:
    """Answers voice-chat messages using the session history as model context."""

    def __init__(self, provider: AIProvider, sessions: SessionStore):
        self.provider = provider
        self.sessions = sessions

    async def process(
        self,
        text: str,
        context: Sequence[Any] | None = None,
        session_id: str | None = None,
    ) -> VoiceReply:
        """Generate a reply and record the exchange.

        Args:
            text: The user's utterance
            context: Client-held history, used only when the session is new
            session_id: Existing session id; unknown or missing ids start a new session

        Returns:
            The reply text, the updated session history and the session id
        """
        session = self.sessions.get_session(session_id) if session_id else None
        if session is None:
            session = self.sessions.start_session()
            history: Sequence[Any] = context or []
            logger.info("Voice chat started new session %s", session.session_id)
        else:
            history = self.sessions.get_context(session.session_id)

        reply = await self.provider.generate_reply(build_voice_prompt(text), history)
        if not reply.succeeded:
            logger.warning("Voice chat for session %s used the fallback reply", session.session_id)

        session = await self.sessions.append_turn(session.session_id, text, reply.text)
        return VoiceReply(
            response=reply.text,
            history=list(session.history),
            session_id=session.session_id,
        )
