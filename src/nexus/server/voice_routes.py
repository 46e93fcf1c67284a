"""Voice companion routes: session lifecycle and chat turns."""

import logging
from datetime import datetime
from typing import Annotated, Any, Literal

from fastapi import APIRouter, Header
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from nexus.server.deps import envelope
from nexus.server.errors import error_response
from nexus.server.services import Services

logger = logging.getLogger(__name__)


class HistoryItem(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class VoiceChatRequest(BaseModel):
    """Request body for a voice chat turn."""

    text: str = Field(min_length=1, max_length=1000)
    context: list[HistoryItem] | None = None


class SessionStarted(BaseModel):
    session_id: str = Field(serialization_alias="sessionId")
    created_at: datetime = Field(serialization_alias="createdAt")


def create_voice_router(services: Services) -> APIRouter:
    """Create the /api/voice router.

    Args:
        services: Application services

    Returns:
        Configured API router
    """
    router = APIRouter(prefix="/api/voice", tags=["voice"])

    @router.post("/session/start", status_code=201)
    async def start_session() -> dict[str, Any]:
        session = services.sessions.start_session()
        logger.info("Voice session started: %s", session.session_id)
        return envelope(SessionStarted(session_id=session.session_id, created_at=session.created_at))

    @router.post("/session/end", response_model=None)
    async def end_session(
        x_session_id: Annotated[str | None, Header()] = None,
    ) -> dict[str, Any] | JSONResponse:
        if not x_session_id:
            return error_response(400, "Session ID is required")
        if not services.sessions.end_session(x_session_id):
            return error_response(404, "Session not found")
        return envelope(message="Session ended successfully")

    @router.post("/chat")
    async def chat(
        request: VoiceChatRequest,
        x_session_id: Annotated[str | None, Header()] = None,
    ) -> dict[str, Any]:
        """Answer one voice turn, creating a session when the header is absent or unknown."""
        context = [item.model_dump() for item in request.context] if request.context else None
        reply = await services.voice.process(request.text, context, x_session_id)
        return envelope(
            {
                "response": reply.response,
                "history": [turn.to_dict() for turn in reply.history],
                "sessionId": reply.session_id,
            }
        )

    return router
