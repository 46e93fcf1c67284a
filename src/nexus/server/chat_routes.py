"""Persisted text chat routes."""

from collections.abc import Sequence
from typing import Any

from fastapi import APIRouter, params
from pydantic import BaseModel, Field

from nexus.server.deps import dump, envelope
from nexus.server.services import Services


class ChatRequest(BaseModel):
    """Request body for the chat endpoint."""

    user_id: str = Field(alias="userId", min_length=1)
    message: str = Field(min_length=1, max_length=2000)


class ClearRequest(BaseModel):
    user_id: str = Field(alias="userId", min_length=1)


def create_chat_router(services: Services, dependencies: Sequence[params.Depends] = ()) -> APIRouter:
    """Create the /api/chat router.

    Args:
        services: Application services
        dependencies: Extra dependencies applied to every route (rate limiting)

    Returns:
        Configured API router
    """
    router = APIRouter(prefix="/api/chat", tags=["chat"], dependencies=list(dependencies))

    @router.post("")
    async def send_message(request: ChatRequest) -> dict[str, Any]:
        record = await services.chat.process_message(request.user_id, request.message)
        return dump(record)

    @router.get("/history/{user_id}")
    async def history(user_id: str) -> list[dict[str, Any]]:
        return dump(services.chat.history(user_id))

    async def clear(request: ClearRequest) -> dict[str, Any]:
        services.chat.clear(request.user_id)
        return envelope(message="Chat history cleared successfully")

    router.add_api_route("/history", clear, methods=["DELETE"])
    router.add_api_route("/clear", clear, methods=["POST"])

    return router
