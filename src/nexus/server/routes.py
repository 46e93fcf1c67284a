"""API routes for the Nexus server."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from nexus import __version__
from nexus.server.chat_routes import create_chat_router
from nexus.server.exercise_routes import create_exercise_router
from nexus.server.expression_routes import create_expression_router
from nexus.server.mood_routes import create_checkin_router, create_mood_router
from nexus.server.services import Services
from nexus.server.voice_routes import create_voice_router


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    model: str
    version: str


def create_router(services: Services) -> APIRouter:
    """Create the API router with every feature router mounted.

    Chat and exercise routes share the chat rate limit; emotion detection
    uses the stricter AI limit.

    Args:
        services: Application services

    Returns:
        Configured API router
    """
    router = APIRouter()

    chat_limit = []
    ai_limit = []
    if services.config.rate_limit.enabled:
        chat_limit = [Depends(services.chat_limiter.dependency())]
        ai_limit = [Depends(services.ai_limiter.dependency())]

    @router.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy", model=services.provider.model, version=__version__)

    router.include_router(create_voice_router(services))
    router.include_router(create_chat_router(services, chat_limit))
    router.include_router(create_expression_router(services, ai_limit))
    router.include_router(create_mood_router(services))
    router.include_router(create_checkin_router(services))
    router.include_router(create_exercise_router(services, chat_limit))

    return router
