"""Guided exercise routes."""

from collections.abc import Sequence
from typing import Annotated, Any

from fastapi import APIRouter, Query, params

from nexus.errors import NotFoundError
from nexus.server.deps import envelope
from nexus.server.services import Services
from nexus.storage.schema import Difficulty


def create_exercise_router(
    services: Services, dependencies: Sequence[params.Depends] = ()
) -> APIRouter:
    """Create the /api/exercises router."""
    router = APIRouter(prefix="/api/exercises", tags=["exercises"], dependencies=list(dependencies))
    exercises = services.exercises

    @router.get("")
    async def list_exercises(
        category: str | None = None,
        difficulty: Difficulty | None = None,
        duration: Annotated[int | None, Query(ge=1, description="Maximum minutes")] = None,
    ) -> dict[str, Any]:
        return envelope(exercises.list(category, difficulty, duration))

    @router.get("/random")
    async def random_exercise(category: str | None = None) -> dict[str, Any]:
        exercise = exercises.random(category)
        if exercise is None:
            raise NotFoundError("Exercise")
        return envelope(exercise)

    return router
