"""Mood entry and check-in routes."""

from datetime import date
from typing import Annotated, Any

from fastapi import APIRouter, Query

from nexus.errors import NotFoundError
from nexus.server.deps import UserId, dump, envelope
from nexus.server.services import Services
from nexus.storage.schema import CheckinCreate, CheckinUpdate, MoodCreate, MoodUpdate

Page = Annotated[int, Query(ge=1)]
Limit = Annotated[int, Query(ge=1, le=100)]
StartDate = Annotated[date | None, Query(alias="startDate")]
EndDate = Annotated[date | None, Query(alias="endDate")]


def create_mood_router(services: Services) -> APIRouter:
    """Create the /api/moods router."""
    router = APIRouter(prefix="/api/moods", tags=["moods"])
    moods = services.moods

    @router.post("", status_code=201)
    async def create_mood(body: MoodCreate, user_id: UserId) -> dict[str, Any]:
        return dump(moods.create(user_id, body))

    @router.get("")
    async def list_moods(
        user_id: UserId,
        page: Page = 1,
        limit: Limit = 10,
        start_date: StartDate = None,
        end_date: EndDate = None,
    ) -> dict[str, Any]:
        result = moods.find_paginated(user_id, page, limit, start_date, end_date)
        return {"status": "success", "data": result.to_dict("moods")}

    @router.get("/stats")
    async def mood_stats(user_id: UserId) -> dict[str, Any]:
        return envelope(moods.stats(user_id))

    @router.get("/latest")
    async def latest_mood(user_id: UserId) -> dict[str, Any]:
        latest = moods.latest(user_id)
        if latest is None:
            raise NotFoundError("Mood entry")
        return envelope(latest)

    @router.get("/{mood_id}")
    async def get_mood(mood_id: str, user_id: UserId) -> dict[str, Any]:
        return envelope(moods.get(user_id, mood_id))

    @router.put("/{mood_id}")
    async def update_mood(mood_id: str, body: MoodUpdate, user_id: UserId) -> dict[str, Any]:
        return envelope(moods.update(user_id, mood_id, body))

    @router.delete("/{mood_id}")
    async def delete_mood(mood_id: str, user_id: UserId) -> dict[str, Any]:
        moods.delete(user_id, mood_id)
        return envelope(message="Mood entry deleted successfully")

    return router


def create_checkin_router(services: Services) -> APIRouter:
    """Create the /api/checkins router."""
    router = APIRouter(prefix="/api/checkins", tags=["checkins"])
    checkins = services.checkins

    @router.post("", status_code=201)
    async def create_checkin(body: CheckinCreate, user_id: UserId) -> dict[str, Any]:
        return envelope(checkins.create(user_id, body))

    @router.get("/today")
    async def today(user_id: UserId) -> dict[str, Any]:
        checkin = checkins.today(user_id)
        if checkin is None:
            raise NotFoundError("Check-in for today")
        return envelope(checkin)

    @router.get("/history")
    async def history(
        user_id: UserId,
        page: Page = 1,
        limit: Limit = 10,
        start_date: StartDate = None,
        end_date: EndDate = None,
    ) -> dict[str, Any]:
        result = checkins.find_paginated(user_id, page, limit, start_date, end_date)
        return {"status": "success", "data": result.to_dict("checkins")}

    @router.get("/{checkin_id}")
    async def get_checkin(checkin_id: str, user_id: UserId) -> dict[str, Any]:
        return envelope(checkins.get(user_id, checkin_id))

    @router.put("/{checkin_id}")
    async def update_checkin(checkin_id: str, body: CheckinUpdate, user_id: UserId) -> dict[str, Any]:
        return envelope(checkins.update(user_id, checkin_id, body))

    @router.delete("/{checkin_id}")
    async def delete_checkin(checkin_id: str, user_id: UserId) -> dict[str, Any]:
        checkins.delete(user_id, checkin_id)
        return envelope(message="Check-in deleted successfully")

    return router
