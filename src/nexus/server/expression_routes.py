"""Emotion detection routes that drive the avatar's expression."""

from collections.abc import Sequence
from typing import Any

from fastapi import APIRouter, params
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from nexus.server.services import Services


class DetectRequest(BaseModel):
    # Any JSON value; the handler rejects non-strings
    text: Any = None


def create_expression_router(
    services: Services, dependencies: Sequence[params.Depends] = ()
) -> APIRouter:
    """Create the /api/expression router."""
    router = APIRouter(prefix="/api/expression", tags=["expression"])

    @router.post("/detect", dependencies=list(dependencies), response_model=None)
    async def detect(request: DetectRequest) -> dict[str, Any] | JSONResponse:
        if not isinstance(request.text, str) or not request.text.strip():
            return JSONResponse(
                status_code=400,
                content={"success": False, "error": "Text input is required"},
            )

        result = await services.emotion.detect_emotion(request.text)
        body: dict[str, Any] = {
            "success": True,
            "emotion": result.emotion,
            "confidence": result.confidence,
        }
        if result.details:
            body["details"] = result.details
        return body

    @router.get("/test")
    async def test() -> dict[str, str]:
        return {"message": "Expression API is working"}

    return router
