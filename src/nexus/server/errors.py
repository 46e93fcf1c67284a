"""Mapping of domain exceptions to JSON error responses."""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from nexus.errors import CheckinAlreadySubmittedError, NotFoundError
from nexus.server.ratelimit import RateLimitExceededError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message, **extra},
    )


def _clean_errors(errors: list[Any]) -> list[Any]:
    # ctx may carry the raw exception object, which is not JSON serializable
    cleaned = []
    for error in errors:
        error = dict(error)
        if "ctx" in error:
            error["ctx"] = {k: str(v) for k, v in error["ctx"].items()}
        error.pop("url", None)
        cleaned.append(error)
    return jsonable_encoder(cleaned)


def install_error_handlers(app: FastAPI) -> None:
    """Register the exception handlers that define the API's error envelope."""

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return error_response(404, str(exc))

    @app.exception_handler(CheckinAlreadySubmittedError)
    async def already_submitted(request: Request, exc: CheckinAlreadySubmittedError) -> JSONResponse:
        return error_response(400, str(exc))

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        return error_response(400, "Validation failed", errors=_clean_errors(list(exc.errors())))

    @app.exception_handler(ValidationError)
    async def invalid_record(request: Request, exc: ValidationError) -> JSONResponse:
        return error_response(400, "Validation failed", errors=_clean_errors(exc.errors()))

    @app.exception_handler(RateLimitExceededError)
    async def rate_limited(request: Request, exc: RateLimitExceededError) -> JSONResponse:
        return error_response(429, str(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(500, "Internal server error")
