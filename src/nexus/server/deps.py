"""Request dependencies and response helpers shared by the routers."""

from typing import Annotated, Any

from fastapi import Depends, Header
from pydantic import BaseModel

DEFAULT_USER_ID = "default-user"


async def current_user(x_user_id: Annotated[str | None, Header()] = None) -> str:
    """Owner of the request; there is no authentication, so this is advisory."""
    return x_user_id or DEFAULT_USER_ID


UserId = Annotated[str, Depends(current_user)]


def dump(value: Any) -> Any:
    """Serialize records with their wire (camelCase, ``_id``) field names."""
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, mode="json")
    if isinstance(value, list):
        return [dump(item) for item in value]
    return value


def envelope(data: Any = None, **extra: Any) -> dict[str, Any]:
    body: dict[str, Any] = {"status": "success"}
    if data is not None:
        body["data"] = dump(data)
    body.update(extra)
    return body
