"""Edge-case route schemas."""

from typing import Any

from pydantic import BaseModel

from app.schemas.auth import AuthStrategy


class ScopeProtectedResponse(BaseModel):
    success: bool = True
    message: str
    subject: str
    strategy: AuthStrategy
    scopes: list[str]


class RateLimitProbeResponse(BaseModel):
    success: bool = True
    message: str
    request_count: int
    limit: int


class StrictPostResponse(BaseModel):
    success: bool = True
    received: dict[str, Any]
