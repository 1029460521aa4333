"""API error response schemas."""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    code: str
    message: str
    details: dict[str, Any] | None = None


class MissingHeadersErrorDetails(BaseModel):
    missing_headers: list[str]


class InsufficientScopeErrorDetails(BaseModel):
    required_scope: str


class RateLimitedErrorDetails(BaseModel):
    limit: int
    window_seconds: float
    retry_after: int
