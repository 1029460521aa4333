"""Application exception types."""

from typing import Any

from app.schemas.error import (
    ErrorResponse,
    InsufficientScopeErrorDetails,
    MissingHeadersErrorDetails,
    RateLimitedErrorDetails,
)


class ApiError(Exception):
    """Structured API error that maps directly to contract error payloads."""

    def __init__(
        self,
        status_code: int,
        code: str,
        error: str,
        message: str,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self.headers = headers
        self.payload = ErrorResponse(error=error, code=code, message=message, details=details)
        super().__init__(message)


class MissingHeadersError(ApiError):
    def __init__(self, missing: list[str]) -> None:
        super().__init__(
            status_code=400,
            code="MISSING_HEADERS",
            error="Missing Headers",
            message=f"Missing mandatory headers: {', '.join(missing)}",
            details=MissingHeadersErrorDetails(missing_headers=list(missing)).model_dump(),
        )


class MissingCredentialError(ApiError):
    def __init__(self) -> None:
        super().__init__(
            status_code=401,
            code="MISSING_CREDENTIAL",
            error="Unauthorized",
            message="Authentication required: supply an API key, Basic credentials or a Bearer token",
        )


class CredentialExpiredError(ApiError):
    def __init__(self) -> None:
        super().__init__(
            status_code=401,
            code="CREDENTIAL_EXPIRED",
            error="Unauthorized",
            message="Bearer token has expired",
        )


class InvalidCredentialError(ApiError):
    def __init__(self, message: str) -> None:
        super().__init__(status_code=403, code="INVALID_CREDENTIAL", error="Access Denied", message=message)


class MalformedCredentialError(ApiError):
    def __init__(self, message: str) -> None:
        super().__init__(status_code=400, code="MALFORMED_CREDENTIAL", error="Bad Request", message=message)


class InsufficientScopeError(ApiError):
    def __init__(self, required_scope: str) -> None:
        super().__init__(
            status_code=403,
            code="INSUFFICIENT_SCOPE",
            error="Access Denied",
            message="Insufficient permissions",
            details=InsufficientScopeErrorDetails(required_scope=required_scope).model_dump(),
        )


class RateLimitedError(ApiError):
    def __init__(self, *, limit: int, window_seconds: float, retry_after: int) -> None:
        super().__init__(
            status_code=429,
            code="RATE_LIMITED",
            error="Too Many Requests",
            message=f"Rate limit exceeded, retry in {retry_after} seconds",
            details=RateLimitedErrorDetails(
                limit=limit,
                window_seconds=window_seconds,
                retry_after=retry_after,
            ).model_dump(),
            headers={"Retry-After": str(retry_after)},
        )


class ResourceNotFoundError(ApiError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(status_code=404, code="RESOURCE_NOT_FOUND", error="Not Found", message=message)


__all__ = [
    "ApiError",
    "CredentialExpiredError",
    "InsufficientScopeError",
    "InvalidCredentialError",
    "MalformedCredentialError",
    "MissingCredentialError",
    "MissingHeadersError",
    "RateLimitedError",
    "ResourceNotFoundError",
]
