"""HTTP middleware for the API namespace."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.core.logging_safety import safe_log_identifier
from app.domain.headers import ensure_mandatory_headers, is_gated_path
from app.errors import ApiError

logger = logging.getLogger(__name__)


def error_response(exc: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.payload.model_dump(mode="json", exclude_none=True),
        headers=exc.headers,
    )


class MandatoryHeadersMiddleware(BaseHTTPMiddleware):
    """Reject API requests that do not carry every mandatory header.

    Runs ahead of routing so unknown paths under the prefix are gated too.
    """

    def __init__(self, app: ASGIApp, *, api_prefix: str) -> None:
        super().__init__(app)
        self.api_prefix = api_prefix

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        if not is_gated_path(request.url.path, self.api_prefix):
            return await call_next(request)

        try:
            ensure_mandatory_headers(request.headers)
        except ApiError as exc:
            logger.warning(
                "admission.rejected correlation_id=%s method=%s path=%s stage=headers missing=%s",
                safe_log_identifier(request.headers.get("X-Correlation-Id"), prefix="cid"),
                request.method,
                request.url.path,
                ",".join(exc.payload.details["missing_headers"]),
            )
            return error_response(exc)

        return await call_next(request)
