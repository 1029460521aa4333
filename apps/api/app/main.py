"""FastAPI application entrypoint."""

from __future__ import annotations

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.adapters.auth import AuthResolver, CredentialStore
from app.core.config import Settings, get_settings
from app.core.middleware import MandatoryHeadersMiddleware, error_response
from app.errors import ApiError
from app.repositories.samples import SampleInvoiceStore
from app.routes import edge_cases_router, invoices_router, xml_invoices_router
from app.routes.dependencies import enforce_rate_limit
from app.schemas.error import ErrorResponse
from app.services.rate_limiter import RateLimiter


def _payload_errors(exc: RequestValidationError) -> list[dict[str, object]]:
    return [{"loc": list(error.get("loc", ())), "msg": str(error.get("msg", ""))} for error in exc.errors()]


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="E-Invoice Mock API", version="1.0.0")

    app.state.settings = settings
    app.state.credential_store = CredentialStore.from_settings(settings)
    app.state.auth_resolver = AuthResolver(app.state.credential_store)
    app.state.rate_limiter = RateLimiter(
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
        stale_after_windows=settings.rate_limit_stale_windows,
        name="api",
    )
    app.state.burst_rate_limiter = RateLimiter(
        max_requests=settings.burst_rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
        stale_after_windows=settings.rate_limit_stale_windows,
        name="burst",
    )
    app.state.sample_store = SampleInvoiceStore()

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        payload = ErrorResponse(
            error="Bad Request",
            code="INVALID_PAYLOAD",
            message="Malformed or invalid request payload",
            details={"errors": _payload_errors(exc)},
        )
        return JSONResponse(status_code=400, content=payload.model_dump(mode="json"))

    @app.get("/health", tags=["Health"])
    async def health() -> dict[str, str]:
        return {"status": "OK"}

    app.add_middleware(MandatoryHeadersMiddleware, api_prefix=settings.api_prefix)

    admission = [Depends(enforce_rate_limit)]
    app.include_router(invoices_router, prefix=settings.api_prefix, dependencies=admission)
    app.include_router(xml_invoices_router, prefix=settings.api_prefix, dependencies=admission)
    app.include_router(edge_cases_router, prefix=settings.api_prefix, dependencies=admission)

    return app


app = create_app()
