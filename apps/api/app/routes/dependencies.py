"""Dependency wiring for routes."""

from __future__ import annotations

import logging
from typing import Annotated, Awaitable, Callable
from uuid import uuid4

from fastapi import Depends, Request, Security
from fastapi.security import APIKeyHeader, APIKeyQuery, HTTPAuthorizationCredentials, HTTPBearer

from app.adapters.auth import API_KEY_HEADER, API_KEY_QUERY_PARAM, AuthResolver, CredentialMaterial
from app.core.logging_safety import authorization_scheme, safe_client_key, safe_log_identifier
from app.domain.scopes import ensure_scope
from app.errors import ApiError
from app.repositories.samples import SampleInvoiceStore
from app.schemas.auth import AuthPrincipal
from app.services.invoices import InvoiceService
from app.services.rate_limiter import RateLimiter, RateWindow
from app.services.validation import InvoiceValidationService

api_key_header_scheme = APIKeyHeader(name=API_KEY_HEADER, auto_error=False, scheme_name="apiKeyHeader")
api_key_query_scheme = APIKeyQuery(name=API_KEY_QUERY_PARAM, auto_error=False, scheme_name="apiKeyQuery")
bearer_scheme = HTTPBearer(auto_error=False, scheme_name="bearerAuth")
logger = logging.getLogger(__name__)


def _request_correlation_id(request: Request) -> str:
    existing = getattr(request.state, "correlation_id", None)
    if isinstance(existing, str) and existing:
        return existing

    correlation_id = request.headers.get("X-Correlation-Id")
    if correlation_id:
        request.state.correlation_id = correlation_id
        return correlation_id

    generated = f"req-{uuid4()}"
    request.state.correlation_id = generated
    return generated


def get_auth_resolver(request: Request) -> AuthResolver:
    return request.app.state.auth_resolver


def _route_and_client(request: Request) -> tuple[str, str]:
    route = request.scope.get("route")
    route_path = getattr(route, "path", request.url.path)
    client_host = request.client.host if request.client else "unknown"
    return route_path, client_host


def rate_limit_key(request: Request) -> str:
    """Key requests by matched route template plus client address."""
    route_path, client_host = _route_and_client(request)
    return f"{route_path}:{client_host}"


def _enforce(request: Request, limiter: RateLimiter) -> RateWindow:
    try:
        return limiter.hit(rate_limit_key(request))
    except ApiError:
        logger.warning(
            "admission.rejected correlation_id=%s method=%s path=%s stage=rate_limit client_key=%s",
            safe_log_identifier(_request_correlation_id(request), prefix="cid"),
            request.method,
            request.url.path,
            safe_client_key(*_route_and_client(request)),
        )
        raise


async def enforce_rate_limit(request: Request) -> RateWindow:
    return _enforce(request, request.app.state.rate_limiter)


async def enforce_burst_rate_limit(request: Request) -> RateWindow:
    return _enforce(request, request.app.state.burst_rate_limiter)


async def get_authenticated_principal(
    request: Request,
    resolver: Annotated[AuthResolver, Depends(get_auth_resolver)],
    header_key: Annotated[str | None, Security(api_key_header_scheme)],
    query_key: Annotated[str | None, Security(api_key_query_scheme)],
    bearer: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
) -> AuthPrincipal:
    """Run the auth strategies and attach the resulting principal to request context.

    Basic credentials are decoded from the raw header so a malformed payload
    can be reported as 400 rather than the 401 ``HTTPBasic`` would raise.
    """
    material = CredentialMaterial(
        api_key=header_key or query_key,
        bearer_token=bearer.credentials.strip() if bearer else None,
        authorization=request.headers.get("authorization"),
    )
    correlation_id = _request_correlation_id(request)
    safe_correlation_id = safe_log_identifier(correlation_id, prefix="cid")
    try:
        principal = resolver.resolve(material)
    except ApiError as exc:
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=%s scheme=%s",
            safe_correlation_id,
            request.method,
            request.url.path,
            exc.payload.code.lower(),
            authorization_scheme(request.headers.get("authorization")),
        )
        raise

    logger.info(
        "auth.accepted correlation_id=%s method=%s path=%s principal_id=%s strategy=%s",
        safe_correlation_id,
        request.method,
        request.url.path,
        safe_log_identifier(principal.subject, prefix="pid"),
        principal.strategy.value,
    )
    request.state.auth_principal = principal
    return principal


def require_scope(scope: str) -> Callable[..., Awaitable[AuthPrincipal]]:
    """Build a dependency that authenticates and then requires ``scope``."""

    async def _require_scope(
        request: Request,
        principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    ) -> AuthPrincipal:
        try:
            ensure_scope(principal, scope)
        except ApiError:
            logger.warning(
                "auth.forbidden correlation_id=%s method=%s path=%s principal_id=%s required_scope=%s",
                safe_log_identifier(_request_correlation_id(request), prefix="cid"),
                request.method,
                request.url.path,
                safe_log_identifier(principal.subject, prefix="pid"),
                scope,
            )
            raise
        return principal

    return _require_scope


def get_sample_store(request: Request) -> SampleInvoiceStore:
    return request.app.state.sample_store


def get_invoice_service(store: Annotated[SampleInvoiceStore, Depends(get_sample_store)]) -> InvoiceService:
    return InvoiceService(store)


def get_validation_service() -> InvoiceValidationService:
    return InvoiceValidationService()
