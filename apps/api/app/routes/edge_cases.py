"""Edge-case routes exercising individual admission stages."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Request

from app.domain.scopes import WRITE_SCOPE
from app.routes.dependencies import enforce_burst_rate_limit, require_scope
from app.schemas.auth import AuthPrincipal
from app.schemas.edge_case import RateLimitProbeResponse, ScopeProtectedResponse, StrictPostResponse
from app.schemas.error import ErrorResponse
from app.services.rate_limiter import RateWindow

router = APIRouter(prefix="/edge-cases", tags=["Edge Cases"])


@router.get(
    "/scope-protected",
    response_model=ScopeProtectedResponse,
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def scope_protected(
    principal: Annotated[AuthPrincipal, Depends(require_scope(WRITE_SCOPE))],
) -> ScopeProtectedResponse:
    return ScopeProtectedResponse(
        message=f"Access granted with '{WRITE_SCOPE}' scope",
        subject=principal.subject,
        strategy=principal.strategy,
        scopes=sorted(principal.scopes),
    )


@router.get("/rate-limit", response_model=RateLimitProbeResponse, responses={429: {"model": ErrorResponse}})
async def rate_limit_burst(
    request: Request,
    window: Annotated[RateWindow, Depends(enforce_burst_rate_limit)],
) -> RateLimitProbeResponse:
    return RateLimitProbeResponse(
        message="Request admitted",
        request_count=window.count,
        limit=request.app.state.burst_rate_limiter.max_requests,
    )


@router.post("/strict-post", response_model=StrictPostResponse, responses={400: {"model": ErrorResponse}})
async def strict_post(payload: Annotated[dict[str, Any], Body()]) -> StrictPostResponse:
    return StrictPostResponse(received=payload)
