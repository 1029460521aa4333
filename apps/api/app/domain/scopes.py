"""Scope checks for scope-protected routes."""

from app.errors import InsufficientScopeError
from app.schemas.auth import AuthPrincipal

WRITE_SCOPE = "write"


def ensure_scope(principal: AuthPrincipal, required_scope: str) -> None:
    if not principal.has_scope(required_scope):
        raise InsufficientScopeError(required_scope)
