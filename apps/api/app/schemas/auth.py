"""Authentication schemas."""

from enum import Enum

from pydantic import BaseModel, Field


class AuthStrategy(str, Enum):
    API_KEY = "api_key"
    BASIC = "basic"
    BEARER = "bearer"


# Priority order in which strategies are tried; the first with material present decides.
STRATEGY_ORDER: tuple[AuthStrategy, ...] = (
    AuthStrategy.API_KEY,
    AuthStrategy.BASIC,
    AuthStrategy.BEARER,
)


class AuthPrincipal(BaseModel):
    """Authenticated identity and granted scopes for the lifetime of one request."""

    subject: str = Field(min_length=1)
    scopes: frozenset[str] = frozenset()
    strategy: AuthStrategy

    def has_scope(self, scope: str) -> bool:
        return scope in self.scopes
