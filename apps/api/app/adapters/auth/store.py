"""In-memory credential store for the mock API.

Records are fixed at startup and matched literally; tokens are never decoded
or signature-checked.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from app.core.config import Settings


class TokenStatus(str, Enum):
    VALID = "valid"
    EXPIRED = "expired"


@dataclass(frozen=True, slots=True)
class TokenRecord:
    token: str
    scopes: frozenset[str]
    status: TokenStatus = TokenStatus.VALID


@dataclass(frozen=True, slots=True)
class CredentialStore:
    api_key: str
    basic_username: str
    basic_password: str
    default_scopes: frozenset[str]
    tokens: Mapping[str, TokenRecord] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tokens", MappingProxyType(dict(self.tokens)))

    def lookup_token(self, token: str) -> TokenRecord | None:
        return self.tokens.get(token)

    @classmethod
    def from_settings(cls, settings: Settings) -> CredentialStore:
        default_scopes = frozenset(settings.default_scopes)
        records = (
            TokenRecord(token=settings.bearer_token, scopes=default_scopes),
            TokenRecord(token=settings.read_only_token, scopes=frozenset({"read"})),
            TokenRecord(
                token=settings.expired_token,
                scopes=default_scopes,
                status=TokenStatus.EXPIRED,
            ),
        )
        return cls(
            api_key=settings.api_key,
            basic_username=settings.basic_username,
            basic_password=settings.basic_password,
            default_scopes=default_scopes,
            tokens={record.token: record for record in records},
        )


__all__ = ["CredentialStore", "TokenRecord", "TokenStatus"]
