"""Credential material supplied by a request, one variant per auth strategy."""

from dataclasses import dataclass

from app.schemas.auth import AuthStrategy


@dataclass(frozen=True, slots=True)
class ApiKeyCredential:
    value: str

    @property
    def strategy(self) -> AuthStrategy:
        return AuthStrategy.API_KEY


@dataclass(frozen=True, slots=True)
class BasicCredential:
    username: str
    password: str

    @property
    def strategy(self) -> AuthStrategy:
        return AuthStrategy.BASIC


@dataclass(frozen=True, slots=True)
class BearerCredential:
    token: str

    @property
    def strategy(self) -> AuthStrategy:
        return AuthStrategy.BEARER


Credential = ApiKeyCredential | BasicCredential | BearerCredential


__all__ = ["ApiKeyCredential", "BasicCredential", "BearerCredential", "Credential"]
