"""Multi-strategy authentication against the in-memory credential store."""

from __future__ import annotations

from secrets import compare_digest

from app.adapters.auth.base import ApiKeyCredential, BasicCredential, BearerCredential, Credential
from app.adapters.auth.extractor import CredentialExtractor, CredentialMaterial
from app.adapters.auth.store import CredentialStore, TokenStatus
from app.errors import CredentialExpiredError, InvalidCredentialError, MissingCredentialError
from app.schemas.auth import STRATEGY_ORDER, AuthPrincipal, AuthStrategy


def _matches(presented: str, expected: str) -> bool:
    return compare_digest(presented.encode("utf-8"), expected.encode("utf-8"))


class AuthResolver:
    """Tries strategies in ``STRATEGY_ORDER``; the first one with material present decides.

    A strategy that finds no material defers to the next one. Once material is
    found, that strategy either returns a principal or raises, and no later
    strategy is consulted.
    """

    def __init__(self, store: CredentialStore, extractor: CredentialExtractor | None = None) -> None:
        self._store = store
        self._extractor = extractor or CredentialExtractor()

    def resolve(self, material: CredentialMaterial) -> AuthPrincipal:
        for strategy in STRATEGY_ORDER:
            credential = self._extractor.extract(strategy, material)
            if credential is None:
                continue
            return self.authenticate(credential)

        raise MissingCredentialError()

    def authenticate(self, credential: Credential) -> AuthPrincipal:
        handlers = {
            AuthStrategy.API_KEY: self._authenticate_api_key,
            AuthStrategy.BASIC: self._authenticate_basic,
            AuthStrategy.BEARER: self._authenticate_bearer,
        }
        return handlers[credential.strategy](credential)

    def _authenticate_api_key(self, credential: ApiKeyCredential) -> AuthPrincipal:
        if not _matches(credential.value, self._store.api_key):
            raise InvalidCredentialError("Invalid API key")
        return AuthPrincipal(
            subject="api-key",
            scopes=self._store.default_scopes,
            strategy=AuthStrategy.API_KEY,
        )

    def _authenticate_basic(self, credential: BasicCredential) -> AuthPrincipal:
        # Both fields are always compared.
        username_ok = _matches(credential.username, self._store.basic_username)
        password_ok = _matches(credential.password, self._store.basic_password)
        if not (username_ok and password_ok):
            raise InvalidCredentialError("Invalid username or password")
        return AuthPrincipal(
            subject=credential.username,
            scopes=self._store.default_scopes,
            strategy=AuthStrategy.BASIC,
        )

    def _authenticate_bearer(self, credential: BearerCredential) -> AuthPrincipal:
        record = self._store.lookup_token(credential.token)
        if record is None:
            raise InvalidCredentialError("Invalid bearer token")
        if record.status is TokenStatus.EXPIRED:
            raise CredentialExpiredError()
        return AuthPrincipal(
            subject=f"token:{record.token[:8]}",
            scopes=record.scopes,
            strategy=AuthStrategy.BEARER,
        )


__all__ = ["AuthResolver"]
