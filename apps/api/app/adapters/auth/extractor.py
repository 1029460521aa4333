"""Turn the material gathered by the FastAPI security schemes into typed credentials."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass

from fastapi.security.utils import get_authorization_scheme_param

from app.adapters.auth.base import ApiKeyCredential, BasicCredential, BearerCredential, Credential
from app.errors import MalformedCredentialError
from app.schemas.auth import AuthStrategy

API_KEY_HEADER = "x-api-key"
API_KEY_QUERY_PARAM = "api_key"


@dataclass(frozen=True, slots=True)
class CredentialMaterial:
    """Raw request material, one slot per source.

    ``api_key`` and ``bearer_token`` arrive already parsed by ``APIKeyHeader``,
    ``APIKeyQuery`` and ``HTTPBearer``; ``authorization`` is the raw header
    kept for the Basic scheme.
    """

    api_key: str | None = None
    bearer_token: str | None = None
    authorization: str | None = None


class CredentialExtractor:
    """Extracts the candidate credential for one strategy at a time.

    ``extract`` returns ``None`` when the strategy has no material in the
    request, so the resolver can move on to the next strategy. Material that
    is present but cannot be decoded raises ``MalformedCredentialError``.
    """

    def extract(self, strategy: AuthStrategy, material: CredentialMaterial) -> Credential | None:
        if strategy is AuthStrategy.API_KEY:
            return ApiKeyCredential(value=material.api_key) if material.api_key else None
        if strategy is AuthStrategy.BASIC:
            return self._extract_basic(material.authorization)
        if strategy is AuthStrategy.BEARER:
            return BearerCredential(token=material.bearer_token) if material.bearer_token else None
        raise ValueError(f"Unsupported auth strategy: {strategy!r}")

    @staticmethod
    def _extract_basic(authorization: str | None) -> BasicCredential | None:
        scheme, encoded = get_authorization_scheme_param(authorization)
        encoded = encoded.strip()
        if scheme.lower() != "basic" or not encoded:
            return None

        # Undecodable material is a 400, never a 401.
        try:
            decoded = base64.b64decode(encoded, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise MalformedCredentialError("Malformed Basic authorization header") from exc

        username, separator, password = decoded.partition(":")
        if not separator:
            raise MalformedCredentialError("Malformed Basic authorization header")
        return BasicCredential(username=username, password=password)


__all__ = ["API_KEY_HEADER", "API_KEY_QUERY_PARAM", "CredentialExtractor", "CredentialMaterial"]
