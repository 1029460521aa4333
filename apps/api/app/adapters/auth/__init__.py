"""Authentication adapters."""

from .base import ApiKeyCredential, BasicCredential, BearerCredential, Credential
from .extractor import API_KEY_HEADER, API_KEY_QUERY_PARAM, CredentialExtractor, CredentialMaterial
from .resolver import AuthResolver
from .store import CredentialStore, TokenRecord, TokenStatus

__all__ = [
    "API_KEY_HEADER",
    "API_KEY_QUERY_PARAM",
    "ApiKeyCredential",
    "AuthResolver",
    "BasicCredential",
    "BearerCredential",
    "Credential",
    "CredentialExtractor",
    "CredentialMaterial",
    "CredentialStore",
    "TokenRecord",
    "TokenStatus",
]
