"""Helpers that keep credentials and client addresses out of log lines."""

from __future__ import annotations

import hashlib
from typing import Any

_DIGEST_LENGTH = 12
_LOGGABLE_SCHEMES = frozenset({"basic", "bearer"})


def safe_log_identifier(value: Any, *, prefix: str) -> str:
    """Hash ``value`` into a stable ``{prefix}-{digest}`` token; blank values become ``{prefix}-missing``."""
    text = "" if value is None else str(value).strip()
    if not text:
        return f"{prefix}-missing"
    return f"{prefix}-{hashlib.sha256(text.encode('utf-8')).hexdigest()[:_DIGEST_LENGTH]}"


def safe_client_key(route_path: str, client_host: str | None) -> str:
    """Keep the route template readable and hash the client address."""
    return f"{route_path}#{safe_log_identifier(client_host, prefix='client')}"


def authorization_scheme(value: str | None) -> str:
    """Name the Authorization scheme for logs without echoing any part of the credential.

    A header without a recognised scheme word may be a bare token, so it is
    reported as ``other`` rather than quoted.
    """
    text = (value or "").strip()
    if not text:
        return "none"
    scheme = text.partition(" ")[0].lower()
    return scheme if scheme in _LOGGABLE_SCHEMES else "other"
