"""Mandatory request header rules for the API namespace."""

from typing import Mapping

from app.errors import MissingHeadersError

MANDATORY_HEADERS: tuple[str, ...] = ("content-type", "accept", "authorization", "x-api-key")


def is_gated_path(path: str, api_prefix: str) -> bool:
    prefix = api_prefix.rstrip("/")
    return path == prefix or path.startswith(f"{prefix}/")


def missing_mandatory_headers(headers: Mapping[str, str]) -> list[str]:
    """Return mandatory header names absent from ``headers``, in declaration order.

    Only presence is checked: an empty value satisfies the rule and is left
    for the authentication strategies to judge.
    """
    return [name for name in MANDATORY_HEADERS if headers.get(name) is None]


def ensure_mandatory_headers(headers: Mapping[str, str]) -> None:
    missing = missing_mandatory_headers(headers)
    if missing:
        raise MissingHeadersError(missing)
