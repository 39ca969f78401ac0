"""URL checks and header redaction helpers."""

from __future__ import annotations

from typing import Mapping
from urllib.parse import urlparse

from .exceptions import RequestBuildError


SENSITIVE_HEADERS = {
    "authorization",
    "proxy-authorization",
    "cookie",
    "set-cookie",
    "x-api-key",
}

HTTP_SCHEMES = frozenset({"http", "https"})


def sanitize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Return headers with sensitive values redacted for logging."""
    redacted: dict[str, str] = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS:
            redacted[key] = "[REDACTED]"
        else:
            redacted[key] = value
    return redacted


def validate_url(url: str) -> None:
    """Reject URLs that could never produce a request.

    Only the shape is checked: a supported scheme, a host and no NUL bytes.
    """
    if "\x00" in url:
        raise RequestBuildError(f"Invalid URL: {url!r}")
    try:
        parsed = urlparse(url)
    except ValueError as exc:
        raise RequestBuildError(f"Invalid URL: {url!r}", cause=exc) from exc
    if parsed.scheme.lower() not in HTTP_SCHEMES:
        raise RequestBuildError(f"Unsupported URL scheme: {parsed.scheme or '<none>'}")
    if not parsed.netloc:
        raise RequestBuildError("URL must include a host")

