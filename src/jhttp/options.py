"""Client configuration and the option functions that populate it."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Tuple, Union

import httpx
from websockets.sync.client import connect

from .context import Context
from .exceptions import JHttpValidationError
from .models import Cookie

CookieLike = Union[Cookie, Tuple[str, str], Mapping[str, str]]
Dialer = Callable[..., Any]

TIMEOUT_ENV_VAR = "JHTTP_TIMEOUT"
RETRY_ENV_VAR = "JHTTP_RETRY"


def coerce_cookies(cookies: Iterable[CookieLike] | None) -> list[Cookie]:
    if cookies is None:
        return []
    coerced: list[Cookie] = []
    for cookie in cookies:
        if isinstance(cookie, Cookie):
            coerced.append(cookie)
        elif isinstance(cookie, Mapping):
            coerced.append(Cookie.model_validate(cookie))
        else:
            name, value = cookie
            coerced.append(Cookie(name=name, value=value))
    return coerced


@dataclass
class ClientConfig:
    """Settings shared by every request a client issues.

    Populated once through option functions; not locked, so it must not be
    changed while requests are in flight.
    """

    context: Context | None = None
    http: httpx.Client | None = None
    dialer: Dialer = connect
    headers: dict[str, str] = field(default_factory=dict)
    cookies: list[Cookie] = field(default_factory=list)
    timeout: float | None = None
    retry: int = 0

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ClientConfig":
        env = os.environ if environ is None else environ
        config = cls()
        raw_timeout = env.get(TIMEOUT_ENV_VAR)
        if raw_timeout:
            try:
                config.timeout = float(raw_timeout)
            except ValueError as exc:
                raise JHttpValidationError(f"{TIMEOUT_ENV_VAR} must be a number", cause=exc) from exc
        raw_retry = env.get(RETRY_ENV_VAR)
        if raw_retry:
            try:
                config.retry = int(raw_retry)
            except ValueError as exc:
                raise JHttpValidationError(f"{RETRY_ENV_VAR} must be an integer", cause=exc) from exc
        return config


ClientOption = Callable[[ClientConfig], None]


def with_context(ctx: Context) -> ClientOption:
    def apply(config: ClientConfig) -> None:
        config.context = ctx

    return apply


def add_header(key: str, value: str) -> ClientOption:
    def apply(config: ClientConfig) -> None:
        config.headers[str(key)] = str(value)

    return apply


def set_timeout(timeout: float) -> ClientOption:
    """Per-attempt timeout in seconds, also used as the WebSocket open timeout."""

    def apply(config: ClientConfig) -> None:
        config.timeout = timeout

    return apply


def set_retry(retry: int) -> ClientOption:
    def apply(config: ClientConfig) -> None:
        config.retry = retry

    return apply


def set_cookies(cookies: Iterable[CookieLike]) -> ClientOption:
    def apply(config: ClientConfig) -> None:
        config.cookies = coerce_cookies(cookies)

    return apply


@dataclass(frozen=True)
class Param:
    """One ``key=value`` query fragment, rendered verbatim."""

    key: str
    value: str

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


def add_params(key: str, value: Any) -> Param:
    return Param(str(key), str(value))


def build_url(url: str, params: Iterable[Param]) -> str:
    """Append ``?`` and the params joined with ``&``.

    The ``?`` is appended even when there are no params.
    """
    return url + "?" + "&".join(str(param) for param in params)
