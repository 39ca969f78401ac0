"""Synchronous HTTP/WebSocket client with default headers, cookies and retries."""

from __future__ import annotations

import logging
import time
from typing import Any, Iterable

import httpx

from .context import Context
from .exceptions import (
    JHttpError,
    JHttpStatusError,
    JHttpTimeoutError,
    JHttpTransportError,
    RequestBuildError,
    ResultDecodeError,
    UnsuccessfulResultError,
)
from .models import Cookie, Result
from .options import ClientConfig, ClientOption, CookieLike, Dialer, Param, build_url, coerce_cookies
from .payload import Payload, encode_payload
from .security import sanitize_headers, validate_url


logger = logging.getLogger(__name__)

SUCCESS_STATUS = 200
RETRY_DELAY = 0.5

# Failures that consume one attempt instead of aborting the call.
RETRYABLE_ERRORS = (JHttpTransportError, JHttpStatusError, ResultDecodeError)


def default_http_client(**kwargs: Any) -> httpx.Client:
    """Transport used when none is injected. Redirects are followed."""
    kwargs.setdefault("follow_redirects", True)
    return httpx.Client(**kwargs)


def _render_cookies(cookies: Iterable[Cookie]) -> str:
    return "; ".join(cookie.render() for cookie in cookies)


def _attempt_timeout(timeout: float | None, context: Context | None) -> Any:
    remaining = context.remaining() if context is not None else None
    if timeout is None and remaining is None:
        return httpx.USE_CLIENT_DEFAULT
    if timeout is None:
        return remaining
    if remaining is None:
        return timeout
    return min(timeout, remaining)


class Client:
    """Client that applies its configuration to every GET, POST and WebSocket dial.

    Options are applied in order on top of the defaults: a fresh
    ``httpx.Client``, the ``websockets`` dialer, no headers, no cookies and
    no retries. ``http_client`` and ``dialer`` substitute the transports,
    e.g. an ``httpx.Client`` over ``httpx.MockTransport`` in tests.
    """

    def __init__(
        self,
        *options: ClientOption,
        http_client: httpx.Client | None = None,
        dialer: Dialer | None = None,
        config: ClientConfig | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        if http_client is not None:
            self.config.http = http_client
        if dialer is not None:
            self.config.dialer = dialer
        for option in options:
            option(self.config)
        if self.config.http is None:
            self.config.http = default_http_client()
        self._http: httpx.Client = self.config.http

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def add_cookie(self, cookies: Iterable[CookieLike]) -> None:
        """Replace the cookies sent with every HTTP request."""
        self.config.cookies = coerce_cookies(cookies)

    def get_header(self, key: str) -> str:
        return self.config.headers.get(key, "")

    def get(self, url: str, payload: Payload = None, *params: Param) -> Result:
        return self._dispatch(build_url(url, params), "GET", payload)

    def post(self, url: str, payload: Payload = None, *params: Param) -> Result:
        return self._dispatch(build_url(url, params), "POST", payload)

    def websocket(self, url: str) -> tuple[Any, Any]:
        """Dial ``url`` once with the configured headers.

        Cookies and the context are not applied. Returns the connection and
        the handshake response; dial errors propagate unchanged.
        """
        kwargs: dict[str, Any] = {"additional_headers": dict(self.config.headers)}
        if self.config.timeout is not None:
            kwargs["open_timeout"] = self.config.timeout
        logger.debug("Dialing websocket %s headers=%s", url, sanitize_headers(self.config.headers))
        connection = self.config.dialer(url, **kwargs)
        return connection, getattr(connection, "response", None)

    def _dispatch(self, url: str, method: str, payload: Payload) -> Result:
        validate_url(url)

        attempts = max(self.config.retry, 0) + 1
        last_error: JHttpError | None = None
        unsuccessful: Result | None = None
        for attempt in range(1, attempts + 1):
            body, content_type = encode_payload(payload)
            request = self._build_request(method, url, body, content_type)
            logger.debug(
                "Sending request %s %s attempt=%d/%d headers=%s",
                method,
                url,
                attempt,
                attempts,
                sanitize_headers(request.headers),
            )
            try:
                result = self._send(request)
            except RETRYABLE_ERRORS as exc:
                last_error = exc
                unsuccessful = None
            else:
                if result.is_success():
                    return result
                last_error = None
                unsuccessful = result

            if attempt < attempts:
                logger.warning(
                    "Request %s %s failed on attempt %d/%d, retrying in %.1fs: %s",
                    method,
                    url,
                    attempt,
                    attempts,
                    RETRY_DELAY,
                    last_error or "result reported failure",
                )
                time.sleep(RETRY_DELAY)

        if last_error is not None:
            raise last_error
        raise UnsuccessfulResultError("result reported failure", result=unsuccessful)

    def _build_request(self, method: str, url: str, body: bytes, content_type: str | None) -> httpx.Request:
        headers = httpx.Headers()
        if content_type is not None:
            headers["Content-Type"] = content_type
        # Configured headers go on after the form content type and win over it.
        for key, value in self.config.headers.items():
            headers[key] = value
        if self.config.cookies:
            rendered = _render_cookies(self.config.cookies)
            existing = headers.get("Cookie")
            headers["Cookie"] = f"{existing}; {rendered}" if existing else rendered

        # Only configured cookies are sent; drop whatever earlier responses set.
        self._http.cookies.clear()
        try:
            return self._http.build_request(
                method,
                url,
                content=body,
                headers=headers,
                timeout=_attempt_timeout(self.config.timeout, self.config.context),
            )
        except httpx.InvalidURL as exc:
            raise RequestBuildError(f"Invalid URL: {url!r}", cause=exc) from exc

    def _send(self, request: httpx.Request) -> Result:
        context = self.config.context
        if context is not None:
            context.check()

        try:
            response = self._http.send(request)
        except httpx.TimeoutException as exc:
            context_error = context.err() if context is not None else None
            if context_error is not None:
                raise context_error from exc
            raise JHttpTimeoutError("Request timed out", cause=exc) from exc
        except httpx.TransportError as exc:
            raise JHttpTransportError(f"Transport error: {exc}", cause=exc) from exc
        except httpx.DecodingError as exc:
            raise ResultDecodeError("response body could not be decoded", cause=exc) from exc
        except httpx.RequestError as exc:
            raise JHttpTransportError(f"Request failed: {exc}", cause=exc) from exc

        try:
            if response.status_code != SUCCESS_STATUS:
                raise JHttpStatusError(
                    f"status code: {response.status_code}",
                    status_code=response.status_code,
                )
            return Result.from_response(response)
        finally:
            response.close()
