"""Minimal configurable HTTP/WebSocket client."""

from .client import RETRY_DELAY, SUCCESS_STATUS, Client
from .context import Context
from .exceptions import (
    ContextError,
    JHttpError,
    JHttpStatusError,
    JHttpTimeoutError,
    JHttpTransportError,
    JHttpValidationError,
    PayloadEncodingError,
    RequestBuildError,
    ResultDecodeError,
    UnsuccessfulResultError,
)
from .models import Cookie, Result
from .options import (
    ClientConfig,
    ClientOption,
    Param,
    add_header,
    add_params,
    build_url,
    set_cookies,
    set_retry,
    set_timeout,
    with_context,
)
from .payload import FormData, encode_payload

__all__ = [
    "Client",
    "ClientConfig",
    "ClientOption",
    "Context",
    "ContextError",
    "Cookie",
    "FormData",
    "JHttpError",
    "JHttpStatusError",
    "JHttpTimeoutError",
    "JHttpTransportError",
    "JHttpValidationError",
    "Param",
    "PayloadEncodingError",
    "RETRY_DELAY",
    "RequestBuildError",
    "Result",
    "ResultDecodeError",
    "SUCCESS_STATUS",
    "UnsuccessfulResultError",
    "add_header",
    "add_params",
    "build_url",
    "encode_payload",
    "set_cookies",
    "set_retry",
    "set_timeout",
    "with_context",
]
