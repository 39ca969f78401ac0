"""Client-specific exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Result


class JHttpError(Exception):
    """Base exception for all jhttp failures."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.cause = cause


class JHttpValidationError(JHttpError):
    """Raised when client configuration values are invalid."""


class PayloadEncodingError(JHttpError):
    """Raised when a payload cannot be serialized. Never retried."""


class RequestBuildError(JHttpError):
    """Raised when a request cannot be constructed (bad URL or method). Never retried."""


class JHttpTransportError(JHttpError):
    """Raised for transport-level failures like DNS, TCP and TLS errors."""


class JHttpTimeoutError(JHttpTransportError):
    """Raised when a request exceeds the configured timeout."""


class ContextError(JHttpTransportError):
    """Raised when the configured context was cancelled or its deadline passed."""


class JHttpStatusError(JHttpError):
    """Raised when the response status is anything other than 200."""


class ResultDecodeError(JHttpError):
    """Raised when a response could not be parsed into a Result."""


class UnsuccessfulResultError(JHttpError):
    """Raised when the final attempt returned a Result that reports failure."""

    def __init__(self, message: str, *, result: "Result") -> None:
        super().__init__(message, status_code=result.status_code)
        self.result = result
