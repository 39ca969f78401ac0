"""Cancellation and deadline context bound to client requests."""

from __future__ import annotations

import threading
import time

from .exceptions import ContextError


class Context:
    """Thread-safe cancellation token with an optional deadline.

    A context is shared, not owned: the caller creates it, hands it to
    ``with_context`` and may cancel it from any thread. Requests check it
    before every attempt and never wait past its deadline.

    Example:
        >>> ctx = Context.with_timeout(2.0)
        >>> client = Client(with_context(ctx))
        >>> # from another thread
        >>> ctx.cancel()
    """

    def __init__(self, *, deadline: float | None = None) -> None:
        self._deadline = deadline
        self._cancelled = False
        self._lock = threading.Lock()

    @classmethod
    def with_timeout(cls, seconds: float) -> "Context":
        return cls(deadline=time.monotonic() + seconds)

    @property
    def deadline(self) -> float | None:
        return self._deadline

    def cancel(self) -> None:
        with self._lock:
            self._cancelled = True

    def cancelled(self) -> bool:
        with self._lock:
            return self._cancelled

    def remaining(self) -> float | None:
        """Seconds left until the deadline, ``None`` when there is no deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def err(self) -> ContextError | None:
        if self.cancelled():
            return ContextError("context canceled")
        remaining = self.remaining()
        if remaining is not None and remaining <= 0:
            return ContextError("context deadline exceeded")
        return None

    def check(self) -> None:
        error = self.err()
        if error is not None:
            raise error
