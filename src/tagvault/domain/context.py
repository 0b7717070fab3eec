"""Per-invocation context carrying a deadline and a cancellation flag."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field

from .errors import ContextExpiredError


@dataclass(slots=True, frozen=True)
class InvocationContext:
    """Deadline and cancellation state for one lifecycle invocation.

    The reconciler and the resolver pass the context unmodified to every
    transport call. Transports call :meth:`check` before doing any I/O so that
    an expired or cancelled context fails without side effects.
    """

    deadline: float | None = None
    _cancelled: threading.Event = field(default_factory=threading.Event, repr=False)

    @classmethod
    def background(cls) -> InvocationContext:
        return cls()

    @classmethod
    def with_timeout(cls, seconds: float) -> InvocationContext:
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline, ``None`` when unbounded."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def expired(self) -> bool:
        if self.cancelled:
            return True
        remaining = self.remaining()
        return remaining is not None and remaining <= 0.0

    def check(self) -> None:
        if self.cancelled:
            raise ContextExpiredError("context cancelled")
        remaining = self.remaining()
        if remaining is not None and remaining <= 0.0:
            raise ContextExpiredError("context deadline exceeded")
