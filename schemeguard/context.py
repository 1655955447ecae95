"""Cancellation context threaded through every validator call."""

from __future__ import annotations

import threading
import time
from typing import Optional

from schemeguard.errors import ValidationCancelled


class ValidationContext:
    """Cancellation flag plus an optional deadline.

    Validators call ``check()`` on entry. The context never blocks; it only
    reports whether work should stop.

    Args:
        timeout: Seconds from now after which the context counts as expired
    """

    def __init__(self, timeout: Optional[float] = None):
        self._cancelled = threading.Event()
        self._deadline: Optional[float] = None
        if timeout is not None:
            self._deadline = time.monotonic() + timeout

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def check(self) -> None:
        """Raise ValidationCancelled if the context is cancelled or expired."""
        if self._cancelled.is_set():
            raise ValidationCancelled("validation cancelled")
        if self.expired:
            raise ValidationCancelled("validation deadline exceeded")


def check_context(context: Optional[ValidationContext]) -> None:
    """Check ``context`` if given; ``None`` is a context that never cancels."""
    if context is not None:
        context.check()
