# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Per-check cancellation context.

A CheckContext is owned by the caller and carries an optional deadline and a
cancel flag. ``run`` consults it before sending, once response headers arrive
and between body chunks, and registers an ``on_cancel`` hook that tears down
the in-flight connection so a blocked read returns at once. A ContextVar-backed
ambient context lets callers scope a deadline around several checks without
threading it through.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, replace
from typing import Any

from ..errors import CheckCancelled, ErrorCategory

logger = logging.getLogger(__name__)


class _CancelState:
    """Cancel flag plus the hooks to fire when it is set."""

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: list[Callable[[], None]] = []

    def is_set(self) -> bool:
        return self._event.is_set()

    def set(self) -> None:
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            # Every hook must get its turn, so one failing hook is logged, not raised.
            try:
                callback()
            except Exception:  # noqa: BLE001
                logger.exception("Cancellation hook %r failed", callback)

    def add(self, callback: Callable[[], None]) -> Callable[[], None]:
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return lambda: self._discard(callback)
        callback()
        return lambda: None

    def _discard(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)


@dataclass(frozen=True)
class CheckContext:
    deadline: float | None = None
    _cancel_state: _CancelState = field(default_factory=_CancelState, repr=False, compare=False)

    @classmethod
    def with_timeout(cls, seconds: float) -> CheckContext:
        """Return a fresh context whose deadline is ``seconds`` from now."""
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        """Mark the context cancelled and run registered hooks on the calling thread."""
        self._cancel_state.set()

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """
        Register ``callback`` to run when the context is cancelled.

        Runs it immediately if the context is already cancelled. Returns a
        function that unregisters the callback.
        """
        return self._cancel_state.add(callback)

    @property
    def cancelled(self) -> bool:
        return self._cancel_state.is_set()

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None when unbounded."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def raise_if_done(self) -> None:
        if self.cancelled:
            raise CheckCancelled("check cancelled before completion")
        if self.expired:
            raise CheckCancelled("check deadline exceeded", ErrorCategory.TIMEOUT)


_current_check_context: ContextVar[CheckContext | None] = ContextVar("httpcheck_check_context", default=None)


def get_check_context() -> CheckContext:
    """Return the current ambient check context."""
    return _current_check_context.get() or CheckContext()


@contextmanager
def check_context(context: CheckContext | None = None, **overrides: Any) -> Iterator[CheckContext]:
    """
    Context manager that installs ``context`` (or layers overrides onto the ambient one).

    None-valued overrides are ignored to preserve outer context values.
    """
    current = context or get_check_context()
    filtered = {key: value for key, value in overrides.items() if value is not None}
    new_context = replace(current, **filtered) if filtered else current
    token = _current_check_context.set(new_context)
    try:
        yield new_context
    finally:
        _current_check_context.reset(token)


__all__ = [
    "CheckContext",
    "check_context",
    "get_check_context",
]
