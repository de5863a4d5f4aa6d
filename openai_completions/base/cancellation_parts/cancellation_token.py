"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class used to stop a running completion
stream via cooperative polling. Callbacks registered with ``on_cancel`` run
once when cancellation is requested; the client uses one to close the live
HTTP response so a blocked read returns promptly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import Lock
from typing import Callable, List, Optional

from .cancelled_error import CancelledError

_logger = logging.getLogger("openai_completions.cancellation")


@dataclass
class _State:
    cancelled: bool = False
    reason: Optional[str] = None


class CancellationToken:
    """A thread-safe cooperative cancellation token."""

    def __init__(self) -> None:
        self._state = _State()
        self._lock = Lock()
        self._callbacks: List[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cooperative cancellation and run registered callbacks once."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            callbacks = list(self._callbacks)
            self._callbacks.clear()
        for callback in callbacks:
            self._run_callback(callback)

    def on_cancel(self, callback: Callable[[], None]) -> None:
        """Register ``callback``; runs immediately if already cancelled."""
        with self._lock:
            if not self._state.cancelled:
                self._callbacks.append(callback)
                return
        self._run_callback(callback)

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    @staticmethod
    def _run_callback(callback: Callable[[], None]) -> None:
        try:
            callback()
        except Exception:  # a failing close must not mask the cancel request
            _logger.debug("cancellation callback failed", exc_info=True)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self._state.cancelled}, reason={self._state.reason!r})"


__all__ = ["CancellationToken"]
