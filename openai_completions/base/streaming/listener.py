"""Caller-facing completion event listener.

Subclass :class:`CompletionEventListener` and override only the callbacks you
need; every method is a no-op by default.

Contract (per logical request, including automatic read-timeout retries):

- ``on_message`` runs once per streamed fragment, in arrival order. Empty
  fragments are delivered too, except for chat frames without any choice.
- ``on_complete`` runs at most once, only after the ``[DONE]`` sentinel, with
  the concatenation of every fragment passed to ``on_message``.
- ``on_error`` runs at most once, only on abnormal termination, and is
  mutually exclusive with ``on_complete``.

Callbacks run on the stream's worker thread. An exception raised by a
callback is logged and does not stop the stream.
"""
from __future__ import annotations

from ..errors import ErrorDetails


class CompletionEventListener:
    """Receives incremental completion output and terminal signals."""

    def on_message(self, message: str) -> None:
        """Handle one streamed fragment."""

    def on_complete(self, message: str) -> None:
        """Handle normal termination with the full accumulated text."""

    def on_error(self, error: ErrorDetails) -> None:
        """Handle abnormal termination."""


__all__ = ["CompletionEventListener"]
