"""Handle for one running completion stream.

``CompletionStream`` owns the decoder and cancellation token of a logical
request and, for background streams, the worker thread running it.

- ``start()`` runs the stream on a daemon thread and returns immediately.
- ``run()`` runs it in the calling thread (used by ``execute``).
- ``cancel(reason)`` moves the decoder to ``CANCELLED`` (no listener
  callback) and trips the token, which closes the live response.
"""
from __future__ import annotations

import threading
from typing import Callable, Optional

from ..cancellation import CancellationToken
from .event_source import CompletionEventSourceListener, StreamState


class CompletionStream:
    """Cancellable, awaitable handle around a completion stream."""

    def __init__(
        self,
        decoder: CompletionEventSourceListener,
        runner: Callable[["CompletionStream"], None],
        token: CancellationToken | None = None,
    ) -> None:
        self._decoder = decoder
        self._runner = runner
        self._token = token or CancellationToken()
        self._token.on_cancel(lambda: self._decoder.on_cancelled(self._token.reason))
        self._finished = threading.Event()
        self._thread: Optional[threading.Thread] = None

    # lifecycle -------------------------------------------------------------
    def start(self) -> "CompletionStream":
        """Run the stream on a daemon worker thread."""
        if self._thread is not None:
            raise RuntimeError("stream already started")
        name = f"completion-stream-{self._decoder.client_code or 'anonymous'}"
        self._thread = threading.Thread(target=self.run, name=name, daemon=True)
        self._thread.start()
        return self

    def run(self) -> "CompletionStream":
        """Run the stream to its end in the calling thread."""
        try:
            self._runner(self)
        finally:
            self._finished.set()
        return self

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the stream ends; False if ``timeout`` elapsed first."""
        return self._finished.wait(timeout)

    # API -------------------------------------------------------------------
    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation; safe to call repeatedly or after completion."""
        self._token.cancel(reason)

    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def decoder(self) -> CompletionEventSourceListener:
        return self._decoder

    @property
    def done(self) -> bool:  # noqa: D401 - short property
        """Whether the worker has finished (terminal state or closed transport)."""
        return self._finished.is_set()

    @property
    def state(self) -> StreamState:
        return self._decoder.state

    @property
    def accumulated(self) -> str:
        return self._decoder.accumulated

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CompletionStream(state={self.state.value}, done={self.done})"


__all__ = ["CompletionStream"]
