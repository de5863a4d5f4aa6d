"""Streaming completion response decoder.

``CompletionEventSourceListener`` consumes the frames of one logical
completion request (one HTTP stream, or several when read timeouts are
retried) and drives a :class:`CompletionEventListener`.

State machine
-------------
``STREAMING`` is the only non-terminal state::

    STREAMING --data frame-------------> STREAMING   (on_message)
    STREAMING --[DONE]-----------------> COMPLETE    (on_complete)
    STREAMING --malformed frame--------> ERROR       (on_error)
    STREAMING --non-2xx response-------> ERROR       (on_error)
    STREAMING --read timeout, retry----> STREAMING   (on_retry)
    STREAMING --transport failure------> ERROR       (on_error(DEFAULT_ERROR))
    STREAMING --cancel-----------------> CANCELLED   (no callback)

Every input arriving in a terminal state is ignored, which is what makes
``on_complete`` / ``on_error`` fire at most once and never both.

The accumulated buffer lives as long as the decoder, so fragments received
before a read-timeout retry are kept. The server regenerates a reissued
completion from the start, so after a retry the decoder counts the characters
of the new attempt and drops them until they pass what was already emitted;
only the remainder reaches the buffer and ``on_message``.

Thread-safety: inputs normally arrive from the stream's worker thread only;
``on_cancelled`` may come from any thread. A reentrant lock serializes state
transitions so a callback that cancels its own stream does not deadlock.
"""
from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable, List, Optional, Union

from ..constants import STREAM_DONE_SENTINEL
from ..errors import (
    DEFAULT_ERROR,
    ErrorCode,
    ErrorDetails,
    classify_exception,
    code_for_status,
    resolve_error_details,
)
from ..logging import LogContext, get_logger, log_event, normalized_log_event
from .extractors import CompletionExtractor
from .listener import CompletionEventListener
from .streaming_finalize import log_stream_outcome
from .streaming_metrics import StreamMetrics

Payload = Union[str, bytes]


class StreamState(str, Enum):
    STREAMING = "streaming"
    COMPLETE = "complete"
    ERROR = "error"
    CANCELLED = "cancelled"

    @property
    def terminal(self) -> bool:
        return self is not StreamState.STREAMING


class CompletionEventSourceListener:
    """Decode SSE frame data into listener callbacks.

    Args:
        listener: Caller sink receiving fragments and the terminal signal.
        extractor: Completion-kind strategy (chat or text).
        retry_on_read_timeout: Whether a read timeout should reconnect.
        on_retry: Invoked with ``client_code`` before each reconnect.
        client_code: Request-identifying token (see ``ClientCode``).
        ctx: Log context attached to every event of this stream.
        logger: Defaults to ``openai_completions.stream``.
    """

    def __init__(
        self,
        listener: CompletionEventListener,
        extractor: CompletionExtractor,
        *,
        retry_on_read_timeout: bool = False,
        on_retry: Optional[Callable[[str], None]] = None,
        client_code: str = "",
        ctx: Optional[LogContext] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.listener = listener
        self.extractor = extractor
        self.retry_on_read_timeout = retry_on_read_timeout
        self.on_retry = on_retry
        self.client_code = client_code
        self.ctx = ctx
        self.logger = logger or get_logger("openai_completions.stream")
        self.metrics = StreamMetrics()
        self._buffer: List[str] = []
        # replay window of the current attempt: chars seen vs chars already emitted
        self._attempt_chars = 0
        self._resume_at: Optional[int] = None
        self._state = StreamState.STREAMING
        self._lock = threading.RLock()

    # ---------------------------------------------------------------- state
    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def accumulated(self) -> str:
        return "".join(self._buffer)

    @property
    def done(self) -> bool:
        return self._state.terminal

    # --------------------------------------------------------------- inputs
    def on_open(self, status_code: int) -> None:
        """Record a successfully opened (2xx) stream."""
        log_event(
            self.logger,
            "stream.open",
            self.ctx,
            level=logging.DEBUG,
            status_code=status_code,
            attempt=self.metrics.retries,
        )

    def on_event(self, data: str) -> None:
        """Process the data of one SSE event."""
        with self._lock:
            if self._state.terminal:
                return
            if data.strip() == STREAM_DONE_SENTINEL:
                self._complete()
                return
            try:
                fragment = self.extractor.get_message(data)
            except (ValueError, TypeError) as exc:
                details = resolve_error_details(data, self.extractor.get_error_details)
                self._fail(details, ErrorCode.MALFORMED_PAYLOAD, repr(exc))
                return
            if fragment is None:
                return
            fragment = self._skip_replayed(fragment)
            if fragment is None:
                return
            self._buffer.append(fragment)
            self.metrics.record_fragment()
            self._dispatch("on_message", fragment)

    def on_http_error(self, status_code: int, body: Optional[Payload]) -> None:
        """Handle a non-2xx response received before any frame."""
        with self._lock:
            if self._state.terminal:
                return
            details = resolve_error_details(body, self.extractor.get_error_details)
            self._fail(
                details,
                code_for_status(status_code),
                f"http {status_code}",
                status_code=status_code,
            )

    def on_read_timeout(self, exc: Optional[BaseException] = None) -> bool:
        """Handle a read timeout; return True when the request should be reissued."""
        with self._lock:
            if self._state.terminal:
                return False
            if not self.retry_on_read_timeout:
                self._fail(DEFAULT_ERROR, ErrorCode.TIMEOUT, repr(exc) if exc else None)
                return False
            self.metrics.retries += 1
            emitted_chars = len(self.accumulated)
            self._attempt_chars = 0
            self._resume_at = emitted_chars or None
            normalized_log_event(
                self.logger,
                "stream.retry",
                self.ctx,
                phase="retry",
                attempt=self.metrics.retries,
                error_code=ErrorCode.TIMEOUT.value,
                emitted=self.metrics.emitted > 0,
                level=logging.WARNING,
                client_code=self.client_code,
                accumulated_chars=emitted_chars,
            )
            if self.on_retry is not None:
                try:
                    self.on_retry(self.client_code)
                except Exception:  # noqa: BLE001 - caller hook must not break the stream
                    self.logger.exception("on_retry hook failed for %s", self.client_code)
            return True

    def on_failure(self, exc: BaseException) -> None:
        """Terminal transport failure (connect error, exhausted retries, ...)."""
        with self._lock:
            if self._state.terminal:
                return
            code = classify_exception(exc) if isinstance(exc, Exception) else ErrorCode.UNKNOWN
            self._fail(DEFAULT_ERROR, code, repr(exc))

    def on_cancelled(self, reason: Optional[str] = None) -> None:
        with self._lock:
            if self._state.terminal:
                return
            self._state = StreamState.CANCELLED
            log_stream_outcome(
                logger=self.logger,
                ctx=self.ctx,
                event="stream.cancelled",
                metrics=self.metrics,
                accumulated_chars=len(self.accumulated),
                error_code=ErrorCode.CANCELLED.value,
                error=reason,
            )

    def on_closed(self) -> None:
        """Transport closed; only logs when no terminal state was reached."""
        with self._lock:
            if self._state.terminal:
                return
            log_event(
                self.logger,
                "stream.closed_without_terminal",
                self.ctx,
                level=logging.WARNING,
                emitted_count=self.metrics.emitted,
                accumulated_chars=len(self.accumulated),
            )

    # -------------------------------------------------------------- helpers
    def _skip_replayed(self, fragment: str) -> Optional[str]:
        """Trim the part of ``fragment`` a previous attempt already emitted."""
        if self._resume_at is None:
            return fragment
        start = self._attempt_chars
        self._attempt_chars += len(fragment)
        if self._attempt_chars <= self._resume_at:
            return None
        resume_at, self._resume_at = self._resume_at, None
        return fragment[resume_at - start:]

    def _complete(self) -> None:
        self._state = StreamState.COMPLETE
        text = self.accumulated
        log_stream_outcome(
            logger=self.logger,
            ctx=self.ctx,
            event="stream.complete",
            metrics=self.metrics,
            accumulated_chars=len(text),
        )
        self._dispatch("on_complete", text)

    def _fail(
        self,
        details: ErrorDetails,
        code: ErrorCode,
        error: Optional[str],
        **fields,
    ) -> None:
        self._state = StreamState.ERROR
        normalized_log_event(
            self.logger,
            "stream.error",
            self.ctx,
            phase="finalize",
            attempt=self.metrics.retries,
            error_code=code.value,
            emitted=self.metrics.emitted > 0,
            level=logging.ERROR,
            error=error,
            error_message=details.message,
            provider_error_code=details.code,
            **fields,
        )
        self.metrics.finish()
        self._dispatch("on_error", details)

    def _dispatch(self, name: str, arg) -> None:
        try:
            getattr(self.listener, name)(arg)
        except Exception as exc:  # noqa: BLE001 - listener faults are logged, never propagated
            log_event(
                self.logger,
                "listener.callback_error",
                self.ctx,
                level=logging.ERROR,
                callback=name,
                error=repr(exc),
            )


__all__ = ["StreamState", "CompletionEventSourceListener"]
