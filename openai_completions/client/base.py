"""Streaming completion client.

``CompletionClient`` binds one endpoint (URL and headers), one completion
kind (extractor) and one ``ClientSettings`` to the pooled ``httpx`` transport.

Flow of one logical request
---------------------------
1. ``stream()`` / ``execute()`` build a decoder and a ``CompletionStream``.
2. Each attempt POSTs ``request.to_payload()`` with
   ``Accept: text/event-stream`` and feeds SSE events to the decoder.
3. A non-2xx response is read in full and handed to ``on_http_error``.
4. ``httpx.ReadTimeout`` becomes a retryable ``CompletionError(TIMEOUT)``;
   the shared ``retry()`` policy reissues the same body while the budget in
   ``ClientSettings`` allows, calling the decoder's ``on_read_timeout`` first.
5. Any other failure, or an exhausted budget, goes to ``on_failure``.

Nothing raised here reaches the caller; the listener is the only channel.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from ..base.cancellation import CancellationToken, CancelledError
from ..base.errors import CompletionError, ErrorCode
from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, log_event, normalized_log_event
from ..base.resilience import RetryConfig, retry
from ..base.streaming import (
    CompletionEventListener,
    CompletionEventSourceListener,
    CompletionExtractor,
    CompletionStream,
    iter_lines,
    iter_sse_events,
)
from ..completion import CompletionRequest
from .client_code import ClientCode
from .settings import ClientSettings

_STREAM_POOL = "completions.stream"


class CompletionClient:
    """Issue streaming completion requests against one endpoint.

    Parameters:
        url: Absolute endpoint URL (query string included).
        headers: Static request headers (authorization etc.).
        extractor: Completion-kind strategy for the response frames.
        client_code: Identifies this client in retries and logs.
        settings: Timeouts and read-timeout retry policy.
        http_client: Optional ``httpx.Client``; defaults to the shared pool.
        provider: Provider slug used in log context.
    """

    def __init__(
        self,
        url: str,
        headers: Mapping[str, str],
        extractor: CompletionExtractor,
        client_code: ClientCode,
        settings: Optional[ClientSettings] = None,
        http_client: Optional[httpx.Client] = None,
        provider: Optional[str] = None,
    ) -> None:
        self.url = url
        self.headers: Dict[str, str] = {**headers, "Accept": "text/event-stream"}
        self.extractor = extractor
        self.client_code = ClientCode(client_code)
        self.settings = settings or ClientSettings()
        self.provider = provider
        self._http_client = http_client
        self._logger = get_logger("openai_completions.client")

    # ------------------------------------------------------------------ API
    def stream(
        self,
        request: CompletionRequest,
        listener: CompletionEventListener,
        token: CancellationToken | None = None,
    ) -> CompletionStream:
        """Start the request on a background thread and return its handle."""
        return self._create_stream(request, listener, token).start()

    def execute(
        self,
        request: CompletionRequest,
        listener: CompletionEventListener,
        token: CancellationToken | None = None,
    ) -> CompletionStream:
        """Run the request in the calling thread; returns the finished handle."""
        return self._create_stream(request, listener, token).run()

    # ------------------------------------------------------------ internals
    def _create_stream(
        self,
        request: CompletionRequest,
        listener: CompletionEventListener,
        token: CancellationToken | None,
    ) -> CompletionStream:
        ctx = LogContext(
            provider=self.provider,
            model=request.model,
            extra={"client_code": self.client_code.value},
        )
        decoder = CompletionEventSourceListener(
            listener,
            self.extractor,
            retry_on_read_timeout=self.settings.retry_on_read_timeout,
            on_retry=self.settings.on_retry,
            client_code=self.client_code.value,
            ctx=ctx,
            logger=get_logger("openai_completions.stream"),
        )
        payload = request.to_payload()
        return CompletionStream(decoder, lambda handle: self._run(handle, payload), token)

    def _run(self, handle: CompletionStream, payload: Dict[str, Any]) -> None:
        decoder = handle.decoder
        self._log_stream_start(decoder.ctx, payload)
        attempt = retry(self._retry_config(decoder))(self._attempt)
        try:
            attempt(handle, payload)
        except CancelledError:
            return
        except Exception as exc:  # noqa: BLE001 - every failure is reported through the listener
            decoder.on_failure(exc.raw if isinstance(exc, CompletionError) and exc.raw else exc)
            return
        decoder.on_closed()

    def _attempt(self, handle: CompletionStream, payload: Dict[str, Any]) -> None:
        handle.token.raise_if_cancelled()
        decoder = handle.decoder
        client = self._http_client or get_httpx_client(None, _STREAM_POOL)
        try:
            with client.stream(
                "POST",
                self.url,
                json=payload,
                headers=self.headers,
                timeout=self.settings.timeout(),
            ) as response:
                handle.token.on_cancel(response.close)
                if not response.is_success:
                    decoder.on_http_error(response.status_code, response.read())
                    return
                decoder.on_open(response.status_code)
                for sse in iter_sse_events(iter_lines(response.iter_text())):
                    if handle.token.cancelled:
                        break
                    decoder.on_event(sse.data)
                    if decoder.done:
                        break
        except httpx.ReadTimeout as exc:
            handle.token.raise_if_cancelled()
            raise CompletionError(
                code=ErrorCode.TIMEOUT,
                message=str(exc) or "read timeout",
                client_code=self.client_code.value,
                model=decoder.ctx.model if decoder.ctx else None,
                retryable=True,
                raw=exc,
            ) from exc
        except httpx.HTTPError:
            handle.token.raise_if_cancelled()
            raise

    def _retry_config(self, decoder: CompletionEventSourceListener) -> RetryConfig:
        def _before_retry(*, attempt: int, error: CompletionError) -> None:
            decoder.on_read_timeout(error.raw or error)

        def _attempt_logger(*, attempt: int, max_attempts: int, delay: float | None, error: CompletionError | None) -> None:
            log_event(
                self._logger,
                "stream.attempt",
                decoder.ctx,
                level=logging.DEBUG,
                attempt=attempt + 1,
                max_attempts=max_attempts,
                will_retry=delay is not None,
                error_code=error.code.value if error else None,
            )

        return RetryConfig(
            max_attempts=self.settings.max_attempts,
            delay_base=0.0,
            retryable_codes=(ErrorCode.TIMEOUT,),
            attempt_logger=_attempt_logger,
            before_retry=_before_retry,
        )

    def _log_stream_start(self, ctx: Optional[LogContext], payload: Dict[str, Any]) -> None:
        normalized_log_event(
            self._logger,
            "stream.start",
            ctx,
            phase="start",
            attempt=None,
            emitted=None,
            tokens=None,
            url=self.url,
            max_tokens=payload.get("max_tokens"),
            temperature=payload.get("temperature"),
            retry_on_read_timeout=self.settings.retry_on_read_timeout,
        )


__all__ = ["CompletionClient"]
