"""Streaming response pipeline.

SSE framing (``sse``), frame models (``payloads``), completion-kind
extractors, the decoder (``event_source``) and the stream handle.
"""

from .listener import CompletionEventListener
from .sse import ServerSentEvent, SSEDecoder, iter_lines, iter_sse_events
from .extractors import (
    CompletionExtractor,
    ChatCompletionExtractor,
    TextCompletionExtractor,
    MalformedFrameError,
)
from .event_source import CompletionEventSourceListener, StreamState
from .streaming_metrics import StreamMetrics
from .stream_controller import CompletionStream

__all__ = [
    "CompletionEventListener",
    "ServerSentEvent",
    "SSEDecoder",
    "iter_lines",
    "iter_sse_events",
    "CompletionExtractor",
    "ChatCompletionExtractor",
    "TextCompletionExtractor",
    "MalformedFrameError",
    "CompletionEventSourceListener",
    "StreamState",
    "StreamMetrics",
    "CompletionStream",
]
