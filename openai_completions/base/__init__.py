"""
Completion client base package.

Shared, provider-agnostic building blocks:
- Errors: ``ErrorDetails`` / ``DEFAULT_ERROR`` and the ``ErrorCode`` taxonomy
- Streaming: SSE framing, extractors, the response decoder and stream handle
- Infrastructure: timeouts, pooled HTTP clients, retry policy, cancellation
"""

from .errors import (
    DEFAULT_ERROR,
    CompletionError,
    ErrorCode,
    ErrorDetails,
    classify_exception,
    resolve_error_details,
)
from .timeouts import TimeoutConfig, get_timeout_config
from .cancellation import CancellationToken, CancelledError
from .resilience import RetryConfig, retry
from .streaming import (
    ChatCompletionExtractor,
    CompletionEventListener,
    CompletionEventSourceListener,
    CompletionStream,
    StreamState,
    TextCompletionExtractor,
)

__all__ = [
    # Errors
    "ErrorDetails",
    "DEFAULT_ERROR",
    "ErrorCode",
    "CompletionError",
    "classify_exception",
    "resolve_error_details",
    # Infrastructure
    "TimeoutConfig",
    "get_timeout_config",
    "CancellationToken",
    "CancelledError",
    "RetryConfig",
    "retry",
    # Streaming
    "CompletionEventListener",
    "CompletionEventSourceListener",
    "ChatCompletionExtractor",
    "TextCompletionExtractor",
    "CompletionStream",
    "StreamState",
]
