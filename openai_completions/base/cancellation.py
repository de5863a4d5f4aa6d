"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose cancellation constructs via the canonical
``openai_completions.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` signals a running stream that the caller wants it
  stopped; the stream loop polls it between frames.
- ``CancelledError`` is raised by operations that observe a cancellation request.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
