"""Cancellation error type.

Defines the public ``CancelledError`` used to signal cooperative cancellation
of a running completion stream.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when a stream is cancelled cooperatively.

    Distinguishes caller-initiated cancellation from transport failures so the
    stream loop can stop without reporting an error to the listener.
    """

__all__ = ["CancelledError"]
