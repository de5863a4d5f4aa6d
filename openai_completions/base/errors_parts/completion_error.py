"""
Structured completion client exception type.

Wraps transport-level exceptions with a normalized `ErrorCode` so the retry
policy can decide by category and log events carry a stable code. It never
reaches the caller of a stream: the decoder converts it into an
``ErrorDetails`` delivered through the listener.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class CompletionError(Exception):
    """Represents a structured client failure with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        client_code: Client kind where the error originated (e.g.,
            ``"azure.chat.completion"``).
        model: Optional model name associated with the failure.
        retryable: Hint for the retry policy (not authoritative).
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    client_code: str
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining client code, model, code, and message."""
        return f"{self.client_code}:{self.model or '-'} {self.code.value}: {self.message}"


__all__ = ["CompletionError"]
