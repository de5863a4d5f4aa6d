"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Implements HTTP status extraction, status-to-code mapping, httpx transport
exception handling and message-based heuristics as a fallback.
"""
from __future__ import annotations

import asyncio
from typing import Optional, Dict

import httpx

from .error_code import ErrorCode
from .completion_error import CompletionError


def _extract_status(exc: Exception) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    # httpx.RequestError.request raises when unset, so only read response here
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}


def code_for_status(status: int) -> ErrorCode:
    """Map an HTTP status code to an :class:`ErrorCode` (``UNKNOWN`` if unmapped)."""
    if status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if 500 <= status < 600:
        return ErrorCode.SERVER_ERROR
    return ErrorCode.UNKNOWN


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:  # pragma: no cover - simple mapping
    """Substring heuristic mapping for exceptions without a status."""
    PATTERN_GROUPS = (
        (ErrorCode.TIMEOUT, ("timeout",)),
        (ErrorCode.TIMEOUT, ("timed out",)),
        (ErrorCode.AUTH, ("unauthorized",)),
        (ErrorCode.AUTH, ("forbidden",)),
        (ErrorCode.NOT_FOUND, ("not found",)),
        (ErrorCode.UNAVAILABLE, ("unavailable",)),
        (ErrorCode.UNAVAILABLE, ("connection refused",)),
        (ErrorCode.SERVER_ERROR, ("server error",)),
    )
    for code, patterns in PATTERN_GROUPS:
        if any(p in msg for p in patterns):
            return code
    if "rate" in msg and "limit" in msg:
        return ErrorCode.RATE_LIMIT
    return None


def classify_exception(exc: Exception) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. CompletionError passthrough.
        2. Timeout exceptions (stdlib, asyncio and httpx).
        3. httpx connection failures (``UNAVAILABLE``).
        4. HTTP status mapping.
        5. Substring heuristics.
        6. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, CompletionError):
        return exc.code
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, httpx.ConnectError):
        return ErrorCode.UNAVAILABLE
    status = _extract_status(exc)
    if status is not None:
        return code_for_status(status)
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


__all__ = [
    "classify_exception",
    "code_for_status",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
