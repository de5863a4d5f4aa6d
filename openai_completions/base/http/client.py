"""Shared HTTP client pool for the completion clients.

Purpose:
    Provide a centralized, thread-safe pool of reusable ``httpx.Client``
    instances so concurrent streams to the same host share connections.
    Timeouts derive from :func:`get_timeout_config`; individual requests may
    still pass their own ``timeout`` to ``client.stream``.

External dependencies:
    - ``httpx`` for the underlying synchronous HTTP client.

Lifecycle & cleanup:
    - Clients are cached by a composite key of ``base_url`` and ``purpose``
      string. Purposes allow distinct pools (e.g., "stream" vs "dashboard").
    - All clients are closed at interpreter exit via ``atexit``. Tests may
      also call :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import logging
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

_CLIENTS: Dict[Tuple[Optional[str], str], httpx.Client] = {}
_LOCK = threading.RLock()

_logger = logging.getLogger("openai_completions.http")


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    The first request for a key creates a client configured with timeouts from
    :func:`get_timeout_config`. Subsequent requests reuse the same instance.

    Parameters:
        base_url: Optional API base URL to associate with the client. ``None``
            groups clients under a shared key and callers pass absolute URLs.
        purpose: A short string discriminating separate pools. Keep stable to
            maximize reuse.

    Thread-safety:
        This function is safe for concurrent use; per-key creation is guarded
        by a re-entrant lock.
    """
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        timeout = get_timeout_config().to_httpx()
        client = httpx.Client(base_url=base_url, timeout=timeout) if base_url else httpx.Client(timeout=timeout)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            try:
                c.close()
            except Exception:  # nosec B110 - best-effort shutdown
                _logger.debug("failed to close pooled client", exc_info=True)
        _CLIENTS.clear()


def _cleanup_at_exit() -> None:
    """atexit hook to ensure clients are closed on interpreter exit."""
    close_all_clients()


atexit.register(_cleanup_at_exit)

__all__ = ["get_httpx_client", "close_all_clients"]
