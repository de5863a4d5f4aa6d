"""Unified timeout configuration for the completion clients.

This module centralizes the timeout values used by the HTTP transport so no
call site hard-codes its own numbers.

Key Components
--------------
TimeoutConfig
    Frozen dataclass capturing normalized timeout values in seconds. The read
    timeout is the idle gap tolerated between two chunks of a streaming
    response; exceeding it raises ``httpx.ReadTimeout`` which the client may
    retry.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use and re-reading them only when they change. Supported variables
    (all optional):
        COMPLETIONS_CONNECT_TIMEOUT_SECONDS
        COMPLETIONS_READ_TIMEOUT_SECONDS
        COMPLETIONS_WRITE_TIMEOUT_SECONDS
        COMPLETIONS_POOL_TIMEOUT_SECONDS

Design Constraints
------------------
1. No hard-coded ad-hoc timeouts outside this module.
2. Avoid per-call env parsing (cache until the env overrides change).
"""
from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Optional

import httpx

_ENV_NAMES = (
    "COMPLETIONS_CONNECT_TIMEOUT_SECONDS",
    "COMPLETIONS_READ_TIMEOUT_SECONDS",
    "COMPLETIONS_WRITE_TIMEOUT_SECONDS",
    "COMPLETIONS_POOL_TIMEOUT_SECONDS",
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Timeout for establishing the TCP/TLS connection.
        read_timeout_seconds: Maximum idle time waiting for the next chunk of
            the response body (the streaming read timeout).
        write_timeout_seconds: Timeout for sending the request body.
        pool_timeout_seconds: Timeout for acquiring a pooled connection.
    """

    connect_timeout_seconds: float = 10.0
    read_timeout_seconds: float = 60.0
    write_timeout_seconds: float = 30.0
    pool_timeout_seconds: float = 30.0

    def to_httpx(self) -> httpx.Timeout:
        """Return the equivalent ``httpx.Timeout``."""
        return httpx.Timeout(
            connect=self.connect_timeout_seconds,
            read=self.read_timeout_seconds,
            write=self.write_timeout_seconds,
            pool=self.pool_timeout_seconds,
        )

    def with_overrides(
        self,
        *,
        connect_timeout_seconds: Optional[float] = None,
        read_timeout_seconds: Optional[float] = None,
    ) -> "TimeoutConfig":
        """Return a copy with the given non-``None`` values replaced."""
        return TimeoutConfig(
            connect_timeout_seconds=connect_timeout_seconds or self.connect_timeout_seconds,
            read_timeout_seconds=read_timeout_seconds or self.read_timeout_seconds,
            write_timeout_seconds=self.write_timeout_seconds,
            pool_timeout_seconds=self.pool_timeout_seconds,
        )


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse an environment variable as a positive float with a fallback default."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    cur_guard = "/".join(os.getenv(name, "") for name in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == cur_guard:
        return _CACHED

    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float(_ENV_NAMES[0], defaults.connect_timeout_seconds),
        read_timeout_seconds=_parse_env_float(_ENV_NAMES[1], defaults.read_timeout_seconds),
        write_timeout_seconds=_parse_env_float(_ENV_NAMES[2], defaults.write_timeout_seconds),
        pool_timeout_seconds=_parse_env_float(_ENV_NAMES[3], defaults.pool_timeout_seconds),
    )
    _ENV_GUARD = cur_guard
    return _CACHED


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
]
