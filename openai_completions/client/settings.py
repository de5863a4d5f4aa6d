"""Per-client transport and retry settings."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import httpx

from ..base.constants import DEFAULT_MAX_READ_TIMEOUT_RETRIES
from ..base.timeouts import get_timeout_config


@dataclass(frozen=True)
class ClientSettings:
    """Tunables shared by every client built from one provider client.

    Attributes:
        connect_timeout: Seconds to establish a connection; ``None`` uses
            ``get_timeout_config()``.
        read_timeout: Maximum idle seconds between two chunks; ``None`` uses
            ``get_timeout_config()``.
        retry_on_read_timeout: Reissue the request when a read times out.
        max_read_timeout_retries: Reissues allowed per logical request.
        on_retry: Called with the client code before each reissue.
    """

    connect_timeout: Optional[float] = None
    read_timeout: Optional[float] = None
    retry_on_read_timeout: bool = False
    max_read_timeout_retries: int = DEFAULT_MAX_READ_TIMEOUT_RETRIES
    on_retry: Optional[Callable[[str], None]] = None

    def timeout(self) -> httpx.Timeout:
        return get_timeout_config().with_overrides(
            connect_timeout_seconds=self.connect_timeout,
            read_timeout_seconds=self.read_timeout,
        ).to_httpx()

    @property
    def max_attempts(self) -> int:
        if not self.retry_on_read_timeout:
            return 1
        return 1 + max(0, self.max_read_timeout_retries)


__all__ = ["ClientSettings"]
