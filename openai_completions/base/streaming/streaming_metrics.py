"""Streaming metrics data structures.

Kept beside the decoder so the event loop stays small and cohesive.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class StreamMetrics:
    """Counters collected for one logical completion request.

    ``retries`` counts read-timeout reconnects; the timings are measured from
    decoder construction with ``time.perf_counter``.
    """

    emitted: int = 0
    retries: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    started_at: float = field(default_factory=time.perf_counter)

    def record_fragment(self) -> None:
        self.emitted += 1
        if self.time_to_first_token_ms is None:
            self.time_to_first_token_ms = self._elapsed_ms()

    def finish(self) -> None:
        if self.total_duration_ms is None:
            self.total_duration_ms = self._elapsed_ms()

    def _elapsed_ms(self) -> float:
        return round((time.perf_counter() - self.started_at) * 1000.0, 3)


__all__ = ["StreamMetrics"]
