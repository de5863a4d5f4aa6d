"""Finalize stream helper.

Localizes the terminal log record of a stream so every outcome (complete,
error, cancelled) carries the same normalized keys and metrics.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..logging import LogContext, normalized_log_event
from .streaming_metrics import StreamMetrics


def log_stream_outcome(
    *,
    logger: logging.Logger,
    ctx: Optional[LogContext],
    event: str,
    metrics: StreamMetrics,
    accumulated_chars: int,
    error_code: Optional[str] = None,
    error: Optional[str] = None,
    level: int = logging.INFO,
) -> None:
    """Emit the consolidated terminal event for one stream."""
    metrics.finish()
    normalized_log_event(
        logger,
        event,
        ctx,
        phase="finalize",
        attempt=metrics.retries,
        error_code=error_code,
        emitted=metrics.emitted > 0,
        tokens=None,
        level=level,
        emitted_count=metrics.emitted,
        accumulated_chars=accumulated_chars,
        time_to_first_token_ms=metrics.time_to_first_token_ms,
        total_duration_ms=metrics.total_duration_ms,
        error=error,
    )


__all__ = ["log_stream_outcome"]
