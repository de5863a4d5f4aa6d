"""Resilience helpers (retry policy) for the completion clients."""

from .retry import DEFAULT_RETRY_CONFIG, RetryConfig, retry

__all__ = ["RetryConfig", "DEFAULT_RETRY_CONFIG", "retry"]
