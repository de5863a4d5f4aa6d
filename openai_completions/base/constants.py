"""Base shared constants for the completion clients.

Central location to avoid scattering magic strings and default numbers.

Security
--------
This module contains only generic sentinel strings and numeric defaults.
There are no credentials or tokens embedded.

# pragma: allowlist secret
"""
from __future__ import annotations

# Literal body of the SSE frame that terminates a completion stream
STREAM_DONE_SENTINEL = "[DONE]"

# Message carried by the process-wide fallback ErrorDetails
DEFAULT_ERROR_MESSAGE = "Something went wrong. Please try again later."

# Missing credential sentinel
MISSING_API_KEY_ERROR = "missing_api_key"  # pragma: allowlist secret - generic placeholder string, not a real secret

# Request defaults shared by chat and text completion requests
DEFAULT_MAX_TOKENS = 1000
DEFAULT_TEMPERATURE = 0.9
DEFAULT_FREQUENCY_PENALTY = 0.0
DEFAULT_PRESENCE_PENALTY = 0.6

# Read-timeout retry budget used when a client enables automatic retries
DEFAULT_MAX_READ_TIMEOUT_RETRIES = 3

__all__ = [
    "STREAM_DONE_SENTINEL",
    "DEFAULT_ERROR_MESSAGE",
    "MISSING_API_KEY_ERROR",
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_TEMPERATURE",
    "DEFAULT_FREQUENCY_PENALTY",
    "DEFAULT_PRESENCE_PENALTY",
    "DEFAULT_MAX_READ_TIMEOUT_RETRIES",
]
