"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `openai_completions.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .completion_error import CompletionError
from .classification import classify_exception, code_for_status
from .error_details import ErrorDetails, DEFAULT_ERROR
from .error_decoding import (
    decode_flat_error,
    decode_nested_error,
    resolve_error_details,
)

__all__ = [
    "ErrorCode",
    "CompletionError",
    "classify_exception",
    "code_for_status",
    "ErrorDetails",
    "DEFAULT_ERROR",
    "decode_flat_error",
    "decode_nested_error",
    "resolve_error_details",
]
