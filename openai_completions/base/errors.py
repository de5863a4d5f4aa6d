"""Unified client error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``openai_completions.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.completion_error import CompletionError
from .errors_parts.classification import classify_exception, code_for_status
from .errors_parts.error_details import ErrorDetails, DEFAULT_ERROR
from .errors_parts.error_decoding import (
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
