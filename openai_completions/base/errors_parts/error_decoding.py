"""
Error payload decoding with a guaranteed fallback.

Two server shapes are understood:

- nested: ``{"error": {"message": ..., "type": ..., "param": ..., "code": ...}}``
  (OpenAI and most Azure deployments)
- flat: ``{"statusCode": 401, "message": "Token is invalid"}`` (Azure API
  management front doors)

``resolve_error_details`` tries a primary decoder (normally the nested shape
supplied by the completion-kind extractor), then the flat shape, then returns
``DEFAULT_ERROR``. It never raises: decode exceptions are converted to the
fallback so callers only ever observe a well-formed ``ErrorDetails``.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .error_details import DEFAULT_ERROR, ErrorDetails

Payload = Union[str, bytes]
ErrorDecoder = Callable[[Payload], Optional[ErrorDetails]]

_logger = logging.getLogger("openai_completions.errors")


class NestedErrorPayload(BaseModel):
    """Envelope of the nested error shape."""

    model_config = ConfigDict(extra="ignore")

    error: ErrorDetails


class FlatErrorPayload(BaseModel):
    """Top-level ``statusCode``/``message`` error shape."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    status_code: Optional[int] = Field(default=None, alias="statusCode")
    message: str


def decode_nested_error(data: Payload) -> ErrorDetails:
    """Decode the nested ``{"error": {...}}`` shape.

    Raises:
        pydantic.ValidationError: When ``data`` is not JSON or lacks an
            ``error`` object.
    """
    return NestedErrorPayload.model_validate_json(data).error


def decode_flat_error(data: Payload) -> ErrorDetails:
    """Decode the flat ``{"statusCode": n, "message": s}`` shape.

    The status code, when present, is carried over as the ``code`` field.

    Raises:
        pydantic.ValidationError: When ``data`` is not JSON or lacks ``message``.
    """
    payload = FlatErrorPayload.model_validate_json(data)
    code = str(payload.status_code) if payload.status_code is not None else None
    return ErrorDetails(message=payload.message, code=code)


def resolve_error_details(
    data: Optional[Payload],
    primary: ErrorDecoder = decode_nested_error,
) -> ErrorDetails:
    """Decode ``data`` into ``ErrorDetails``, falling back to ``DEFAULT_ERROR``.

    Order: ``primary`` decoder, flat shape, ``DEFAULT_ERROR``. A decoded value
    whose message is missing or blank counts as a failed attempt.
    """
    if not data:
        return DEFAULT_ERROR
    for decoder in (primary, decode_flat_error):
        try:
            details = decoder(data)
        except (ValueError, TypeError) as exc:  # pydantic.ValidationError is a ValueError
            _logger.debug("error payload shape rejected by %s: %s", getattr(decoder, "__name__", decoder), exc)
            continue
        if details is not None and details.has_message():
            return details
    return DEFAULT_ERROR


__all__ = [
    "NestedErrorPayload",
    "FlatErrorPayload",
    "decode_nested_error",
    "decode_flat_error",
    "resolve_error_details",
]
