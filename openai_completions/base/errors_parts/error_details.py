"""
Normalized error representation surfaced to completion listeners.

``ErrorDetails`` is the only failure shape a caller ever observes: HTTP
protocol errors, malformed stream frames and terminal transport failures are
all reduced to one instance before reaching ``on_error``.

External dependencies: Pydantic only. Unknown JSON fields are ignored and
numeric ``code`` values (some gateways send ``"code": 404``) are coerced to
strings.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ..constants import DEFAULT_ERROR_MESSAGE


class ErrorDetails(BaseModel):
    """Error payload decoded from a failed completion request.

    Attributes:
        message: Human-readable description. May be ``None`` when decoded
            from a malformed payload; decoders treat that as unusable.
        type: Provider error category (e.g. ``"invalid_request_error"``).
        param: Request parameter the error refers to, if any.
        code: Provider error code, always carried as a string.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    message: Optional[str] = None
    type: Optional[str] = None
    param: Optional[str] = None
    code: Optional[str] = None

    @field_validator("code", "type", "param", mode="before")
    @classmethod
    def _stringify_scalars(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    def has_message(self) -> bool:
        """Return True when ``message`` is present and not blank."""
        return bool(self.message and self.message.strip())


DEFAULT_ERROR = ErrorDetails(message=DEFAULT_ERROR_MESSAGE)


__all__ = ["ErrorDetails", "DEFAULT_ERROR"]
