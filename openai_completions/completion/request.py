"""
Completion request base model and builder.

Purpose
-------
``CompletionRequest`` holds the tunables shared by chat and text completion
requests. Instances are immutable pydantic models; callers normally assemble
them through a builder that accumulates overrides and validates types only
when ``build()`` is called.

Wire format
-----------
``to_payload()`` returns the JSON body: ``model``, ``temperature``,
``stream`` (always ``True``), ``max_tokens``, ``frequency_penalty``,
``presence_penalty``, the kind-specific fields, then ``additional_params``
merged at the top level. Additional params may override any field except
``stream``.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Dict, Generic, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..base.constants import (
    DEFAULT_FREQUENCY_PENALTY,
    DEFAULT_MAX_TOKENS,
    DEFAULT_PRESENCE_PENALTY,
    DEFAULT_TEMPERATURE,
)


class CompletionRequest(BaseModel):
    """Shared completion tunables.

    Attributes:
        model: Wire model code (catalog members are accepted and stored as codes).
        max_tokens: Upper bound of generated tokens.
        temperature: Sampling temperature.
        frequency_penalty: Penalty for frequent tokens.
        presence_penalty: Penalty for tokens already present.
        additional_params: Extra body fields merged into the payload.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    model: str
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    frequency_penalty: float = DEFAULT_FREQUENCY_PENALTY
    presence_penalty: float = DEFAULT_PRESENCE_PENALTY
    additional_params: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("model", mode="before")
    @classmethod
    def _model_code(cls, value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        return value

    @property
    def stream(self) -> bool:
        return True

    def _kind_fields(self) -> Dict[str, Any]:  # pragma: no cover - overridden
        return {}

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": self.model,
            "temperature": self.temperature,
            "stream": self.stream,
            "max_tokens": self.max_tokens,
            "frequency_penalty": self.frequency_penalty,
            "presence_penalty": self.presence_penalty,
        }
        payload.update(self._kind_fields())
        payload.update(self.additional_params)
        payload["stream"] = self.stream
        return payload


_R = TypeVar("_R", bound=CompletionRequest)


class CompletionRequestBuilder(Generic[_R]):
    """Accumulates request overrides; ``build()`` validates and freezes them."""

    request_cls: ClassVar[Type[CompletionRequest]] = CompletionRequest

    def __init__(self, **fields: Any) -> None:
        self._fields: Dict[str, Any] = dict(fields)

    def _set(self, name: str, value: Any):
        self._fields[name] = value
        return self

    def set_model(self, model: Any):
        return self._set("model", model)

    def set_max_tokens(self, max_tokens: int):
        return self._set("max_tokens", max_tokens)

    def set_temperature(self, temperature: float):
        return self._set("temperature", temperature)

    def set_frequency_penalty(self, frequency_penalty: float):
        return self._set("frequency_penalty", frequency_penalty)

    def set_presence_penalty(self, presence_penalty: float):
        return self._set("presence_penalty", presence_penalty)

    def set_additional_params(self, additional_params: Optional[Mapping[str, Any]]):
        return self._set("additional_params", dict(additional_params or {}))

    def build(self) -> _R:
        """Return the immutable request.

        Raises:
            pydantic.ValidationError: When an override has the wrong type.
        """
        return self.request_cls(**self._fields)  # type: ignore[return-value]


__all__ = ["CompletionRequest", "CompletionRequestBuilder"]
