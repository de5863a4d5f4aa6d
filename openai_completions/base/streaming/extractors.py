"""Completion-kind extractors.

An extractor is a strategy object chosen once per client. It knows how to
pull the incremental text out of one frame of its completion kind and how to
decode that kind's error payload:

``get_message(data) -> Optional[str]``
    Returns the fragment (possibly ``""``) or ``None`` when the frame carries
    no choice at all. Raises ``MalformedFrameError`` (a ``ValueError``) when
    the frame is not a valid chunk or carries a top-level ``error`` object.

``get_error_details(data) -> ErrorDetails``
    Decodes the nested ``{"error": {...}}`` shape; raises on mismatch so the
    shared resolver can fall through to the flat shape and ``DEFAULT_ERROR``.
"""
from __future__ import annotations

from typing import Optional, Protocol, Type, Union

from pydantic import BaseModel, ValidationError

from ..errors import ErrorDetails, decode_nested_error
from .payloads import ChatCompletionChunk, TextCompletionChunk

Payload = Union[str, bytes]


class MalformedFrameError(ValueError):
    """A streamed frame could not be interpreted as a completion chunk."""


class CompletionExtractor(Protocol):  # pragma: no cover - structural protocol
    kind: str

    def get_message(self, data: Payload) -> Optional[str]: ...

    def get_error_details(self, data: Payload) -> ErrorDetails: ...


class _ChunkExtractor:
    kind: str = "completion"
    chunk_model: Type[BaseModel]

    def _parse(self, data: Payload):
        try:
            chunk = self.chunk_model.model_validate_json(data)
        except ValidationError as exc:
            raise MalformedFrameError(f"{self.kind} frame rejected: {exc.error_count()} error(s)") from exc
        if chunk.error is not None:
            raise MalformedFrameError(f"{self.kind} frame carries an error object")
        return chunk

    def get_error_details(self, data: Payload) -> ErrorDetails:
        return decode_nested_error(data)


class ChatCompletionExtractor(_ChunkExtractor):
    """Reads ``choices[0].delta.content``.

    No choices means no fragment (``None``); a present but empty choice or
    delta yields ``""`` so role-only frames still reach ``on_message``.
    """

    kind = "chat"
    chunk_model = ChatCompletionChunk

    def get_message(self, data: Payload) -> Optional[str]:
        chunk: ChatCompletionChunk = self._parse(data)
        if not chunk.choices:
            return None
        choice = chunk.choices[0]
        if choice is None or choice.delta is None:
            return ""
        return choice.delta.content or ""


class TextCompletionExtractor(_ChunkExtractor):
    """Reads ``choices[0].text``, defaulting to ``""``."""

    kind = "text"
    chunk_model = TextCompletionChunk

    def get_message(self, data: Payload) -> Optional[str]:
        chunk: TextCompletionChunk = self._parse(data)
        if not chunk.choices:
            return ""
        choice = chunk.choices[0]
        if choice is None:
            return ""
        return choice.text or ""


__all__ = [
    "CompletionExtractor",
    "ChatCompletionExtractor",
    "TextCompletionExtractor",
    "MalformedFrameError",
]
