"""Pydantic models for streamed completion frames.

Only the fields the extractors read are declared; everything else in a frame
is ignored. ``choices`` entries are ``Optional`` because some gateways emit a
literal ``null`` choice, which is a valid (empty) fragment and not an error.
"""
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict


class _Frame(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class ChatDelta(_Frame):
    role: Optional[str] = None
    content: Optional[str] = None


class ChatChoice(_Frame):
    index: Optional[int] = None
    delta: Optional[ChatDelta] = None
    finish_reason: Optional[str] = None


class ChatCompletionChunk(_Frame):
    """One ``chat.completion.chunk`` frame."""

    id: Optional[str] = None
    model: Optional[str] = None
    choices: Optional[List[Optional[ChatChoice]]] = None
    error: Optional[Any] = None


class TextChoice(_Frame):
    index: Optional[int] = None
    text: Optional[str] = None
    finish_reason: Optional[str] = None


class TextCompletionChunk(_Frame):
    """One ``text_completion`` frame."""

    id: Optional[str] = None
    model: Optional[str] = None
    choices: Optional[List[Optional[TextChoice]]] = None
    error: Optional[Any] = None


__all__ = [
    "ChatDelta",
    "ChatChoice",
    "ChatCompletionChunk",
    "TextChoice",
    "TextCompletionChunk",
]
