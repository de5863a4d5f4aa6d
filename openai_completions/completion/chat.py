"""Chat completion request."""
from __future__ import annotations

from typing import Any, Dict, List, Sequence

from pydantic import BaseModel, ConfigDict

from .models import ChatCompletionModel
from .request import CompletionRequest, CompletionRequestBuilder


class ChatCompletionMessage(BaseModel):
    """One chat turn (``role`` is e.g. ``"system"``, ``"user"``, ``"assistant"``)."""

    model_config = ConfigDict(frozen=True)

    role: str
    content: str


class ChatCompletionRequest(CompletionRequest):
    model: str = ChatCompletionModel.GPT_3_5.code
    messages: List[ChatCompletionMessage]

    def _kind_fields(self) -> Dict[str, Any]:
        return {"messages": [m.model_dump() for m in self.messages]}

    @classmethod
    def builder(cls, messages: Sequence[ChatCompletionMessage]) -> "ChatCompletionRequestBuilder":
        return ChatCompletionRequestBuilder(messages)


class ChatCompletionRequestBuilder(CompletionRequestBuilder[ChatCompletionRequest]):
    request_cls = ChatCompletionRequest

    def __init__(self, messages: Sequence[ChatCompletionMessage]) -> None:
        super().__init__(messages=list(messages))


__all__ = ["ChatCompletionMessage", "ChatCompletionRequest", "ChatCompletionRequestBuilder"]
