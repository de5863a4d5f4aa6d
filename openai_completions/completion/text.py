"""Text completion request.

``stop`` is optional and left out of the body entirely when unset, since
some deployments reject an explicit ``null``.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from .models import TextCompletionModel
from .request import CompletionRequest, CompletionRequestBuilder


class TextCompletionRequest(CompletionRequest):
    model: str = TextCompletionModel.DAVINCI.code
    prompt: str
    stop: Optional[List[str]] = None

    def _kind_fields(self) -> Dict[str, Any]:
        fields: Dict[str, Any] = {"prompt": self.prompt}
        if self.stop is not None:
            fields["stop"] = list(self.stop)
        return fields

    @classmethod
    def builder(cls, prompt: str) -> "TextCompletionRequestBuilder":
        return TextCompletionRequestBuilder(prompt)


class TextCompletionRequestBuilder(CompletionRequestBuilder[TextCompletionRequest]):
    request_cls = TextCompletionRequest

    def __init__(self, prompt: str) -> None:
        super().__init__(prompt=prompt)

    def set_stop(self, stop: Optional[Sequence[str]]) -> "TextCompletionRequestBuilder":
        return self._set("stop", list(stop) if stop is not None else None)


__all__ = ["TextCompletionRequest", "TextCompletionRequestBuilder"]
