"""Completion request models and model catalogs."""

from .models import ChatCompletionModel, CompletionModel, TextCompletionModel
from .request import CompletionRequest, CompletionRequestBuilder
from .chat import ChatCompletionMessage, ChatCompletionRequest, ChatCompletionRequestBuilder
from .text import TextCompletionRequest, TextCompletionRequestBuilder

__all__ = [
    "CompletionModel",
    "ChatCompletionModel",
    "TextCompletionModel",
    "CompletionRequest",
    "CompletionRequestBuilder",
    "ChatCompletionMessage",
    "ChatCompletionRequest",
    "ChatCompletionRequestBuilder",
    "TextCompletionRequest",
    "TextCompletionRequestBuilder",
]
