"""Streaming chat and text completion clients for OpenAI and Azure OpenAI.

Typical use::

    from openai_completions import (
        ChatCompletionMessage,
        ChatCompletionRequest,
        CompletionEventListener,
        OpenAIClient,
    )

    class Printer(CompletionEventListener):
        def on_message(self, message):
            print(message, end="")

    request = ChatCompletionRequest.builder(
        [ChatCompletionMessage(role="user", content="Hi")]
    ).build()
    OpenAIClient().build_chat_completion_client().stream(request, Printer()).wait()
"""

from .base import (
    DEFAULT_ERROR,
    CancellationToken,
    CompletionEventListener,
    CompletionStream,
    ErrorDetails,
    StreamState,
)
from .completion import (
    ChatCompletionMessage,
    ChatCompletionModel,
    ChatCompletionRequest,
    CompletionModel,
    CompletionRequest,
    TextCompletionModel,
    TextCompletionRequest,
)
from .client import (
    AzureClient,
    AzureClientRequestParams,
    ClientCode,
    ClientSettings,
    CompletionClient,
    OpenAIClient,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_ERROR",
    "ErrorDetails",
    "CancellationToken",
    "CompletionEventListener",
    "CompletionStream",
    "StreamState",
    "CompletionModel",
    "ChatCompletionModel",
    "TextCompletionModel",
    "CompletionRequest",
    "ChatCompletionMessage",
    "ChatCompletionRequest",
    "TextCompletionRequest",
    "ClientCode",
    "ClientSettings",
    "CompletionClient",
    "OpenAIClient",
    "AzureClient",
    "AzureClientRequestParams",
]
