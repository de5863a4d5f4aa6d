"""Request-identifying tokens for each client kind."""
from __future__ import annotations

from enum import Enum


class ClientCode(str, Enum):
    """Identifies which client issued a request.

    The value is handed to the ``on_retry`` hook and attached to log events.
    """

    CHAT_COMPLETION = "chat.completion"
    TEXT_COMPLETION = "text.completion"
    AZURE_CHAT_COMPLETION = "azure.chat.completion"
    AZURE_TEXT_COMPLETION = "azure.text.completion"


__all__ = ["ClientCode"]
