"""Client façade: OpenAI and Azure factories plus the streaming client."""

from .client_code import ClientCode
from .settings import ClientSettings
from .base import CompletionClient
from .openai import OpenAIClient
from .azure import AzureClient, AzureClientRequestParams

__all__ = [
    "ClientCode",
    "ClientSettings",
    "CompletionClient",
    "OpenAIClient",
    "AzureClient",
    "AzureClientRequestParams",
]
