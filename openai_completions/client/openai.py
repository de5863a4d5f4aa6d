"""OpenAI completion client factory.

Resolves the API key, organization and host through
``get_client_config("openai")`` (explicit arguments win) and builds
``CompletionClient`` instances for the chat and text completion endpoints.
"""
from __future__ import annotations

from typing import Dict, Optional

import httpx

from ..base.constants import MISSING_API_KEY_ERROR
from ..base.streaming import ChatCompletionExtractor, TextCompletionExtractor
from ..config import get_client_config
from ..config.defaults import OPENAI_CHAT_COMPLETIONS_PATH, OPENAI_TEXT_COMPLETIONS_PATH
from .base import CompletionClient
from .client_code import ClientCode
from .settings import ClientSettings


class OpenAIClient:
    """Factory for OpenAI chat and text completion clients.

    Parameters:
        api_key: Overrides ``OPENAI_API_KEY``.
        organization: Overrides ``OPENAI_ORGANIZATION``; sent as the
            ``OpenAI-Organization`` header when set.
        host: Overrides ``OPENAI_BASE_URL`` (default ``https://api.openai.com``).
        settings: Timeouts and retry policy for built clients.
        http_client: Optional ``httpx.Client`` shared by built clients.

    Raises:
        ValueError: When no API key can be resolved.
    """

    provider = "openai"

    def __init__(
        self,
        api_key: Optional[str] = None,
        organization: Optional[str] = None,
        host: Optional[str] = None,
        settings: Optional[ClientSettings] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        cfg = get_client_config(
            self.provider,
            {"api_key": api_key, "organization": organization, "base_url": host},
        )
        self.api_key: Optional[str] = cfg.get("api_key")
        if not self.api_key:
            raise ValueError(f"{MISSING_API_KEY_ERROR}: pass api_key or set OPENAI_API_KEY")
        self.organization: Optional[str] = cfg.get("organization")
        self.host: str = str(cfg["base_url"]).rstrip("/")
        self.settings = settings or ClientSettings()
        self._http_client = http_client

    def _headers(self) -> Dict[str, str]:
        headers = {"Authorization": f"Bearer {self.api_key}"}
        if self.organization:
            headers["OpenAI-Organization"] = self.organization
        return headers

    def build_chat_completion_client(self) -> CompletionClient:
        return CompletionClient(
            f"{self.host}{OPENAI_CHAT_COMPLETIONS_PATH}",
            self._headers(),
            ChatCompletionExtractor(),
            ClientCode.CHAT_COMPLETION,
            settings=self.settings,
            http_client=self._http_client,
            provider=self.provider,
        )

    def build_text_completion_client(self) -> CompletionClient:
        return CompletionClient(
            f"{self.host}{OPENAI_TEXT_COMPLETIONS_PATH}",
            self._headers(),
            TextCompletionExtractor(),
            ClientCode.TEXT_COMPLETION,
            settings=self.settings,
            http_client=self._http_client,
            provider=self.provider,
        )


__all__ = ["OpenAIClient"]
