"""Azure OpenAI completion client factory.

Endpoints are deployment scoped::

    {host}/openai/deployments/{deployment_id}/chat/completions?api-version=...
    {host}/openai/deployments/{deployment_id}/completions?api-version=...

``host`` defaults to ``https://{resource_name}.openai.azure.com``. Requests
authenticate with the ``api-key`` header, or with a bearer token when
``active_directory_authentication`` is set.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional
from urllib.parse import urlencode

import httpx

from ..base.constants import MISSING_API_KEY_ERROR
from ..base.streaming import (
    ChatCompletionExtractor,
    CompletionExtractor,
    TextCompletionExtractor,
)
from ..config import get_client_config
from ..config.defaults import (
    AZURE_CHAT_COMPLETIONS_PATH,
    AZURE_DEFAULT_HOST_TEMPLATE,
    AZURE_TEXT_COMPLETIONS_PATH,
)
from .base import CompletionClient
from .client_code import ClientCode
from .settings import ClientSettings


@dataclass(frozen=True)
class AzureClientRequestParams:
    """Identifies one Azure OpenAI deployment."""

    resource_name: str
    deployment_id: str
    api_version: str


class AzureClient:
    """Factory for Azure OpenAI chat and text completion clients.

    Parameters:
        api_key: Overrides ``AZURE_OPENAI_API_KEY``.
        params: Deployment coordinates; missing values are read from
            ``AZURE_OPENAI_RESOURCE_NAME``, ``AZURE_OPENAI_DEPLOYMENT_ID`` and
            ``AZURE_OPENAI_API_VERSION``.
        active_directory_authentication: Send ``Authorization: Bearer`` instead
            of ``api-key``.
        host: Overrides ``AZURE_OPENAI_BASE_URL`` and the resource-name host.
        settings: Timeouts and retry policy for built clients.
        http_client: Optional ``httpx.Client`` shared by built clients.

    Raises:
        ValueError: When the API key or deployment coordinates are missing.
    """

    provider = "azure"

    def __init__(
        self,
        api_key: Optional[str] = None,
        params: Optional[AzureClientRequestParams] = None,
        *,
        active_directory_authentication: bool = False,
        host: Optional[str] = None,
        settings: Optional[ClientSettings] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        overrides = {"api_key": api_key, "base_url": host}
        if params is not None:
            overrides.update(
                resource_name=params.resource_name,
                deployment_id=params.deployment_id,
                api_version=params.api_version,
            )
        cfg = get_client_config(self.provider, overrides)

        self.api_key: Optional[str] = cfg.get("api_key")
        if not self.api_key:
            raise ValueError(f"{MISSING_API_KEY_ERROR}: pass api_key or set AZURE_OPENAI_API_KEY")
        missing = [k for k in ("resource_name", "deployment_id", "api_version") if not cfg.get(k)]
        if missing:
            raise ValueError(f"missing Azure deployment settings: {', '.join(missing)}")

        self.params = AzureClientRequestParams(
            resource_name=cfg["resource_name"],
            deployment_id=cfg["deployment_id"],
            api_version=cfg["api_version"],
        )
        self.active_directory_authentication = active_directory_authentication
        base_url = cfg.get("base_url") or AZURE_DEFAULT_HOST_TEMPLATE.format(
            resource_name=self.params.resource_name
        )
        self.host: str = str(base_url).rstrip("/")
        self.settings = settings or ClientSettings()
        self._http_client = http_client

    def _headers(self) -> Dict[str, str]:
        if self.active_directory_authentication:
            return {"Authorization": f"Bearer {self.api_key}"}
        return {"api-key": str(self.api_key)}

    def _url(self, path_template: str) -> str:
        path = path_template.format(deployment_id=self.params.deployment_id)
        return f"{self.host}{path}?{urlencode({'api-version': self.params.api_version})}"

    def _build(self, path_template: str, extractor: CompletionExtractor, code: ClientCode) -> CompletionClient:
        return CompletionClient(
            self._url(path_template),
            self._headers(),
            extractor,
            code,
            settings=self.settings,
            http_client=self._http_client,
            provider=self.provider,
        )

    def build_chat_completion_client(self) -> CompletionClient:
        return self._build(AZURE_CHAT_COMPLETIONS_PATH, ChatCompletionExtractor(), ClientCode.AZURE_CHAT_COMPLETION)

    def build_text_completion_client(self) -> CompletionClient:
        return self._build(AZURE_TEXT_COMPLETIONS_PATH, TextCompletionExtractor(), ClientCode.AZURE_TEXT_COMPLETION)


__all__ = ["AzureClientRequestParams", "AzureClient"]
