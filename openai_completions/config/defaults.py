"""openai_completions.config.defaults
==================================

Small, stable default values for the completion clients. They can be
overridden through the config file, environment variables or explicit
arguments, but provide working fallbacks for local development and tests.

Only plain constants live here (no I/O, no package imports).
"""

from __future__ import annotations

# ---- OpenAI ----
OPENAI_DEFAULT_HOST = "https://api.openai.com"
OPENAI_CHAT_COMPLETIONS_PATH = "/v1/chat/completions"
OPENAI_TEXT_COMPLETIONS_PATH = "/v1/completions"

# ---- Azure OpenAI ----
# Formatted with the resource name when no explicit host is configured.
AZURE_DEFAULT_HOST_TEMPLATE = "https://{resource_name}.openai.azure.com"
AZURE_CHAT_COMPLETIONS_PATH = "/openai/deployments/{deployment_id}/chat/completions"
AZURE_TEXT_COMPLETIONS_PATH = "/openai/deployments/{deployment_id}/completions"
AZURE_DEFAULT_API_VERSION = "2023-05-15"

# ---- Config sources ----
CONFIG_FILE_ENV = "COMPLETIONS_CONFIG_FILE"
DOTENV_FILE_ENV = "DOTENV_FILE"

__all__ = [
    "OPENAI_DEFAULT_HOST",
    "OPENAI_CHAT_COMPLETIONS_PATH",
    "OPENAI_TEXT_COMPLETIONS_PATH",
    "AZURE_DEFAULT_HOST_TEMPLATE",
    "AZURE_CHAT_COMPLETIONS_PATH",
    "AZURE_TEXT_COMPLETIONS_PATH",
    "AZURE_DEFAULT_API_VERSION",
    "CONFIG_FILE_ENV",
    "DOTENV_FILE_ENV",
]
