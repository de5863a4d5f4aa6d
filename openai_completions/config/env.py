"""openai_completions.config.env
=============================

Environment variable mapping for the completion providers.

Purpose
-------
- Single source of truth mapping each provider and config field to its
  environment variable name.
- Small helpers to read those variables consistently.

Failure Modes
-------------
Helpers return ``None`` (or an empty mapping) for unknown providers and unset
variables; they never raise.
"""

from __future__ import annotations

import os
from typing import Dict, Optional

# Provider → config field → environment variable
ENV_MAP: Dict[str, Dict[str, str]] = {
    "openai": {
        "api_key": "OPENAI_API_KEY",  # pragma: allowlist secret - env var name, not a secret
        "base_url": "OPENAI_BASE_URL",
        "organization": "OPENAI_ORGANIZATION",
    },
    "azure": {
        "api_key": "AZURE_OPENAI_API_KEY",  # pragma: allowlist secret - env var name, not a secret
        "base_url": "AZURE_OPENAI_BASE_URL",
        "resource_name": "AZURE_OPENAI_RESOURCE_NAME",
        "deployment_id": "AZURE_OPENAI_DEPLOYMENT_ID",
        "api_version": "AZURE_OPENAI_API_VERSION",
    },
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. Case-insensitive; surrounding spaces are ignored.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def get_env_var_name(provider: str, field: str = "api_key") -> Optional[str]:
    """Return the environment variable backing ``field`` for ``provider``."""
    return ENV_MAP.get((provider or "").lower(), {}).get(field)


def env_values(provider: str) -> Dict[str, str]:
    """Return the set environment values for ``provider`` keyed by field.

    Empty and placeholder values (see ``is_placeholder``) count as unset.
    """
    out: Dict[str, str] = {}
    for field, name in ENV_MAP.get((provider or "").lower(), {}).items():
        val = os.environ.get(name)
        if val and not is_placeholder(val):
            out[field] = val
    return out


__all__ = ["ENV_MAP", "is_placeholder", "get_env_var_name", "env_values"]
