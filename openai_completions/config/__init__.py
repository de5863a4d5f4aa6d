"""Unified configuration layer for the completion clients.

Goals
-----
* Centralize defaults (hosts, API version).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) named by COMPLETIONS_CONFIG_FILE
    3. Environment variables (see ``config.env.ENV_MAP``)
    4. In-code overrides passed to the helper
* Provide a single call site: ``get_client_config(provider)``.

External Config File
--------------------
JSON is tried first, then YAML. One section per provider::

    openai:
      organization: org-123
    azure:
      resource_name: my-resource
      deployment_id: gpt-35
      api_version: "2023-05-15"

A ``.env`` file (path from DOTENV_FILE, default ``.env``) is read once before
the environment is consulted. It only fills variables that are unset or hold
placeholder values.

Public API
----------
* get_client_config(provider: str, overrides: dict | None = None) -> dict
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    AZURE_DEFAULT_API_VERSION,
    CONFIG_FILE_ENV,
    DOTENV_FILE_ENV,
    OPENAI_DEFAULT_HOST,
)
from .env import env_values, is_placeholder

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"base_url": OPENAI_DEFAULT_HOST},
    "azure": {"api_version": AZURE_DEFAULT_API_VERSION},
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Minimal KEY=VALUE loader; comments and blank lines are skipped."""
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv(DOTENV_FILE_ENV, ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE, _FILE_CACHE_PATH
    path = os.getenv(CONFIG_FILE_ENV)
    if _FILE_CACHE is not None and _FILE_CACHE_PATH == path:
        return _FILE_CACHE
    data: Any = {}
    if path and Path(path).is_file():
        text = Path(path).read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except ValueError:
            try:
                data = yaml.safe_load(text) or {}
            except yaml.YAMLError:
                data = {}
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE = data
    _FILE_CACHE_PATH = path
    return data


def reset_config_cache() -> None:
    """Forget the cached config file and ``.env`` state (tests)."""
    global _FILE_CACHE, _FILE_CACHE_PATH, _DOTENV_LOADED
    _FILE_CACHE = None
    _FILE_CACHE_PATH = None
    _DOTENV_LOADED = False


def get_client_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider (``"openai"`` or ``"azure"``).

    Merge order (later wins): defaults -> config file -> env vars -> overrides.
    ``None`` override values are ignored.
    """
    _load_dotenv_once()
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}

    cfg |= DEFAULTS.get(name, {})

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= env_values(name)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    return cfg


__all__ = [
    "get_client_config",
    "reset_config_cache",
    "DEFAULTS",
]
