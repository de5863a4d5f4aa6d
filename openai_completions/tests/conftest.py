"""Pytest configuration for the completion client test suite.

Provides a structured log capture fixture and resets process-wide caches
(pooled HTTP clients, config file cache) around every test so environment
overrides applied with ``monkeypatch`` take effect.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List

import pytest

from openai_completions.base.http import close_all_clients
from openai_completions.base.logging import BASE_LOGGER_NAME, get_logger
from openai_completions.config import reset_config_cache


class _Records(list):
    """Captured ``LogRecord`` list with a helper to decode structured events."""

    def events(self) -> List[Dict[str, Any]]:
        out: List[Dict[str, Any]] = []
        for record in self:
            try:
                payload = json.loads(record.getMessage())
            except ValueError:
                continue
            if isinstance(payload, dict) and "event" in payload:
                out.append(payload)
        return out

    def event_names(self) -> List[str]:
        return [e["event"] for e in self.events()]


@pytest.fixture()
def log_capture() -> Iterator[_Records]:
    """Capture records emitted under the ``openai_completions`` logger.

    The base logger does not propagate to root, so the handler is attached to
    it directly.
    """
    records = _Records()
    handler = logging.Handler()
    handler.emit = lambda record: records.append(record)  # type: ignore
    logger = get_logger(BASE_LOGGER_NAME)
    logger.addHandler(handler)
    try:
        yield records
    finally:
        logger.removeHandler(handler)


@pytest.fixture(autouse=True)
def _isolate_process_state(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Keep tests independent of the developer's environment and of each other."""
    for name in (
        "OPENAI_API_KEY",
        "OPENAI_BASE_URL",
        "OPENAI_ORGANIZATION",
        "AZURE_OPENAI_API_KEY",
        "AZURE_OPENAI_BASE_URL",
        "AZURE_OPENAI_RESOURCE_NAME",
        "AZURE_OPENAI_DEPLOYMENT_ID",
        "AZURE_OPENAI_API_VERSION",
        "COMPLETIONS_CONFIG_FILE",
        "COMPLETIONS_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    close_all_clients()
    yield
    close_all_clients()
    reset_config_cache()
