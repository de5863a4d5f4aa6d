"""Unit coverage for structured logging utilities and helpers."""

from __future__ import annotations

import io
import json
import logging

from openai_completions.base.logging import (
    REQUIRED_NORMALIZED_KEYS,
    LogContext,
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)
from openai_completions.base.log_support import JsonFormatter


def test_get_logger_env_overrides_level(monkeypatch):
    monkeypatch.setenv("COMPLETIONS_LOG_LEVEL", "error")
    logger = get_logger(name="openai_completions.test", level=logging.DEBUG)
    assert not logger.isEnabledFor(logging.INFO)  # nosec B101 - asserts are appropriate in unit tests
    assert logger.isEnabledFor(logging.ERROR)  # nosec B101 - asserts are appropriate in unit tests

    monkeypatch.setenv("COMPLETIONS_LOG_LEVEL", "bogus")
    get_logger(level=logging.DEBUG)
    assert logger.isEnabledFor(logging.DEBUG)  # nosec B101 - unknown names fall back to the requested level


def test_normalized_log_event_includes_required_keys(log_capture):
    logger = get_logger(name="openai_completions.test2")
    ctx = LogContext(provider="azure", model="gpt-4", extra={"client_code": "azure.chat.completion"})
    normalized_log_event(
        logger,
        "stream.complete",
        ctx,
        phase="finalize",
        attempt=1,
        emitted=True,
        tokens={"completion": 2},
        extra_field=123,
    )
    payload = log_capture.events()[-1]
    for k in REQUIRED_NORMALIZED_KEYS:
        if k != "error_code":
            assert k in payload  # nosec B101 - asserts are fine in tests
    assert "error_code" not in payload  # nosec B101 - asserts are fine in tests
    assert payload["client_code"] == "azure.chat.completion"  # nosec B101 - asserts are fine in tests
    assert payload["extra_field"] == 123  # nosec B101 - asserts are fine in tests


def test_log_event_drops_none_unless_asked(log_capture):
    logger = get_logger(name="openai_completions.test3")
    log_event(logger, "a", kept=1, dropped=None)
    log_event(logger, "b", keep_none=True, kept=None)
    first, second = log_capture.events()[-2:]
    assert first == {"event": "a", "kept": 1}  # nosec B101 - asserts are fine in tests
    assert second == {"event": "b", "kept": None}  # nosec B101 - asserts are fine in tests


def test_json_formatter_hoists_json_message() -> None:
    record = logging.LogRecord(
        name="openai_completions.test.json",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg=json.dumps({"provider": "openai", "event": "stream.start"}),
        args=(),
        exc_info=None,
    )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["provider"] == "openai"  # nosec B101 - validates hoisting
    assert payload["event"] == "stream.start"  # nosec B101 - validates hoisting
    assert payload["level"] == "INFO"  # nosec B101 - validates hoisting


def test_configure_logger_adds_rotating_file_handler(tmp_path) -> None:
    target = tmp_path / "logs" / "completions.log"
    logger = configure_logger(level="DEBUG", file_path=str(target), json_mode=False)
    try:
        logger.debug("to file")
        for h in logger.handlers:
            h.flush()
        assert "to file" in target.read_text(encoding="utf-8")  # nosec B101 - file handler attached
    finally:
        configure_logger(level=logging.INFO, file_path=None)
    assert all(not isinstance(h, logging.FileHandler) for h in logger.handlers)  # nosec B101 - handler removed


def test_child_logger_uses_parent_handler_without_duplicates() -> None:
    logger = get_logger(name="openai_completions.test.child", json_mode=False)
    base_logger = logging.getLogger("openai_completions")
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    base_logger.addHandler(handler)
    try:
        logger.info("alpha")
        handler.flush()
    finally:
        base_logger.removeHandler(handler)
    lines = [ln for ln in stream.getvalue().splitlines() if ln]
    assert lines == ["alpha"]  # nosec B101 - ensures single emission
