"""Structured logging for the completion clients.

Every event is one JSON object on the shared ``openai_completions`` logger.
Child loggers (``openai_completions.stream``, ``.client``) carry no handlers
and propagate to it, so each event is emitted once.

``normalized_log_event`` wraps ``log_event`` and injects canonical keys:
``structured`` (bool), ``phase`` (str), ``attempt`` (int|None),
``error_code`` (str|None), ``emitted`` (bool|None), ``tokens`` (mapping|None).
"""
from __future__ import annotations

import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Mapping, Optional

from .log_support import JsonFormatter, LogContext


BASE_LOGGER_NAME = "openai_completions"
LOG_LEVEL_ENV = "COMPLETIONS_LOG_LEVEL"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_FILE_HANDLER_ATTR = "_completions_file_handler"


def _make_formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _parse_level(value: int | str | None, default: int = logging.INFO) -> int:
    """Map a level name (case-insensitive) or number to a logging constant."""
    if value is None or value == "":
        return default
    if isinstance(value, int):
        return value
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else default


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return ``name`` under the shared logger, setting the base up on first use.

    The base level follows ``COMPLETIONS_LOG_LEVEL`` when set, ``level``
    otherwise, and is re-read on every call.
    """
    base = logging.getLogger(BASE_LOGGER_NAME)
    if not base.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_make_formatter(json_mode))
        base.addHandler(handler)
        base.propagate = False
    base.setLevel(_parse_level(os.getenv(LOG_LEVEL_ENV), default=level))
    return base if name == BASE_LOGGER_NAME else logging.getLogger(name)


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared logger at runtime.

    ``level`` replaces the current level when given. ``file_path`` attaches a
    rotating file handler (10MB x 5 backups), replacing any earlier one;
    ``None`` removes it.
    """
    logger = get_logger(json_mode=json_mode)
    if level is not None:
        logger.setLevel(_parse_level(level, default=logger.level))

    for h in [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]:
        logger.removeHandler(h)
        h.close()
    if file_path is None:
        return logger

    abs_path = os.path.abspath(os.path.expanduser(file_path))
    os.makedirs(os.path.dirname(abs_path), exist_ok=True)
    fh = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    setattr(fh, _FILE_HANDLER_ATTR, True)
    fh.setFormatter(_make_formatter(json_mode))
    logger.addHandler(fh)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit ``event`` as one JSON payload merged with ``ctx`` and ``fields``.

    ``None`` values are dropped unless ``keep_none`` is set.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = (
    "structured",
    "phase",
    "attempt",
    "error_code",
    "emitted",
    "tokens",
)


def _coerce_tokens(tokens: Any) -> Any:
    if tokens is None:
        return None
    if isinstance(tokens, Mapping):
        return dict(tokens.items())
    return {"value": repr(tokens)}


def normalized_log_event(  # noqa: PLR0913
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | None = None,
    tokens: Any = None,
    structured: bool = True,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit ``event`` with the canonical keys always present.

    ``error_code`` is omitted when ``None`` ("no error"). ``extra_fields``
    never overwrite a normalized value that is set.
    """
    base_fields: Dict[str, Any] = {
        "structured": structured,
        "phase": phase,
        "attempt": attempt,
        "emitted": emitted,
        "tokens": _coerce_tokens(tokens),
    }
    if error_code is not None:
        base_fields["error_code"] = error_code
    for k, v in extra_fields.items():
        if v is None or base_fields.get(k) is not None:
            continue
        base_fields[k] = v
    log_event(logger, event, ctx, level=level, keep_none=True, **base_fields)


__all__ = [
    "LogContext",
    "BASE_LOGGER_NAME",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
