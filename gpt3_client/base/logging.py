"""JSON logging for client operations and streams.

All loggers returned by :func:`get_logger` are children of the shared ``gpt3``
logger, which owns a single stderr handler. The level is taken from the
``GPT3_LOG_LEVEL`` environment variable when set.

``normalized_log_event`` wraps ``log_event`` and guarantees the canonical keys
``phase``, ``emitted``, ``usage`` and (on failure) ``error_code`` so request
and stream events can be filtered uniformly.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Mapping, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "gpt3"
LOG_LEVEL_ENV = "GPT3_LOG_LEVEL"
PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_BASE_LOGGER_ATTR = "_gpt3_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_gpt3_console_handler"
_FILE_HANDLER_ATTR = "_gpt3_file_handler"
_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
FILE_MAX_BYTES = 10 * 1024 * 1024
FILE_BACKUPS = 5


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(PLAIN_FORMAT)


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Level for a name such as ``"debug"`` or ``"WARN"``; ``default`` if unrecognised."""
    name = (value or "").strip().upper()
    if name == "WARN":
        name = "WARNING"
    if name not in _LEVEL_NAMES:
        return default
    return logging.getLevelName(name)


def _console_handlers(logger: logging.Logger) -> list:
    return [h for h in logger.handlers if getattr(h, _CONSOLE_HANDLER_ATTR, False)]


def _new_console() -> logging.StreamHandler:
    console = logging.StreamHandler(sys.stderr)
    setattr(console, _CONSOLE_HANDLER_ATTR, True)
    return console


def _refresh_console(base: logging.Logger, handler: logging.Handler, json_mode: bool) -> None:
    # pytest's capture swaps sys.stderr between tests and closes the old one.
    stream = getattr(handler, "stream", None)
    if stream is None or getattr(stream, "closed", False):
        base.removeHandler(handler)
        with contextlib.suppress(Exception):
            handler.close()
        handler = _new_console()
        base.addHandler(handler)
    elif isinstance(handler, logging.StreamHandler) and stream is not sys.stderr:
        handler.setStream(sys.stderr)
    handler.setLevel(base.level)
    if handler.formatter is None or json_mode != isinstance(handler.formatter, JsonFormatter):
        handler.setFormatter(_formatter(json_mode))


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Return the ``gpt3`` logger, installing its stderr handler on first use.

    After the first call the level is left as :func:`configure_logger` set it;
    only ``GPT3_LOG_LEVEL`` can change it here.
    """
    base = logging.getLogger(BASE_LOGGER_NAME)
    env_level = os.getenv(LOG_LEVEL_ENV)

    if not getattr(base, _BASE_LOGGER_ATTR, False):
        base.handlers[:] = [_new_console()]
        base.propagate = False
        base.setLevel(_parse_level(env_level, default=level))
        setattr(base, _BASE_LOGGER_ATTR, True)
    elif env_level:
        base.setLevel(_parse_level(env_level, default=base.level))

    for console in _console_handlers(base):
        _refresh_console(base, console, json_mode)
    return base


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return ``name`` as a child of the shared ``gpt3`` logger.

    Use dotted names under ``gpt3`` (``"gpt3.client"``, ``"gpt3.cli"``).
    Children hold no handlers of their own and inherit the base level.
    """
    base = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base
    child = logging.getLogger(name)
    for stray in _console_handlers(child):
        child.removeHandler(stray)
        stray.close()
    child.setLevel(logging.NOTSET)
    child.propagate = True
    return child


def _file_handler(path: str, json_mode: bool, level: int) -> RotatingFileHandler:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    handler = RotatingFileHandler(path, maxBytes=FILE_MAX_BYTES, backupCount=FILE_BACKUPS, encoding="utf-8")
    setattr(handler, _FILE_HANDLER_ATTR, True)
    handler.setLevel(level)
    handler.setFormatter(_formatter(json_mode))
    return handler


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Apply the CLI's ``--log-level`` / ``--log-file`` to the ``gpt3`` logger.

    ``level`` may be a number or a level name; ``None`` keeps the current one.
    With ``file_path`` a rotating file handler is attached (an existing one for
    the same path is reused); without it the file handler this function added
    earlier is removed. Handlers added by the application are not touched.
    """
    base = _ensure_base_logger(json_mode=json_mode, level=logging.INFO)
    if isinstance(level, str):
        level = _parse_level(level, default=base.level)
    if level is not None:
        base.setLevel(level)
        for handler in base.handlers:
            handler.setLevel(level)

    target = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    for handler in [h for h in base.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]:
        if target is not None and handler.baseFilename == target:
            handler.setFormatter(_formatter(json_mode))
            handler.setLevel(base.level)
            return base
        base.removeHandler(handler)
        handler.close()
    if target is not None:
        base.addHandler(_file_handler(target, json_mode, base.level))
    return base


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Log ``event`` as one JSON object: the event name, then ``ctx``, then ``fields``.

    ``None`` field values are dropped unless ``keep_none`` is set. Values that
    are not JSON serialisable are rendered with ``str``.
    """
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload.update(ctx.to_dict())
    payload.update((k, v) for k, v in fields.items() if keep_none or v is not None)
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = ("phase", "emitted", "usage")


def _usage_fields(usage: Any) -> Optional[Dict[str, Any]]:
    if usage is None:
        return None
    if hasattr(usage, "model_dump"):
        return usage.model_dump()
    if isinstance(usage, Mapping):
        return dict(usage)
    return {"value": repr(usage)}


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    error_code: str | None = None,
    emitted: int | bool | None = None,
    usage: Any = None,
    **extra_fields: Any,
) -> None:
    """Log a ``request.*`` or ``stream.*`` event with a fixed key set.

    ``phase``, ``emitted`` and ``usage`` are always written, as ``null`` when
    unknown. Passing ``error_code`` marks the event as a failure and raises it
    to WARNING. ``extra_fields`` cannot shadow those keys.
    """
    fields: Dict[str, Any] = {k: v for k, v in extra_fields.items() if v is not None}
    fields.update(phase=phase, emitted=emitted, usage=_usage_fields(usage))
    level = logging.INFO
    if error_code is not None:
        fields["error_code"] = error_code
        level = logging.WARNING
    log_event(logger, event, ctx, level=level, keep_none=True, **fields)


__all__ = [
    "BASE_LOGGER_NAME",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
