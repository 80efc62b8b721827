"""Structured logging helpers shared by the settings loader and the CLI.

Purpose
    Keep every log emission predictable and contextual without forcing a
    handler on importers of the package.

Contents
    - ``get_logger``: returns the shared package logger (quiet by default).
    - ``enable_console_logging``: attaches one stderr handler for ``--verbose``.
    - ``log_debug`` / ``log_info`` / ``log_error``: emit structured entries via a
      single private emitter.
    - ``make_event``: convenience builder for structured event payloads.

System Integration
    Adapters and :mod:`apper.core` log through these helpers; the CLI root
    command switches console output on when ``--verbose`` is passed.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Final, Mapping

_LOGGER: Final[logging.Logger] = logging.getLogger("apper")
_LOGGER.addHandler(logging.NullHandler())

_CONSOLE_FORMAT: Final[str] = "%(levelname)s %(name)s: %(message)s %(context)s"


class _ContextFormatter(logging.Formatter):
    """Formatter that tolerates records emitted without a ``context`` extra."""

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "context"):
            record.context = {}
        return super().format(record)


def get_logger() -> logging.Logger:
    """Expose the package logger so applications may attach handlers."""

    return _LOGGER


def enable_console_logging(level: int = logging.DEBUG) -> logging.Handler:
    """Attach a stderr handler to the package logger and return it.

    Why
        ``--verbose`` should surface the structured events without callers
        configuring :mod:`logging` themselves.
    What
        Installs a single :class:`logging.StreamHandler` bound to the current
        ``sys.stderr``. Repeated calls reuse the installed handler and only
        adjust the level.
    Side Effects
        Mutates the level and handler list of the ``apper`` logger.

    Examples
    --------
    >>> handler = enable_console_logging(logging.INFO)
    >>> handler is enable_console_logging(logging.INFO)
    True
    >>> disable_console_logging()
    """

    existing = _console_handler()
    if existing is not None:
        existing.setLevel(level)
        _LOGGER.setLevel(level)
        return existing
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name("apper-console")
    handler.setFormatter(_ContextFormatter(_CONSOLE_FORMAT))
    handler.setLevel(level)
    _LOGGER.addHandler(handler)
    _LOGGER.setLevel(level)
    return handler


def disable_console_logging() -> None:
    """Remove the handler installed by :func:`enable_console_logging`, if any."""

    handler = _console_handler()
    if handler is not None:
        _LOGGER.removeHandler(handler)
        _LOGGER.setLevel(logging.NOTSET)


def log_debug(message: str, **fields: Any) -> None:
    """Emit a structured debug log entry."""

    _emit(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    """Emit a structured info log entry."""

    _emit(logging.INFO, message, fields)


def log_error(message: str, **fields: Any) -> None:
    """Emit a structured error log entry."""

    _emit(logging.ERROR, message, fields)


def make_event(
    layer: str,
    path: str | None,
    payload: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a structured logging payload for settings lifecycle events.

    Examples
    --------
    >>> make_event('env', None, {'keys': 3})
    {'layer': 'env', 'path': None, 'keys': 3}
    """

    event: dict[str, Any] = {"layer": layer, "path": path}
    if payload:
        event |= dict(payload)
    return event


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    """Send a log entry through the shared logger with contextual metadata."""

    _LOGGER.log(level, message, extra={"context": dict(fields)})


def _console_handler() -> logging.Handler | None:
    for handler in _LOGGER.handlers:
        if handler.get_name() == "apper-console":
            return handler
    return None
