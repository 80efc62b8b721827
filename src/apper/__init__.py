"""Public package surface for the ``apper`` sample CLI.

The command tree lives in :mod:`apper.cli`; this module re-exports the pieces
other code may reuse without going through the command line: the settings
loader, the settings value object, the exit codes, and the logging hooks.
"""

from __future__ import annotations

from .core import SETTINGS_FILE_NAME, load_settings, load_settings_raw
from .domain.errors import InvalidFormat, NotFound, SettingsError
from .domain.settings import Settings, SourceInfo
from .exit_codes import ExitCode
from .observability import enable_console_logging, get_logger

__all__ = [
    "SETTINGS_FILE_NAME",
    "ExitCode",
    "InvalidFormat",
    "NotFound",
    "Settings",
    "SettingsError",
    "SourceInfo",
    "enable_console_logging",
    "get_logger",
    "load_settings",
    "load_settings_raw",
]
