"""Domain-level exception hierarchy.

Purpose
-------
Expose the error taxonomy shared by the settings adapters, the composition
root, and the CLI. The hierarchy lives in the domain layer so adapters and the
CLI may depend on it without depending on each other.

Contents
--------
* :class:`SettingsError` – umbrella base class for all settings-related
  issues.
* :class:`InvalidFormat` – the settings file exists but cannot be parsed into
  a JSON object.
* :class:`NotFound` – an optional settings resource is absent.

System Role
-----------
Adapters raise these exceptions; :func:`apper.core.load_settings` treats
:class:`NotFound` as non-fatal and lets :class:`InvalidFormat` abort start-up.
The CLI renders any :class:`SettingsError` as a one-line message.
"""

from __future__ import annotations


class SettingsError(Exception):
    """Base type for all exceptions emitted while building settings.

    Why
    ----
    Lets the CLI catch a single exception family before any handler runs.
    """


class InvalidFormat(SettingsError):
    """Raised when a settings artifact cannot be parsed into a mapping.

    Typical Sources
    ---------------
    :class:`apper.adapters.file_loaders.structured.JSONFileLoader` when
    ``local.settings.json`` holds malformed JSON, undecodable bytes, or a
    top-level value that is not an object.
    """


class NotFound(SettingsError):
    """Represents a missing-but-optional resource such as the settings file."""
