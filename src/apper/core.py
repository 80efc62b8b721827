"""Composition root for the ``apper`` settings.

Purpose
-------
Provide the single entry point that reads the environment and the optional
``local.settings.json`` file and merges them into an immutable
:class:`~apper.domain.settings.Settings` object.

Contents
--------
* :data:`SETTINGS_FILE_NAME` – name of the optional JSON settings file.
* :func:`load_settings` – high-level API returning a :class:`Settings`.
* :func:`load_settings_raw` – lower-level API returning raw data + provenance.

System Role
-----------
Called once per process by the CLI root command. The environment is the
lowest layer; the settings file is registered after it and therefore wins on
key collisions.
"""

from __future__ import annotations

from pathlib import Path
from typing import Final, Mapping

from .adapters.env.default import DefaultEnvLoader
from .adapters.file_loaders.structured import JSONFileLoader, flatten
from .application.merge import merge_layers
from .domain.errors import InvalidFormat, NotFound, SettingsError
from .domain.settings import EMPTY_SETTINGS, KEY_DELIMITER, Settings, SourceInfo
from .observability import log_debug, log_info, make_event

SETTINGS_FILE_NAME: Final[str] = "local.settings.json"


def load_settings(
    *,
    cwd: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Return the merged settings as a :class:`Settings` value object.

    Parameters
    ----------
    cwd:
        Directory searched for :data:`SETTINGS_FILE_NAME`. Defaults to the
        current working directory.
    environ:
        Environment mapping. Defaults to :data:`os.environ`.

    Raises
    ------
    InvalidFormat
        When the settings file exists but is not a valid JSON object.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> _ = (Path(tmp.name) / SETTINGS_FILE_NAME).write_text('{"Values": {"Name": "file"}}', encoding="utf-8")
    >>> settings = load_settings(cwd=tmp.name, environ={"Values__Name": "env", "HOME": "/root"})
    >>> settings["Values:Name"], settings["HOME"]
    ('file', '/root')
    >>> tmp.cleanup()
    """

    data, meta = load_settings_raw(cwd=cwd, environ=environ)
    if not data:
        return EMPTY_SETTINGS
    return Settings(data, meta)  # type: ignore[arg-type]


def load_settings_raw(
    *,
    cwd: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> tuple[dict[str, object], dict[str, dict[str, object]]]:
    """Return the merged settings data and provenance metadata.

    Side Effects
    ------------
    Reads :data:`SETTINGS_FILE_NAME` when present and emits structured log
    events for each layer and for the final merge.
    """

    base_dir = Path(cwd) if cwd is not None else Path.cwd()
    layers: list[tuple[str, Mapping[str, object], str | None]] = []

    env_data = DefaultEnvLoader(environ=environ).load()
    if env_data:
        layers.append(("env", env_data, None))
        log_debug("layer_loaded", **make_event("env", None, {"keys": len(env_data)}))

    settings_path = str(base_dir / SETTINGS_FILE_NAME)
    file_data = _load_file(settings_path)
    if file_data:
        layers.append(("file", file_data, settings_path))
        log_debug("layer_loaded", **make_event("file", settings_path, {"keys": len(file_data)}))

    if not layers:
        log_info("settings_empty", layer="none", path=None)
        return {}, {}

    merged = merge_layers(layers)
    log_info("settings_merged", layer="final", path=None, total_layers=len(layers))
    return merged


def _load_file(path: str) -> dict[str, object]:
    """Return the flattened content of *path*, or ``{}`` when the file is absent."""

    try:
        data = JSONFileLoader().load(path)
    except NotFound:
        log_debug("settings_file_missing", layer="file", path=path)
        return {}
    return flatten(data)


__all__ = [
    "KEY_DELIMITER",
    "SETTINGS_FILE_NAME",
    "InvalidFormat",
    "NotFound",
    "Settings",
    "SettingsError",
    "SourceInfo",
    "load_settings",
    "load_settings_raw",
]
