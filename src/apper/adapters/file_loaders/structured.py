"""Structured settings file loader.

Purpose
-------
Convert ``local.settings.json`` into a Python mapping the merge layer
understands, keeping error handling and logging in one place.

Contents
--------
* :class:`BaseFileLoader` – shared helpers for reading files and validating
  mapping outputs.
* :class:`JSONFileLoader` – loader for JSON settings documents.
* :func:`flatten` – collapses nested objects and arrays into flat keys.

System Role
-----------
Invoked by :func:`apper.core.load_settings` before the merge policy runs.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

from ...domain.errors import InvalidFormat, NotFound
from ...domain.settings import KEY_DELIMITER
from ...observability import log_debug, log_error


class BaseFileLoader:
    """Common utilities shared by structured file loaders."""

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes, raising :class:`NotFound` when the file is missing."""

        file_path = Path(path)
        if not file_path.is_file():
            raise NotFound(f"Settings file not found: {path}")
        payload = file_path.read_bytes()
        log_debug("settings_file_read", layer="file", path=path, size=len(payload))
        return payload

    @staticmethod
    def _ensure_mapping(data: object, *, path: str) -> Mapping[str, object]:
        """Ensure *data* is a mapping, otherwise raise ``InvalidFormat``.

        Examples
        --------
        >>> BaseFileLoader._ensure_mapping({"key": 1}, path="demo")
        {'key': 1}
        >>> BaseFileLoader._ensure_mapping([1], path="demo")
        Traceback (most recent call last):
        ...
        apper.domain.errors.InvalidFormat: File demo did not produce a JSON object
        """

        if not isinstance(data, Mapping):
            raise InvalidFormat(f"File {path} did not produce a JSON object")
        return data


class JSONFileLoader(BaseFileLoader):
    """Load JSON documents."""

    def load(self, path: str) -> Mapping[str, object]:
        """Return mapping extracted from JSON file at *path*.

        Raises
        ------
        NotFound
            When *path* does not exist.
        InvalidFormat
            When the content is not valid UTF-8 JSON or not an object.
        """

        try:
            data = json.loads(self._read(path))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            log_error("settings_file_invalid", layer="file", path=path, format="json", error=str(exc))
            raise InvalidFormat(f"Invalid JSON in {path}: {exc}") from exc
        result = self._ensure_mapping(data, path=path)
        log_debug("settings_file_loaded", layer="file", path=path, format="json")
        return result


def flatten(data: Mapping[str, object]) -> dict[str, object]:
    """Collapse nested objects and arrays into :data:`KEY_DELIMITER`-joined keys.

    Empty objects and arrays produce no keys; scalars keep their JSON types.

    Examples
    --------
    >>> flatten({"Values": {"Name": "demo", "Hosts": ["a", "b"]}, "Debug": True})
    {'Values:Name': 'demo', 'Values:Hosts:0': 'a', 'Values:Hosts:1': 'b', 'Debug': True}
    """

    flat: dict[str, object] = {}
    _flatten_into(flat, data, [])
    return flat


def _flatten_into(target: dict[str, object], value: object, segments: list[str]) -> None:
    if isinstance(value, Mapping):
        for key, child in value.items():
            _flatten_into(target, child, segments + [str(key)])
    elif isinstance(value, list):
        for index, child in enumerate(value):
            _flatten_into(target, child, segments + [str(index)])
    elif segments:
        target[KEY_DELIMITER.join(segments)] = value
