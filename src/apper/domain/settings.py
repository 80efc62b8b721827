"""Domain-level settings value object.

Purpose
-------
Carry the merged key/value settings and their provenance from the composition
root to the CLI. This module contains no I/O.

Contents
--------
* :data:`KEY_DELIMITER` – separator used for flattened section keys.
* :class:`SourceInfo` – typed metadata describing where a key came from.
* :class:`Settings` – read-only ``Mapping`` with provenance lookups.
* :data:`EMPTY_SETTINGS` – canonical empty instance.

System Role
-----------
:func:`apper.core.load_settings` always returns a :class:`Settings` instance.
Keys are flat: nested sections are joined with :data:`KEY_DELIMITER`
(``"Values:Name"``) so environment variables and JSON documents share one key
space. Keys compare case-insensitively, so ``values:name`` and
``Values:Name`` name the same entry.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Final, Iterator, TypedDict

KEY_DELIMITER: Final[str] = ":"


def fold_key(key: str) -> str:
    """Return the case-insensitive form of *key* used for lookups and collisions.

    Examples
    --------
    >>> fold_key("Values:Name") == fold_key("values:NAME")
    True
    """

    return key.casefold()


class SourceInfo(TypedDict):
    """Describe the origin of a resolved settings key.

    Attributes
    ----------
    layer:
        Logical layer name (``"env"`` or ``"file"``).
    path:
        Filesystem path that produced the key, ``None`` for the environment.
    key:
        The flattened key itself.
    """

    layer: str
    path: str | None
    key: str


@dataclass(frozen=True, slots=True)
class Settings(Mapping[str, Any]):
    """Immutable mapping of flattened settings keys to values.

    Parameters
    ----------
    _data:
        Flat mapping produced by :func:`apper.application.merge.merge_layers`.
        Wrapped in a ``mappingproxy`` during initialisation.
    _meta:
        Mapping from keys to :class:`SourceInfo` describing provenance.

    Examples
    --------
    >>> settings = Settings(
    ...     {"Values:Name": "demo", "HOME": "/root"},
    ...     {
    ...         "Values:Name": {"layer": "file", "path": "local.settings.json", "key": "Values:Name"},
    ...         "HOME": {"layer": "env", "path": None, "key": "HOME"},
    ...     },
    ... )
    >>> settings["Values:Name"]
    'demo'
    >>> settings.origin("HOME")["layer"]
    'env'
    >>> settings["values:name"]
    'demo'
    >>> settings.get("missing", "fallback")
    'fallback'
    """

    _data: Mapping[str, Any]
    _meta: Mapping[str, SourceInfo]
    _index: Mapping[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_data", MappingProxyType(dict(self._data)))
        object.__setattr__(self, "_meta", MappingProxyType(dict(self._meta)))
        object.__setattr__(self, "_index", MappingProxyType({fold_key(key): key for key in self._data}))

    def __getitem__(self, key: str) -> Any:
        return self._data[self._index.get(fold_key(key), key)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def origin(self, key: str) -> SourceInfo | None:
        """Return provenance for *key* or ``None`` when no layer produced it."""

        return self._meta.get(self._index.get(fold_key(key), key))

    def as_dict(self) -> dict[str, Any]:
        """Return a mutable shallow copy of the settings."""

        return dict(self._data)


EMPTY_SETTINGS = Settings(MappingProxyType({}), MappingProxyType({}))
"""Canonical empty settings returned when neither layer produced a key."""
