"""Application-layer merge policy.

Purpose
-------
Convert a sequence of flat layer payloads into a single settings mapping while
tracking provenance. Free of I/O so it can be exercised without a filesystem.

Contents
    - ``merge_layers``: public entry point driven by a simple loop.
    - ``_set_value``: records the winning layer for each key.

System Role
-----------
Receives ``(layer, mapping, path)`` tuples from :mod:`apper.core`, applies
precedence (``env → file``), and returns the structures consumed by
:class:`apper.domain.settings.Settings`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Iterable

from ..domain.settings import fold_key


def merge_layers(
    layers: Iterable[tuple[str, Mapping[str, object], str | None]],
) -> tuple[dict[str, object], dict[str, dict[str, object]]]:
    """Merge flat settings *layers*; later layers win on key collision.

    Keys collide case-insensitively; the surviving entry keeps the casing of
    the layer that wrote it last.

    Parameters
    ----------
    layers:
        Iterable of ``(layer_name, mapping, source_path)`` tuples ordered from
        lowest to highest precedence.

    Returns
    -------
    tuple[dict[str, object], dict[str, dict[str, object]]]
        ``(merged_data, provenance)`` where ``provenance`` maps each key to
        ``{"layer", "path", "key"}``.

    Examples
    --------
    >>> merged, meta = merge_layers([
    ...     ("env", {"Values:Name": "from-env"}, None),
    ...     ("file", {"values:name": "from-file"}, "local.settings.json"),
    ... ])
    >>> merged, meta["values:name"]["layer"]
    ({'values:name': 'from-file'}, 'file')
    """

    merged: dict[str, object] = {}
    meta: dict[str, dict[str, object]] = {}
    seen: dict[str, str] = {}

    for layer_name, data, path in layers:
        for key, value in data.items():
            _set_value(merged, meta, seen, key, value, layer_name, path)
    return merged, meta


def _set_value(
    target: dict[str, object],
    meta: dict[str, dict[str, object]],
    seen: dict[str, str],
    key: str,
    value: object,
    layer: str,
    path: str | None,
) -> None:
    previous = seen.get(fold_key(key))
    if previous is not None and previous != key:
        target.pop(previous, None)
        meta.pop(previous, None)
    seen[fold_key(key)] = key
    target[key] = value
    meta[key] = {"layer": layer, "path": path, "key": key}
