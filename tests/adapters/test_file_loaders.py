from __future__ import annotations

import json
from pathlib import Path

import pytest

from apper.adapters.file_loaders.structured import JSONFileLoader, flatten
from apper.domain.errors import InvalidFormat, NotFound


def test_json_loader_valid(tmp_path: Path) -> None:
    path = tmp_path / "local.settings.json"
    path.write_text(json.dumps({"Values": {"Enabled": True}}), encoding="utf-8")
    data = JSONFileLoader().load(str(path))
    assert data["Values"]["Enabled"] is True


def test_json_loader_missing_file(tmp_path: Path) -> None:
    with pytest.raises(NotFound):
        JSONFileLoader().load(str(tmp_path / "local.settings.json"))


def test_json_loader_invalid(tmp_path: Path) -> None:
    path = tmp_path / "local.settings.json"
    path.write_text("{invalid}", encoding="utf-8")
    with pytest.raises(InvalidFormat, match="Invalid JSON"):
        JSONFileLoader().load(str(path))


def test_json_loader_rejects_non_object(tmp_path: Path) -> None:
    path = tmp_path / "local.settings.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    with pytest.raises(InvalidFormat, match="did not produce a JSON object"):
        JSONFileLoader().load(str(path))


def test_json_loader_rejects_undecodable_bytes(tmp_path: Path) -> None:
    path = tmp_path / "local.settings.json"
    path.write_bytes(b'{"key": "\xff\xfe"}')
    with pytest.raises(InvalidFormat):
        JSONFileLoader().load(str(path))


def test_flatten_nested_sections_and_arrays() -> None:
    document = {
        "IsEncrypted": False,
        "Values": {"Name": "demo", "Hosts": ["a", {"Port": 80}]},
        "Empty": {},
        "Nothing": None,
    }
    assert flatten(document) == {
        "IsEncrypted": False,
        "Values:Name": "demo",
        "Values:Hosts:0": "a",
        "Values:Hosts:1:Port": 80,
        "Nothing": None,
    }
