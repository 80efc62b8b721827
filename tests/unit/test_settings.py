from __future__ import annotations

import pytest

from apper.domain.settings import EMPTY_SETTINGS, Settings, SourceInfo


def make_settings() -> Settings:
    data = {"Values:Name": "demo", "Values:Port": 5432, "HOME": "/root"}
    meta = {
        "Values:Name": SourceInfo(layer="file", path="/work/local.settings.json", key="Values:Name"),
        "Values:Port": SourceInfo(layer="file", path="/work/local.settings.json", key="Values:Port"),
        "HOME": SourceInfo(layer="env", path=None, key="HOME"),
    }
    return Settings(data, meta)


def test_mapping_interface() -> None:
    settings = make_settings()
    assert settings["Values:Name"] == "demo"
    assert "HOME" in settings
    assert len(settings) == 3
    assert sorted(settings) == ["HOME", "Values:Name", "Values:Port"]


def test_get_with_default() -> None:
    settings = make_settings()
    assert settings.get("Values:Port") == 5432
    assert settings.get("Values:Missing") is None
    assert settings.get("Values:Missing", "fallback") == "fallback"


def test_settings_are_read_only() -> None:
    settings = make_settings()
    with pytest.raises(TypeError):
        settings._data["HOME"] = "/elsewhere"  # type: ignore[index]


def test_source_mapping_is_copied() -> None:
    data = {"HOME": "/root"}
    settings = Settings(data, {})
    data["HOME"] = "/changed"
    assert settings["HOME"] == "/root"


def test_as_dict_returns_copy() -> None:
    settings = make_settings()
    exported = settings.as_dict()
    exported["HOME"] = "/elsewhere"
    assert settings["HOME"] == "/root"


def test_origin_metadata() -> None:
    settings = make_settings()
    origin = settings.origin("Values:Port")
    assert origin is not None and origin["layer"] == "file"
    assert settings.origin("HOME") == {"layer": "env", "path": None, "key": "HOME"}
    assert settings.origin("missing") is None


def test_empty_settings() -> None:
    assert len(EMPTY_SETTINGS) == 0
    assert EMPTY_SETTINGS.get("anything") is None


def test_lookups_ignore_key_case() -> None:
    settings = make_settings()
    assert settings["values:name"] == "demo"
    assert "home" in settings
    assert settings.get("VALUES:PORT") == 5432
    assert settings.origin("home") == {"layer": "env", "path": None, "key": "HOME"}
    with pytest.raises(KeyError):
        settings["values:missing"]
