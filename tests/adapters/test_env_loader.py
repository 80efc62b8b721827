"""Environment loader adapter tests covering key normalisation."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from apper.adapters.env.default import DefaultEnvLoader, normalize_env_key


def test_normalize_env_key() -> None:
    assert normalize_env_key("Values__Name") == "Values:Name"
    assert normalize_env_key("A__B__C") == "A:B:C"
    assert normalize_env_key("PLAIN_NAME") == "PLAIN_NAME"


def test_env_loader_captures_everything_as_strings() -> None:
    environ = {
        "Values__Port": "5432",
        "FEATURE_ENABLED": "true",
        "EMPTY": "",
    }
    data = DefaultEnvLoader(environ=environ).load()
    assert data == {"Values:Port": "5432", "FEATURE_ENABLED": "true", "EMPTY": ""}


def test_env_loader_empty_environment() -> None:
    assert DefaultEnvLoader(environ={}).load() == {}


def test_env_loader_defaults_to_process_environment(monkeypatch) -> None:
    monkeypatch.setenv("APPER_TEST__MARKER", "present")
    data = DefaultEnvLoader().load()
    assert data["APPER_TEST:MARKER"] == "present"


NAME_PART = st.text(alphabet="ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789", min_size=1, max_size=6)


@given(st.dictionaries(st.lists(NAME_PART, min_size=1, max_size=3).map(tuple), st.text(max_size=8), max_size=5))
def test_env_loader_maps_sections_to_delimited_keys(entries) -> None:
    """Every ``__``-joined variable should appear under its ``:``-joined key with the raw value."""

    environ = {"__".join(parts): value for parts, value in entries.items()}
    payload = DefaultEnvLoader(environ=environ).load()
    for parts, value in entries.items():
        assert payload[":".join(parts)] == value
    assert len(payload) == len(environ)
