from __future__ import annotations

from apper.domain.errors import InvalidFormat, NotFound, SettingsError


def test_error_hierarchy() -> None:
    assert issubclass(InvalidFormat, SettingsError)
    assert issubclass(NotFound, SettingsError)
    for exception in (InvalidFormat(""), NotFound("")):
        assert isinstance(exception, SettingsError)
