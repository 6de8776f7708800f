# tests/resolver/test_builtins.py

import pytest

from phpdepends.resolver.builtins import BuiltinTable, parse_version


def test_always_present():
    table = BuiltinTable.for_version("5.6")
    for name in ("Core", "date", "pcre", "Reflection", "SPL", "standard"):
        assert name in table
    for name in ("hash", "json", "random"):
        assert name not in table


@pytest.mark.parametrize("version,present,absent", [
    ("7.3", [], ["hash", "json", "random"]),
    ("7.4", ["hash"], ["json", "random"]),
    ("8.0", ["hash", "json"], ["random"]),
    ("8.1.27", ["hash", "json"], ["random"]),
    ("8.2", ["hash", "json", "random"], []),
    ((8, 3), ["hash", "json", "random"], []),
])
def test_version_gating(version, present, absent):
    table = BuiltinTable.for_version(version)
    assert all(name in table for name in present)
    assert not any(name in table for name in absent)


def test_default_version_has_everything():
    assert "random" in BuiltinTable.for_version(None)


def test_annotate():
    table = BuiltinTable.for_version("8.3")
    assert table.annotate("SPL") == "SPL (builtin)"
    assert table.annotate("curl") == "curl"
    # case matters, as in the extension name PHP reports
    assert table.annotate("spl") == "spl"


def test_parse_version():
    assert parse_version("8.10") == (8, 10)
    assert parse_version("8") == (8, 0)
    with pytest.raises(ValueError):
        parse_version("eight")
