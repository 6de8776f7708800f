# phpdepends/resolver/builtins.py

from typing import FrozenSet, Iterable, Tuple, Union

BUILTIN_SUFFIX = " (builtin)"

# Extensions that cannot be disabled, with the first PHP version where that holds.
# https://www.php.net/manual/en/extensions.membership.php
CORE_EXTENSIONS = {
    "Core": (0, 0),
    "date": (0, 0),
    "hash": (7, 4),
    "json": (8, 0),
    "pcre": (0, 0),
    "random": (8, 2),
    "Reflection": (0, 0),
    "SPL": (0, 0),
    "standard": (0, 0),
}

DEFAULT_PHP_VERSION = "8.3"


def parse_version(version: Union[str, Tuple[int, int], None]) -> Tuple[int, int]:
    if version is None:
        version = DEFAULT_PHP_VERSION
    if isinstance(version, tuple):
        return version[0], version[1]
    parts = str(version).strip().split(".")
    try:
        major = int(parts[0])
        minor = int(parts[1]) if len(parts) > 1 else 0
    except ValueError:
        raise ValueError(f"invalid PHP version: '{version}'") from None
    return major, minor


class BuiltinTable:
    def __init__(self, names: Iterable[str]):
        self.names: FrozenSet[str] = frozenset(names)

    @classmethod
    def for_version(cls, version=None) -> "BuiltinTable":
        ver = parse_version(version)
        return cls(name for name, since in CORE_EXTENSIONS.items() if ver >= since)

    def __contains__(self, name) -> bool:
        return name in self.names

    def annotate(self, name: str) -> str:
        if name in self.names:
            return name + BUILTIN_SUFFIX
        return name
