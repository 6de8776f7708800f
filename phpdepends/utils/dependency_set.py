# phpdepends/utils/dependency_set.py

import re
from typing import Iterable, Iterator, List

_DIGITS = re.compile(r"(\d+)")


def natural_key(name: str):
    """
    Case-insensitive natural sort key: "json2" < "json10", "date" < "SPL".

    re.split with a capture group alternates text and digit runs, so every
    position holds the same type across keys and tuples compare cleanly.
    """
    parts = _DIGITS.split(name)
    key = tuple(int(p) if i % 2 else p.lower() for i, p in enumerate(parts))
    return key, name


class DependencySet:
    def __init__(self, names: Iterable[str] = ()):
        self._names = set(names)

    def add(self, name: str):
        self._names.add(name)

    def merge(self, other: "DependencySet") -> "DependencySet":
        self._names.update(other)
        return self

    def to_sorted_list(self) -> List[str]:
        return sorted(self._names, key=natural_key)

    def __contains__(self, name) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __eq__(self, other) -> bool:
        if isinstance(other, DependencySet):
            return self._names == other._names
        return NotImplemented

    def __repr__(self) -> str:
        return f"DependencySet({self.to_sorted_list()!r})"
