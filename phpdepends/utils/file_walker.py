# phpdepends/utils/file_walker.py

import os
from typing import Iterable, Iterator, List, Optional, Sequence, Set

import pathspec


class PathNotFoundError(FileNotFoundError):
    pass


def has_suffix(name: str, suffixes: Optional[Sequence[str]]) -> bool:
    if not suffixes:
        return True
    return any(name.endswith(s) for s in suffixes)


def build_spec(root: str, excludes: Iterable[str], use_gitignore: bool) -> pathspec.PathSpec:
    patterns = list(excludes)
    gitignore_pth = os.path.join(root, ".gitignore")
    if use_gitignore and os.path.isfile(gitignore_pth):
        with open(gitignore_pth, "r", encoding="utf-8") as f:
            patterns.extend(f.read().splitlines())
    return pathspec.PathSpec.from_lines("gitwildmatch", patterns)


def walk_directory(
    root: str,
    current: str,
    suffixes: Optional[Sequence[str]],
    spec: pathspec.PathSpec,
    visited: Set[str],
) -> Iterator[str]:
    """Depth-first walk of current in sorted order, honouring suffixes and spec."""
    real = os.path.realpath(current)
    if real in visited:
        return
    visited.add(real)

    for ent in sorted(os.listdir(current)):
        path = os.path.join(current, ent)
        rel = os.path.relpath(path, root).replace(os.sep, "/")
        if os.path.isdir(path):
            if not spec.match_file(rel + "/"):
                yield from walk_directory(root, path, suffixes, spec, visited)
        elif os.path.isfile(path):
            if not spec.match_file(rel) and has_suffix(ent, suffixes):
                yield path


def collect_files(
    paths: Iterable[str],
    suffixes: Optional[Sequence[str]] = None,
    excludes: Iterable[str] = (),
    use_gitignore: bool = False,
) -> List[str]:
    """
    Expand the given files and directories into the list of files to scan.

    Files named explicitly are always kept; the suffix filter and exclude
    patterns only apply to entries found inside a directory.
    """
    excludes = list(excludes)
    visited: Set[str] = set()
    files: List[str] = []
    for path in paths:
        if os.path.isfile(path):
            files.append(path)
        elif os.path.isdir(path):
            spec = build_spec(path, excludes, use_gitignore)
            files.extend(walk_directory(path, path, suffixes, spec, visited))
        elif not os.path.lexists(path):
            raise PathNotFoundError(f"'{path}' does not exist")
    return files
