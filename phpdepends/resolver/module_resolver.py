# phpdepends/resolver/module_resolver.py

import json
import os
import re
import subprocess
from typing import Dict, Optional

DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "data")
DEFAULT_SYMBOLS_PATH = os.path.join(DATA_DIR, "php_symbols.json")

IDENTIFIER_RE = re.compile(r"[A-Za-z_\x80-\U0010ffff][A-Za-z0-9_\x80-\U0010ffff]*")

# Run by `php -r` in from_php(); prints the same layout as data/php_symbols.json.
INTROSPECT_CODE = r"""
$out = ["php_version" => PHP_MAJOR_VERSION . "." . PHP_MINOR_VERSION, "extensions" => []];
foreach (get_loaded_extensions() as $name) {
    $ext = new ReflectionExtension($name);
    $out["extensions"][$ext->getName()] = [
        "functions" => array_keys($ext->getFunctions()),
        "classes" => array_values($ext->getClassNames()),
    ];
}
echo json_encode($out);
"""


class SymbolTableError(ValueError):
    pass


def validate_table(table, source: str) -> Dict:
    if not isinstance(table, dict) or not isinstance(table.get("extensions"), dict):
        raise SymbolTableError(f"{source}: missing 'extensions' mapping")
    for ext, symbols in table["extensions"].items():
        if not isinstance(symbols, dict):
            raise SymbolTableError(f"{source}: extension '{ext}' is not a mapping")
        for key in ("functions", "classes"):
            if not isinstance(symbols.get(key, []), list):
                raise SymbolTableError(f"{source}: '{ext}.{key}' is not a list")
    return table


def load_symbol_table(path: str) -> Dict:
    with open(path, "r", encoding="utf-8") as f:
        try:
            table = json.load(f)
        except json.JSONDecodeError as e:
            raise SymbolTableError(f"{path}: {e}") from e
    return validate_table(table, path)


class ModuleResolver:
    """
    Maps PHP function and class names to the extension defining them.

    PHP resolves both kinds of name case-insensitively, so lookups are keyed
    on the lower-cased name. The table is what `php` itself reports through
    Reflection, either captured offline (data/php_symbols.json) or queried
    live with from_php().
    """

    def __init__(self, table: Dict):
        self.table = {"php_version": table.get("php_version"), "extensions": {}}
        self.functions: Dict[str, str] = {}
        self.classes: Dict[str, str] = {}
        self.add_table(table)

    @classmethod
    def default(cls) -> "ModuleResolver":
        return cls(load_symbol_table(DEFAULT_SYMBOLS_PATH))

    @classmethod
    def from_file(cls, path: str) -> "ModuleResolver":
        return cls(load_symbol_table(path))

    @classmethod
    def from_php(cls, php_binary: str = "php") -> "ModuleResolver":
        try:
            proc = subprocess.run(
                [php_binary, "-r", INTROSPECT_CODE],
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise SymbolTableError(f"cannot run '{php_binary}': {e.strerror}") from e
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or "").strip() or f"exit status {e.returncode}"
            raise SymbolTableError(f"'{php_binary}' failed: {detail}") from e
        try:
            table = json.loads(proc.stdout)
        except json.JSONDecodeError as e:
            raise SymbolTableError(f"'{php_binary}' printed invalid JSON: {e}") from e
        return cls(validate_table(table, php_binary))

    def add_table(self, table: Dict):
        if table.get("php_version"):
            self.table["php_version"] = table["php_version"]
        for ext, symbols in table["extensions"].items():
            self.table["extensions"].setdefault(ext, {"functions": [], "classes": []})
            for fn in symbols.get("functions", []):
                self._place(self.functions, "functions", ext, fn)
            for cls_name in symbols.get("classes", []):
                self._place(self.classes, "classes", ext, cls_name)

    def _place(self, index: Dict[str, str], key: str, ext: str, name: str):
        # A name lives under exactly one extension; the last table to list it wins.
        lowered = name.lower()
        old = index.get(lowered)
        if old != ext:
            if old is not None:
                names = self.table["extensions"][old][key]
                names[:] = [n for n in names if n.lower() != lowered]
            self.table["extensions"][ext][key].append(name)
        index[lowered] = ext

    def merge(self, other: "ModuleResolver") -> "ModuleResolver":
        self.add_table(other.table)
        return self

    @property
    def php_version(self) -> Optional[str]:
        return self.table.get("php_version")

    def _lookup(self, index: Dict[str, str], name: str) -> Optional[str]:
        if not isinstance(name, str) or not IDENTIFIER_RE.fullmatch(name):
            return None
        return index.get(name.lower())

    def resolve_function(self, name: str) -> Optional[str]:
        return self._lookup(self.functions, name)

    def resolve_class(self, name: str) -> Optional[str]:
        return self._lookup(self.classes, name)

    def dump(self, path: str):
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, "w", encoding="utf8") as f:
            json.dump(self.table, f, indent=2, ensure_ascii=False)
