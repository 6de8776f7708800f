# tests/extractors/test_php_extractor.py

import json
from textwrap import dedent

import pytest

from phpdepends.extractors.php_extractor import PhpDependencyExtractor
from phpdepends.registry.extractor_registry import get_extractor
from phpdepends.resolver.module_resolver import ModuleResolver


@pytest.fixture(scope="module")
def resolver():
    return ModuleResolver.default()


@pytest.fixture
def extractor(resolver):
    return get_extractor("php", resolver)


def deps_of(extractor, code):
    return extractor.process_source(dedent(code)).to_sorted_list()


def test_registry(resolver):
    assert isinstance(get_extractor("PHP", resolver), PhpDependencyExtractor)
    with pytest.raises(ValueError):
        get_extractor("cobol", resolver)


def test_user_defined_only(extractor):
    code = """\
        <?php
        function greet($name) {
            return "hi " . $name;
        }
        class Greeter {
            public function run() {
                return greet("x");
            }
        }
        $g = new Greeter();
        """
    assert deps_of(extractor, code) == []


def test_builtin_call_counted_once(extractor):
    code = """\
        <?php
        $a = md5("a");
        $b = md5 ("b");
        $c = md5(md5("c"));
        """
    assert deps_of(extractor, code) == ["standard"]
    assert len(extractor.extract_all_dependencies()) == 4


def test_method_and_static_calls_are_ignored(extractor):
    code = """\
        <?php
        $h = $obj->md5("x");
        $k = Hasher::md5("y");
        $n = $obj?->strlen();
        """
    assert deps_of(extractor, code) == []


def test_declaration_is_ignored(extractor):
    code = """\
        <?php
        function md5($value) {
            return $value;
        }
        """
    assert deps_of(extractor, code) == []


def test_functions_and_classes(extractor):
    code = """\
        <?php
        function sign(string $key, DateTime $at): string {
            try {
                $list = new ArrayObject([]);
                return hash_hmac("sha256", json_encode($list), $key);
            } catch (JsonException $e) {
                return "";
            }
        }
        """
    assert deps_of(extractor, code) == ["date", "hash", "json", "SPL"]
    kinds = {(r["symbol"], r["kind"]) for r in extractor.extract_all_dependencies()}
    assert ("ArrayObject", "class") in kinds
    assert ("hash_hmac", "function") in kinds


def test_process_file_and_write(tmp_path, extractor):
    src = tmp_path / "legacy.php"
    # latin-1 comment; not valid utf-8
    src.write_bytes(b"<?php\n// caf\xe9\n$n = strlen('abc');\n")
    deps = extractor.process_file(str(src))
    assert deps.to_sorted_list() == ["Core"]

    out = tmp_path / "out" / "legacy.json"
    extractor.write_to_file(str(out))
    records = json.loads(out.read_text())
    assert records == [
        {"symbol": "strlen", "kind": "function", "module": "Core", "line": 3, "file_path": str(src)},
    ]
