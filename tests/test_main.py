# tests/test_main.py

import json
from textwrap import dedent

import networkx as nx
import pytest

from phpdepends.main import main


@pytest.fixture
def project(tmp_path):
    root = tmp_path / "project"
    (root / "lib").mkdir(parents=True)
    (root / "sign.php").write_text(dedent("""\
        <?php
        function sign($key, $data) {
            return hash_hmac("sha256", $data, $key);
        }
        """))
    (root / "lib" / "store.php").write_text(dedent("""\
        <?php
        $store = new ArrayObject([]);
        $store->count();
        """))
    return root


def test_end_to_end(project, capsys):
    assert main([str(project)]) == 0
    out, err = capsys.readouterr()
    assert out == "hash (builtin)\nSPL (builtin)\n"
    assert err == ""


def test_older_php_version(project, capsys):
    assert main(["--php-version=7.3", str(project)]) == 0
    out, _ = capsys.readouterr()
    assert out.splitlines() == ["hash", "SPL (builtin)"]


def test_php_version_from_environment(project, capsys, monkeypatch):
    monkeypatch.setenv("PHPDEPENDS_PHP_VERSION", "7.3")
    assert main([str(project)]) == 0
    out, _ = capsys.readouterr()
    assert out.splitlines() == ["hash", "SPL (builtin)"]


def test_suffix_filter_without_matches(project, capsys):
    assert main(["--suffix=.txt", str(project)]) == 0
    out, err = capsys.readouterr()
    assert out == ""
    assert "phpdepends: no results" in err


def test_suffix_filter_does_not_apply_to_named_files(project, capsys):
    assert main(["--suffix=.txt", str(project / "sign.php")]) == 0
    out, _ = capsys.readouterr()
    assert out.splitlines() == ["hash (builtin)"]


def test_exclude(project, capsys):
    assert main(["--exclude=lib/", str(project)]) == 0
    out, _ = capsys.readouterr()
    assert out.splitlines() == ["hash (builtin)"]


def test_missing_path(project, capsys):
    missing = str(project / "nope.php")
    assert main([str(project), missing]) == 1
    out, err = capsys.readouterr()
    assert out == ""
    assert err.strip() == f"phpdepends: PathNotFoundError: '{missing}' does not exist"


def test_no_arguments(capsys):
    assert main([]) == 1
    _, err = capsys.readouterr()
    assert err.startswith("usage: phpdepends")


def test_unknown_option(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--bogus", "x"])
    assert exc.value.code == 1


def test_bad_graph_suffix(project, capsys):
    assert main(["--graph=deps.dot", str(project)]) == 1
    _, err = capsys.readouterr()
    assert "--graph must end with" in err


def test_parallel_matches_sequential(project, capsys):
    for i in range(8):
        (project / f"extra{i}.php").write_text(f"<?php\n$x{i} = curl_init();\n$d = new DateTime();\n")
    assert main([str(project)]) == 0
    sequential, _ = capsys.readouterr()
    assert main(["--jobs=4", str(project)]) == 0
    parallel, _ = capsys.readouterr()
    assert parallel == sequential
    assert sequential.splitlines() == ["curl", "date (builtin)", "hash (builtin)", "SPL (builtin)"]


def test_report_and_graph(project, tmp_path, capsys):
    report = tmp_path / "report.json"
    graph = tmp_path / "deps.graphml"
    assert main([f"--report={report}", f"--graph={graph}", str(project)]) == 0
    records = json.loads(report.read_text())
    assert {(r["symbol"], r["module"]) for r in records} == {("hash_hmac", "hash"), ("ArrayObject", "SPL")}

    G = nx.read_graphml(str(graph))
    assert G.has_edge(str(project / "sign.php"), "hash")
    assert G.has_edge(str(project / "lib" / "store.php"), "SPL")


def test_verbose(project, capsys):
    assert main(["-v", str(project / "sign.php")]) == 0
    _, err = capsys.readouterr()
    assert "sign.php:3: hash_hmac (function) -> hash" in err


def test_extra_symbols(tmp_path, capsys):
    table = tmp_path / "acme.json"
    table.write_text(json.dumps({"extensions": {"acme": {"functions": ["acme_frob"], "classes": []}}}))
    src = tmp_path / "app.php"
    src.write_text("<?php\nacme_frob(1);\n")
    assert main([f"--symbols={table}", str(src)]) == 0
    out, _ = capsys.readouterr()
    assert out.splitlines() == ["acme"]


def test_dump_symbols(tmp_path, capsys):
    out_file = tmp_path / "symbols.json"
    assert main([f"--dump-symbols={out_file}"]) == 0
    table = json.loads(out_file.read_text())
    assert "strlen" in table["extensions"]["Core"]["functions"]


def test_unusable_php_binary(tmp_path, capsys):
    assert main(["--php=/definitely/not/php", str(tmp_path)]) == 1
    _, err = capsys.readouterr()
    assert err.startswith("phpdepends: SymbolTableError: cannot run")
