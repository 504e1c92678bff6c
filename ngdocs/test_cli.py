"""Tests for validation and the command line front end."""

import json

from ngdocs.cli import build_index, discover_files, main
from ngdocs.models import ExtractorConfig, SourceFile
from ngdocs.validators import compute_coverage, validate_records

MODULE_JS = "/**\n * @ngdoc module\n * @name app\n */\nangular.module('app', []);\n"
SERVICE_JS = """/**
 * @ngdoc service
 * @name greeter
 * @description Says hello.
 */
"""
ORPHAN_JS = "/**\n * @ngdoc filter\n * @name shout\n */\n"


def write_tree(root, files):
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)


def test_discover_files(tmp_path):
    write_tree(
        tmp_path,
        {
            "src/app.js": MODULE_JS,
            "src/guide.ngdoc": "@ngdoc overview\n@name Guide\n",
            "src/style.css": "body {}",
            "node_modules/lib/index.js": SERVICE_JS,
        },
    )
    files = discover_files(tmp_path, ExtractorConfig())
    assert [(f.file_name, f.extension) for f in files] == [
        ("src/app.js", "js"),
        ("src/guide.ngdoc", "ngdoc"),
    ]


def test_build_index_backfills():
    files = [
        SourceFile("src/app.js", "js", MODULE_JS),
        SourceFile("src/svc/greeter.js", "js", SERVICE_JS),
        SourceFile("src/plain.js", "js", "var a = 1;\n"),
    ]
    index = build_index(files, ExtractorConfig())
    assert "src/plain.js" not in index
    assert index["src/svc/greeter.js"][0].module == "app"


def test_validate_records():
    files = [
        SourceFile("src/app.js", "js", MODULE_JS),
        SourceFile("src/greeter.js", "js", SERVICE_JS),
        SourceFile("lib/shout.js", "js", ORPHAN_JS),
    ]
    index = build_index(files, ExtractorConfig())

    result = validate_records(index)
    assert result.errors == []
    assert len(result.warnings) == 1
    assert "lib/shout.js: shout" in result.warnings[0]

    result = validate_records(index, strict=True)
    assert len(result.errors) == 1


def test_compute_coverage():
    files = [
        SourceFile("src/app.js", "js", MODULE_JS),
        SourceFile("src/greeter.js", "js", SERVICE_JS),
        SourceFile("lib/shout.js", "js", ORPHAN_JS),
    ]
    coverage = compute_coverage(build_index(files, ExtractorConfig()))
    assert coverage == {"records": 2, "resolved": 1, "module": 0.5}


def test_compute_coverage_empty():
    assert compute_coverage(build_index([], ExtractorConfig()))["module"] == 1.0


def test_main_writes_json(tmp_path):
    write_tree(tmp_path / "project", {"src/app.js": MODULE_JS, "src/greeter.js": SERVICE_JS})
    out = tmp_path / "docs.json"

    assert main([str(tmp_path / "project"), "-o", str(out)]) == 0

    data = json.loads(out.read_text())
    assert list(data) == ["src/app.js", "src/greeter.js"]
    greeter = data["src/greeter.js"][0]
    assert greeter["module"] == "app"
    assert greeter["parentDoc"] == {"module": "app", "name": None}
    assert greeter["description"] == ["Says hello."]


def test_main_strict_fails(tmp_path):
    write_tree(tmp_path, {"lib/shout.js": ORPHAN_JS})
    assert main([str(tmp_path), "--strict"]) == 1
    assert main([str(tmp_path)]) == 0


def test_main_missing_root(tmp_path):
    assert main([str(tmp_path / "missing")]) == 2
