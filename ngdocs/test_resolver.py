"""Tests for the two-phase index and module back-filling."""

import pytest

from ngdocs.extractors import parse_file
from ngdocs.index import DocIndex, IndexSealedError
from ngdocs.models import SourceFile
from ngdocs.resolver import (
    backfill,
    backfill_all,
    directory_of,
    find_module_declaration,
    parent_folder,
)


def module_source(name):
    return f"/**\n * @ngdoc module\n * @name {name}\n */\n"


METHOD_SOURCE = "/**\n * @ngdoc method\n * @name Svc#run\n */\nfunction run() {}\n"


def build(files):
    index = DocIndex()
    for file_name, content in files.items():
        index.add(file_name, parse_file(SourceFile(file_name, "js", content)))
    return index.seal()


class TestPaths:
    """Path helpers used by the upward search."""

    def test_directory_of(self):
        assert directory_of("src/ng/http.js") == "src/ng/"
        assert directory_of("http.js") == ""
        assert directory_of("src\\ng\\http.js") == "src\\ng\\"

    def test_parent_folder(self):
        assert parent_folder("a/b/c/") == "a/b/"
        assert parent_folder("a/b/") == "a/"
        assert parent_folder("/abs/") == "/"

    def test_parent_folder_stops_below_two_separators(self):
        assert parent_folder("a/") is None
        assert parent_folder("/") is None
        assert parent_folder("") is None


class TestBackfill:
    """Module resolution across the sealed index."""

    def test_walks_up_to_parent_directory(self):
        index = build({"dir/a.js": module_source("mod1"), "dir/sub/b.js": METHOD_SOURCE})
        backfill("dir/sub/b.js", index)

        record = index["dir/sub/b.js"][0]
        assert record.module == "mod1"
        assert record.parent_doc.module == "mod1"
        assert record.parent_doc.name == "Svc"

    def test_sibling_file(self):
        index = build({"src/app.js": module_source("app"), "src/svc.js": METHOD_SOURCE})
        backfill_all(index)
        assert index["src/svc.js"][0].module == "app"

    def test_nearest_module_wins(self):
        index = build(
            {
                "dir/a.js": module_source("outer"),
                "dir/sub/c.js": module_source("inner"),
                "dir/sub/b.js": METHOD_SOURCE,
            }
        )
        backfill_all(index)
        assert index["dir/sub/b.js"][0].module == "inner"

    def test_top_level_files(self):
        index = build({"a.js": module_source("root"), "b.js": METHOD_SOURCE})
        backfill_all(index)
        assert index["b.js"][0].module == "root"

    def test_unresolved_module(self):
        index = build({"x/y/b.js": METHOD_SOURCE, "other/a.js": module_source("m")})
        backfill_all(index)

        record = index["x/y/b.js"][0]
        assert record.module is None
        assert record.parent_doc.module is None

    def test_explicit_module_kept(self):
        source = "/**\n * @ngdoc service\n * @name $q\n * @module ngMock\n */\n"
        index = build({"dir/a.js": module_source("mod1"), "dir/q.js": source})
        backfill_all(index)
        assert index["dir/q.js"][0].module == "ngMock"

    def test_idempotent(self):
        index = build({"dir/a.js": module_source("mod1"), "dir/sub/b.js": METHOD_SOURCE})
        backfill_all(index)
        first = [doc.to_dict() for doc in index.records()]

        backfill_all(index)
        assert [doc.to_dict() for doc in index.records()] == first

    def test_unnamed_module_stops_search(self):
        index = build(
            {
                "a/top.js": module_source("top"),
                "a/b/mod.js": "/**\n * @ngdoc module\n */\n",
                "a/b/svc.js": METHOD_SOURCE,
            }
        )
        backfill_all(index)
        assert index["a/b/svc.js"][0].module is None
        assert find_module_declaration("a/b/", index) is None
        assert find_module_declaration("a/", index) == "top"

    def test_find_module_declaration(self):
        index = build({"lib/core/mod.js": module_source("core")})
        assert find_module_declaration("lib/core/deep/er/", index) == "core"
        assert find_module_declaration("lib/", index) is None


class TestIndexPhases:
    """Parsing and resolution phases are kept apart."""

    def test_add_after_seal(self):
        index = DocIndex()
        index.add("a.js", [])
        index.seal()
        with pytest.raises(IndexSealedError):
            index.add("b.js", [])

    def test_resolution_requires_sealed_index(self):
        index = DocIndex()
        index.add("a.js", parse_file(SourceFile("a.js", "js", METHOD_SOURCE)))
        with pytest.raises(TypeError):
            backfill("a.js", index)
        with pytest.raises(TypeError):
            find_module_declaration("", index)

    def test_seal_returns_same_view(self):
        index = DocIndex()
        assert index.seal() is index.seal()
