"""
Tests for src.pagegen.sink.
"""

import json
from pathlib import Path

import pytest

from src.exceptions import PageConflictError
from src.models import Page
from src.pagegen.sink import PAGE_DATA_FILENAME, FileSystemPageSink, PageRegistry


class TestPageRegistry:
    def test_keeps_registration_order(self):
        registry = PageRegistry()
        registry.create_page(Page(path="b", template="t"))
        registry.create_page(Page(path="a", template="t"))
        assert registry.paths() == ["b", "a"]
        assert "/a" in registry
        assert registry.get("/b").template == "t"

    def test_duplicate_path_conflicts(self):
        registry = PageRegistry()
        registry.create_page(Page(path="guides/x", template="guide"))
        with pytest.raises(PageConflictError) as exc_info:
            registry.create_page(Page(path="/guides/x/", template="challenge"))
        assert exc_info.value.existing_template == "guide"
        assert len(registry) == 1

    def test_by_template(self):
        registry = PageRegistry()
        registry.create_page(Page(path="a", template="guide"))
        registry.create_page(Page(path="b", template="challenge"))
        assert [p.path for p in registry.by_template("guide")] == ["a"]


class TestFileSystemPageSink:
    def test_writes_page_data(self, tmp_path: Path):
        sink = FileSystemPageSink(tmp_path / "out")
        sink.create_page(Page(path="challenges/starfield", template="challenge", context={"id": "c1"}))

        data_file = tmp_path / "out" / "challenges" / "starfield" / PAGE_DATA_FILENAME
        assert json.loads(data_file.read_text(encoding="utf-8")) == {
            "path": "challenges/starfield",
            "template": "challenge",
            "context": {"id": "c1"},
        }
        assert len(sink) == 1

    def test_conflict_does_not_overwrite(self, tmp_path: Path):
        sink = FileSystemPageSink(tmp_path)
        sink.create_page(Page(path="x", template="first"))
        with pytest.raises(PageConflictError):
            sink.create_page(Page(path="x", template="second"))
        data = json.loads((tmp_path / "x" / PAGE_DATA_FILENAME).read_text(encoding="utf-8"))
        assert data["template"] == "first"
