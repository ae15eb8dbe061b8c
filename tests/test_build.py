"""
Tests for src.pagegen.build.

Covers:
- Full build over the JSON content directory
- Page data and manifest files on disk
- Repeat builds on unchanged input
- CLI exit codes
"""

import json
import os
from pathlib import Path
from unittest import mock

import pytest

from src.content import JsonContentSource
from src.exceptions import EmptyTrackError
from src.pagegen import build_site, main
from src.pagegen.sink import PAGE_DATA_FILENAME, FileSystemPageSink, PageRegistry


class TestBuildSite:
    """Tests for the build orchestration."""

    @pytest.mark.asyncio
    async def test_build_report(self, content_dir: Path, settings):
        report = await build_site(JsonContentSource(content_dir), PageRegistry(), settings, build_id="b1")

        assert report.build_id == "b1"
        assert report.page_counts == {
            "challenge_pages": 20,
            "track_pages": 9,
            "track_video_pages": 7,
            "guide_pages": 2,
        }
        assert report.total_pages == 38
        assert report.manifests == [
            settings.manifest_path("challenges"),
            settings.manifest_path("tracks"),
        ]
        assert report.duration_ms >= 0

    @pytest.mark.asyncio
    async def test_writes_page_data(self, content_dir: Path, settings):
        sink = FileSystemPageSink(settings.output_path)
        await build_site(JsonContentSource(content_dir), sink, settings)

        gravity = settings.output_path / "tracks" / "the-nature-of-code" / "gravity" / PAGE_DATA_FILENAME
        data = json.loads(gravity.read_text(encoding="utf-8"))
        assert data["template"] == "track-video"
        assert data["context"]["trackPosition"] == {"chapterIndex": 1, "videoIndex": 0}

        assert (settings.output_path / "challenges" / "starfield" / PAGE_DATA_FILENAME).exists()
        assert (settings.output_path / "guides" / "style-guide" / PAGE_DATA_FILENAME).exists()
        assert settings.manifest_path("challenges").exists()
        assert settings.manifest_path("tracks").exists()

    @pytest.mark.asyncio
    async def test_repeat_build_is_stable(self, content_dir: Path, settings):
        first = await build_site(JsonContentSource(content_dir), PageRegistry(), settings)
        manifests = [p.read_text(encoding="utf-8") for p in first.manifests]

        second_registry = PageRegistry()
        second = await build_site(JsonContentSource(content_dir), second_registry, settings)

        assert [p.read_text(encoding="utf-8") for p in second.manifests] == manifests
        assert second.page_counts == first.page_counts

    @pytest.mark.asyncio
    async def test_failure_propagates(self, content_dir: Path, settings):
        (content_dir / "tracks.json").write_text(json.dumps([{"id": "t", "slug": "empty"}]), encoding="utf-8")
        with pytest.raises(EmptyTrackError):
            await build_site(JsonContentSource(content_dir), PageRegistry(), settings)

    @pytest.mark.asyncio
    async def test_failure_carries_report_build_id(self, content_dir: Path, settings):
        (content_dir / "tracks.json").write_text(json.dumps([{"id": "t", "slug": "empty"}]), encoding="utf-8")
        with pytest.raises(EmptyTrackError) as exc_info:
            await build_site(JsonContentSource(content_dir), PageRegistry(), settings, build_id="b1")
        assert exc_info.value.build_id == "b1"
        assert exc_info.value.to_dict()["build_id"] == "b1"


class TestMain:
    """Tests for the CLI entry point."""

    def _args(self, content_dir: Path, tmp_path: Path) -> list[str]:
        return [
            "--content", str(content_dir),
            "--public", str(tmp_path / "public"),
            "--output", str(tmp_path / "public" / "page-data"),
            "--log-format", "console",
        ]

    def test_success(self, content_dir: Path, tmp_path: Path):
        with mock.patch.dict(os.environ, {}, clear=True):
            assert main(self._args(content_dir, tmp_path)) == 0

        assert (tmp_path / "public" / "filters-challenges.json").exists()
        assert (tmp_path / "public" / "page-data" / "tracks" / "the-nature-of-code" / PAGE_DATA_FILENAME).exists()

    def test_missing_content_dir(self, tmp_path: Path):
        with mock.patch.dict(os.environ, {}, clear=True):
            assert main(self._args(tmp_path / "nope", tmp_path)) == 1

    def test_empty_track_exit_code(self, content_dir: Path, tmp_path: Path):
        (content_dir / "tracks.json").write_text(json.dumps([{"id": "t", "slug": "empty"}]), encoding="utf-8")
        with mock.patch.dict(os.environ, {}, clear=True):
            assert main(self._args(content_dir, tmp_path)) == 1
            assert main([*self._args(content_dir, tmp_path), "--skip-empty-tracks"]) == 0

    def test_invalid_page_size(self, content_dir: Path, tmp_path: Path):
        with mock.patch.dict(os.environ, {}, clear=True):
            assert main([*self._args(content_dir, tmp_path), "--items-per-page", "0"]) == 1

    def test_cli_page_size_overrides_invalid_env(self, content_dir: Path, tmp_path: Path):
        with mock.patch.dict(os.environ, {"PAGEGEN_ITEMS_PER_PAGE": "0"}, clear=True):
            assert main(self._args(content_dir, tmp_path)) == 1
            assert main([*self._args(content_dir, tmp_path), "--items-per-page", "5"]) == 0
