"""
Tests for src.config module.

Covers:
- Settings initialization
- Environment variable overrides
- Validation
"""

import os
from pathlib import Path
from unittest import mock

import pytest

from src.exceptions import ConfigurationError


class TestSettings:
    """Tests for Settings class."""

    def test_default_values(self):
        from src.config import Settings

        with mock.patch.dict(os.environ, {}, clear=True):
            settings = Settings()

        assert settings.content_path == Path("content")
        assert settings.public_dir == Path("public")
        assert settings.output_path == Path("public/page-data")
        assert settings.items_per_page == 50
        assert settings.empty_track_policy == "fail"
        assert settings.templates.challenge == "challenge"
        assert settings.templates.track_video == "track-video"
        assert settings.debug_mode is False

    def test_env_override_paths(self):
        from src.config import Settings

        env = {
            "PAGEGEN_CONTENT_PATH": "/custom/content",
            "PAGEGEN_PUBLIC_DIR": "/custom/public",
            "PAGEGEN_OUTPUT_PATH": "/custom/out",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            settings = Settings()

        assert settings.content_path == Path("/custom/content")
        assert settings.public_dir == Path("/custom/public")
        assert settings.output_path == Path("/custom/out")

    def test_env_override_listing_settings(self):
        from src.config import Settings

        env = {"PAGEGEN_ITEMS_PER_PAGE": "25", "PAGEGEN_EMPTY_TRACK_POLICY": "Skip", "DEBUG": "true"}
        with mock.patch.dict(os.environ, env, clear=True):
            settings = Settings()

        assert settings.items_per_page == 25
        assert settings.empty_track_policy == "skip"
        assert settings.debug_mode is True

    def test_non_integer_page_size(self):
        from src.config import Settings

        with mock.patch.dict(os.environ, {"PAGEGEN_ITEMS_PER_PAGE": "fifty"}, clear=True):
            with pytest.raises(ConfigurationError) as exc_info:
                Settings()
        assert exc_info.value.setting == "PAGEGEN_ITEMS_PER_PAGE"

    @pytest.mark.parametrize("kwargs", [{"items_per_page": 0}, {"empty_track_policy": "ignore"}])
    def test_invalid_values(self, kwargs):
        from src.config import Settings

        with mock.patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ConfigurationError):
                Settings(**kwargs)

    def test_non_strict_defers_validation(self):
        from src.config import Settings

        with mock.patch.dict(os.environ, {"PAGEGEN_ITEMS_PER_PAGE": "0"}, clear=True):
            settings = Settings(strict=False)
        assert settings.items_per_page == 0

        with pytest.raises(ConfigurationError):
            settings.validate()

        settings.items_per_page = 5
        settings.validate()

    def test_manifest_path(self):
        from src.config import Settings

        with mock.patch.dict(os.environ, {}, clear=True):
            settings = Settings(public_dir=Path("site"))
        assert settings.manifest_path("tracks") == Path("site/filters-tracks.json")


class TestGetSettings:
    def test_singleton_and_reload(self):
        from src.config import get_settings, reload_settings

        with mock.patch.dict(os.environ, {"PAGEGEN_ITEMS_PER_PAGE": "10"}, clear=True):
            reloaded = reload_settings()
            assert get_settings() is reloaded
            assert reloaded.items_per_page == 10

        with mock.patch.dict(os.environ, {}, clear=True):
            assert reload_settings().items_per_page == 50
