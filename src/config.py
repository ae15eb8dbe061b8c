"""
Learning Site Page Generator - Configuration Management
=======================================================
Centralized configuration with environment variable support and validation.

Usage:
    from src.config import get_settings

    settings = get_settings()
    page_size = settings.items_per_page
"""

from __future__ import annotations

import logging
import os
from dataclasses import InitVar, dataclass, field
from pathlib import Path

from src.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

EMPTY_TRACK_POLICIES = frozenset({"fail", "skip"})


@dataclass
class Templates:
    """Template identifiers handed to the page sink.

    The generator never renders these; they are opaque names the site
    renderer resolves.
    """

    challenge: str = "challenge"
    challenges: str = "challenges"
    track_video: str = "track-video"
    tracks: str = "tracks"
    guide: str = "guide"


@dataclass
class Settings:
    """Build settings with environment variable overrides."""

    # Paths
    content_path: Path = field(default_factory=lambda: Path("content"))
    public_dir: Path = field(default_factory=lambda: Path("public"))
    output_path: Path = field(default_factory=lambda: Path("public/page-data"))

    # Listings
    items_per_page: int = 50

    # Tracks without any video: "fail" aborts the build, "skip" logs and moves on
    empty_track_policy: str = "fail"

    templates: Templates = field(default_factory=Templates)

    # Feature flags
    debug_mode: bool = False

    # False defers validate() to the caller, e.g. until CLI flags are applied
    strict: InitVar[bool] = True

    def __post_init__(self, strict: bool):
        """Load overrides from environment variables."""
        self._load_env_overrides()
        if strict:
            self.validate()

    def _load_env_overrides(self):
        """Load configuration from environment variables."""
        # Paths
        if content_path := os.environ.get("PAGEGEN_CONTENT_PATH"):
            self.content_path = Path(content_path)
        if public_dir := os.environ.get("PAGEGEN_PUBLIC_DIR"):
            self.public_dir = Path(public_dir)
        if output_path := os.environ.get("PAGEGEN_OUTPUT_PATH"):
            self.output_path = Path(output_path)

        # Listings
        if per_page := os.environ.get("PAGEGEN_ITEMS_PER_PAGE"):
            try:
                self.items_per_page = int(per_page)
            except ValueError as e:
                raise ConfigurationError(
                    "Items per page must be an integer",
                    setting="PAGEGEN_ITEMS_PER_PAGE",
                    value=per_page,
                ) from e

        if policy := os.environ.get("PAGEGEN_EMPTY_TRACK_POLICY"):
            self.empty_track_policy = policy.strip().lower()

        # Feature flags
        if os.environ.get("DEBUG", "").lower() in ("1", "true"):
            self.debug_mode = True

    def validate(self) -> None:
        """Reject settings the generator cannot work with."""
        if self.items_per_page < 1:
            raise ConfigurationError(
                "Items per page must be at least 1",
                setting="items_per_page",
                value=self.items_per_page,
            )
        if self.empty_track_policy not in EMPTY_TRACK_POLICIES:
            raise ConfigurationError(
                f"Empty track policy must be one of {sorted(EMPTY_TRACK_POLICIES)}",
                setting="empty_track_policy",
                value=self.empty_track_policy,
            )

    def manifest_path(self, collection: str) -> Path:
        """Location of the filter manifest for a collection."""
        return self.public_dir / f"filters-{collection}.json"


# Singleton instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
        if _settings.debug_mode:
            logger.info("Settings loaded with debug mode enabled")
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from environment."""
    global _settings
    _settings = Settings()
    return _settings
