"""
Pytest configuration and shared fixtures for page generator tests.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict
from unittest import mock

import pytest


# Add repo root to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def sample_challenges() -> list[Dict[str, Any]]:
    """Sample challenge records."""
    return [
        {
            "id": "challenge-1",
            "slug": "starfield",
            "title": "Starfield Simulation",
            "languages": ["p5.js", "Processing"],
            "topics": ["Simulation", "Animation"],
        },
        {
            "id": "challenge-2",
            "slug": "snake-game",
            "title": "Snake Game",
            "languages": ["p5.js"],
            "topics": ["Games"],
        },
        {
            "id": "challenge-3",
            "slug": "mandelbrot",
            "title": "Mandelbrot Set",
            "languages": ["Processing", "JavaScript"],
            "topics": ["fractals", "Simulation"],
        },
    ]


@pytest.fixture
def sample_tracks() -> list[Dict[str, Any]]:
    """One flat and one chaptered track."""
    return [
        {
            "id": "track-flat",
            "slug": "code-programming-with-p5-js",
            "title": "Code! Programming with p5.js",
            "type": "main",
            "languages": ["p5.js"],
            "topics": ["Beginner"],
            "videos": [
                {"id": "v0", "slug": "introduction", "source": "yt-v0"},
                {"id": "v1", "slug": "shapes", "source": "yt-v1"},
            ],
        },
        {
            "id": "track-chaptered",
            "slug": "the-nature-of-code",
            "title": "The Nature of Code",
            "type": "main",
            "languages": ["Processing", "p5.js"],
            "topics": ["Physics"],
            "chapters": [
                {
                    "title": "Vectors",
                    "videos": [
                        {"id": "c0v0", "slug": "what-is-a-vector", "source": "yt-c0v0"},
                        {"id": "c0v1", "slug": "vector-math", "source": "yt-c0v1"},
                    ],
                },
                {
                    "title": "Forces",
                    "videos": [
                        {"id": "c1v0", "slug": "gravity", "source": "yt-c1v0"},
                    ],
                },
            ],
        },
    ]


@pytest.fixture
def sample_guides() -> list[Dict[str, Any]]:
    return [
        {"id": "guide-1", "slug": "how-to-contribute", "title": "How to Contribute"},
        {"id": "guide-2", "slug": "style-guide", "title": "Style Guide"},
    ]


@pytest.fixture
def content_dir(
    tmp_path: Path,
    sample_challenges: list[Dict[str, Any]],
    sample_tracks: list[Dict[str, Any]],
    sample_guides: list[Dict[str, Any]],
) -> Path:
    """Content directory with one JSON file per content type."""
    content = tmp_path / "content"
    content.mkdir()
    (content / "challenges.json").write_text(json.dumps(sample_challenges), encoding="utf-8")
    (content / "tracks.json").write_text(json.dumps(sample_tracks), encoding="utf-8")
    (content / "guides.json").write_text(json.dumps(sample_guides), encoding="utf-8")
    return content


@pytest.fixture
def settings(tmp_path: Path):
    """Settings isolated from the environment, writing under tmp_path."""
    from src.config import Settings

    with mock.patch.dict(os.environ, {}, clear=True):
        return Settings(
            content_path=tmp_path / "content",
            public_dir=tmp_path / "public",
            output_path=tmp_path / "public" / "page-data",
        )
