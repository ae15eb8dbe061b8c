from __future__ import annotations

from src.pagegen.pages.challenges import create_challenge_pages
from src.pagegen.pages.guides import create_guide_pages
from src.pagegen.pages.track_videos import create_track_video_pages
from src.pagegen.pages.tracks import create_track_pages

__all__ = [
    "create_challenge_pages",
    "create_guide_pages",
    "create_track_pages",
    "create_track_video_pages",
]
