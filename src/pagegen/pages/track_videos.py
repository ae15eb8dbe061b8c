"""
Track landing and per-video pages.

Every track gets a landing page at `tracks/<track>` showing its first video,
and each video gets its own page at `tracks/<track>/<video>`. Positions are
zero-based (chapter, video-in-chapter) in declared order; flat tracks are
chapter 0.
"""

from __future__ import annotations

import logging

from src.config import Settings
from src.content import ContentSource
from src.exceptions import EmptyTrackError
from src.models import ContentType, Page, Track, TrackPosition, Video
from src.pagegen.pages._shared import query_nodes
from src.pagegen.sink import PageSink

logger = logging.getLogger(__name__)


def video_context(track: Track, video: Video, position: TrackPosition, *, is_track_page: bool) -> dict:
    return {
        "isTrackPage": is_track_page,
        "trackId": track.id,
        "videoId": video.id,
        "videoSlug": video.slug,
        "source": video.source,
        "trackPosition": position.to_context(),
    }


def track_pages(track: Track, template: str) -> list[Page]:
    """Landing page followed by one page per video, or EmptyTrackError."""
    first = track.first_video()
    if first is None:
        raise EmptyTrackError(track.slug)

    position, video = first
    pages = [
        Page(
            path=f"tracks/{track.slug}",
            template=template,
            context=video_context(track, video, position, is_track_page=True),
        )
    ]
    for position, video in track.iter_videos():
        pages.append(
            Page(
                path=f"tracks/{track.slug}/{video.slug}",
                template=template,
                context=video_context(track, video, position, is_track_page=False),
            )
        )
    return pages


async def create_track_video_pages(source: ContentSource, sink: PageSink, settings: Settings) -> list[Page]:
    tracks = await query_nodes(source, ContentType.TRACK)

    registered: list[Page] = []
    for track in tracks:
        try:
            pages = track_pages(track, settings.templates.track_video)
        except EmptyTrackError:
            if settings.empty_track_policy != "skip":
                raise
            logger.warning("Skipping track %r: it has no videos", track.slug)
            continue

        logger.debug(
            "Track %r (%s): %d video pages",
            track.slug,
            "chaptered" if track.is_chaptered else "flat",
            len(pages) - 1,
        )
        for page in pages:
            sink.create_page(page)
        registered.extend(pages)

    logger.info("Registered %d track video pages for %d tracks", len(registered), len(tracks))
    return registered
