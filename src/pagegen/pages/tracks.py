"""
Track listing pages.
"""

from __future__ import annotations

from src.config import Settings
from src.content import ContentSource
from src.models import ContentType, Page
from src.pagegen.pages._shared import generate_filtered_listings, query_nodes, write_facets
from src.pagegen.sink import PageSink


async def create_track_pages(source: ContentSource, sink: PageSink, settings: Settings) -> list[Page]:
    tracks = await query_nodes(source, ContentType.TRACK)
    facets = write_facets(tracks, ContentType.TRACK, settings)
    return await generate_filtered_listings(
        source,
        sink,
        ContentType.TRACK,
        tracks,
        facets,
        template=settings.templates.tracks,
        items_per_page=settings.items_per_page,
    )
