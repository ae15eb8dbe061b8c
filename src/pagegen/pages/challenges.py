"""
Challenge detail and listing pages.
"""

from __future__ import annotations

import logging

from src.config import Settings
from src.content import ContentSource
from src.models import ContentType, Page
from src.pagegen.pages._shared import generate_filtered_listings, query_nodes, write_facets
from src.pagegen.sink import PageSink

logger = logging.getLogger(__name__)


async def create_challenge_pages(source: ContentSource, sink: PageSink, settings: Settings) -> list[Page]:
    """Write the challenge facets, then register detail and listing pages."""
    challenges = await query_nodes(source, ContentType.CHALLENGE)
    facets = write_facets(challenges, ContentType.CHALLENGE, settings)

    pages: list[Page] = []
    for challenge in challenges:
        # The template loads the challenge, its contributions and images by id/slug
        page = Page(
            path=f"challenges/{challenge.slug}",
            template=settings.templates.challenge,
            context={"id": challenge.id, "slug": challenge.slug},
        )
        sink.create_page(page)
        pages.append(page)
    logger.info("Registered %d challenge pages", len(pages))

    pages.extend(
        await generate_filtered_listings(
            source,
            sink,
            ContentType.CHALLENGE,
            challenges,
            facets,
            template=settings.templates.challenges,
            items_per_page=settings.items_per_page,
        )
    )
    return pages
