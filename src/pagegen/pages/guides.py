"""
Guide detail pages.
"""

from __future__ import annotations

import logging

from src.config import Settings
from src.content import ContentSource
from src.models import ContentType, Page
from src.pagegen.pages._shared import query_nodes
from src.pagegen.sink import PageSink

logger = logging.getLogger(__name__)


async def create_guide_pages(source: ContentSource, sink: PageSink, settings: Settings) -> list[Page]:
    guides = await query_nodes(source, ContentType.GUIDE)
    pages: list[Page] = []
    for guide in guides:
        page = Page(
            path=f"guides/{guide.slug}",
            template=settings.templates.guide,
            context={"id": guide.id, "slug": guide.slug},
        )
        sink.create_page(page)
        pages.append(page)
    logger.info("Registered %d guide pages", len(pages))
    return pages
