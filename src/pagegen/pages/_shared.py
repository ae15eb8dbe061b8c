"""
Shared helpers for listing and facet generation.
"""

from __future__ import annotations

import logging
from typing import Sequence

from src.config import Settings
from src.content import ContentSource
from src.exceptions import ContentQueryError, PageGenError
from src.models import ContentNode, ContentType, FilterManifest, Page, TagDimension, TagFilter
from src.pagegen._utils import js_regex, slugify
from src.pagegen.manifest import write_filter_manifest
from src.pagegen.pagination import paginate
from src.pagegen.sink import PageSink
from src.pagegen.tags import extract_tags

logger = logging.getLogger(__name__)

# Path segment used when a dimension is not filtered
WILDCARD_SEGMENT = "all"


async def query_nodes(
    source: ContentSource,
    content_type: ContentType,
    tag_filter: TagFilter | None = None,
) -> list[ContentNode]:
    """Await a content query, wrapping unexpected failures as `ContentQueryError`."""
    try:
        return await source.query(content_type, tag_filter)
    except PageGenError:
        raise
    except Exception as e:
        raise ContentQueryError(
            content_type.value,
            language=tag_filter.languages if tag_filter else None,
            topic=tag_filter.topics if tag_filter else None,
            reason=f"Query failed: {e}",
        ) from e


def write_facets(
    nodes: Sequence[ContentNode],
    content_type: ContentType,
    settings: Settings,
) -> FilterManifest:
    """Compute the language/topic facets of `nodes` and persist them."""
    return write_filter_manifest(
        settings.manifest_path(content_type.collection),
        extract_tags(nodes, TagDimension.LANGUAGES),
        extract_tags(nodes, TagDimension.TOPICS),
    )


def listing_prefix(collection: str, language: str | None, topic: str | None) -> str:
    lang_segment = slugify(language) if language is not None else WILDCARD_SEGMENT
    topic_segment = slugify(topic) if topic is not None else WILDCARD_SEGMENT
    return f"{collection}/lang/{lang_segment}/topic/{topic_segment}"


def listing_context(language: str | None, topic: str | None) -> dict[str, str]:
    return {
        "language": language or "",
        "languageRegex": js_regex(language),
        "topic": topic or "",
        "topicRegex": js_regex(topic),
    }


async def generate_filtered_listings(
    source: ContentSource,
    sink: PageSink,
    content_type: ContentType,
    nodes: Sequence[ContentNode],
    facets: FilterManifest,
    *,
    template: str,
    items_per_page: int,
) -> list[Page]:
    """Register the baseline listing plus one listing per language/topic pair.

    `None` in either position stands for "any value". Every pair other than
    any/any is re-queried from the source; the first failing query aborts.
    """
    collection = content_type.collection
    pages = paginate(
        sink,
        nodes,
        items_per_page=items_per_page,
        path_prefix=collection,
        template=template,
        context=listing_context(None, None),
    )

    languages: list[str | None] = [*facets.languages, None]
    topics: list[str | None] = [*facets.topics, None]
    # Tags differing only in case or punctuation share a slug and so a path
    emitted: set[str] = set()
    for language in languages:
        for topic in topics:
            prefix = listing_prefix(collection, language, topic)
            if prefix in emitted:
                logger.debug("Listing %s already registered, skipping language=%r topic=%r", prefix, language, topic)
                continue

            tag_filter = TagFilter(languages=language, topics=topic)
            if tag_filter.is_wildcard:
                matched = list(nodes)
            else:
                matched = await query_nodes(source, content_type, tag_filter)

            listing = paginate(
                sink,
                matched,
                items_per_page=items_per_page,
                path_prefix=prefix,
                template=template,
                context=listing_context(language, topic),
            )
            if listing:
                emitted.add(prefix)
            else:
                logger.debug("No %s for language=%r topic=%r", collection, language, topic)
            pages.extend(listing)

    logger.info(
        "Registered %d %s listing pages over %d filter combinations",
        len(pages),
        collection,
        len(languages) * len(topics),
    )
    return pages
