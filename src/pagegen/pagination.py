"""
Listing pagination.

Splits a node list into fixed-size pages: page 1 at the path prefix, page n
at `<prefix>/n`. No items means no pages.
"""

from __future__ import annotations

import math
from typing import Any, Sequence

from src.models import ContentNode, Page
from src.pagegen.sink import PageSink


def number_of_pages(item_count: int, items_per_page: int) -> int:
    if items_per_page < 1:
        raise ValueError("items_per_page must be at least 1")
    return math.ceil(item_count / items_per_page)


def page_path(path_prefix: str, page_number: int) -> str:
    """URL path of a zero-based page number under `path_prefix`."""
    prefix = "/" + path_prefix.strip("/")
    if page_number == 0:
        return prefix
    return f"{prefix.rstrip('/')}/{page_number + 1}"


def paginate(
    sink: PageSink,
    items: Sequence[ContentNode],
    *,
    items_per_page: int,
    path_prefix: str,
    template: str,
    context: dict[str, Any] | None = None,
) -> list[Page]:
    """Register one listing page per slice of `items` and return them.

    Each page context extends `context` with the pagination state and the
    ids of the items shown on that page.
    """
    total = number_of_pages(len(items), items_per_page)
    pages: list[Page] = []
    for page_number in range(total):
        skip = page_number * items_per_page
        page_items = items[skip : skip + items_per_page]
        page_context = {
            **(context or {}),
            "pageNumber": page_number,
            "humanPageNumber": page_number + 1,
            "skip": skip,
            "limit": items_per_page,
            "numberOfPages": total,
            "previousPagePath": page_path(path_prefix, page_number - 1) if page_number > 0 else "",
            "nextPagePath": page_path(path_prefix, page_number + 1) if page_number + 1 < total else "",
            "ids": [item.id for item in page_items],
        }
        page = Page(path=page_path(path_prefix, page_number), template=template, context=page_context)
        sink.create_page(page)
        pages.append(page)
    return pages
