"""
Filter facet extraction.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Iterable

from pyuca import Collator

from src.models import ContentNode, TagDimension


@lru_cache(maxsize=1)
def _collator() -> Collator:
    # Loads the Unicode collation table once per process
    return Collator()


def collation_key(value: str) -> tuple[int, ...]:
    """Primary-strength Unicode collation key.

    Only base letters count: case and accents are ignored, so "a", "A" and
    "á" compare equal, and punctuation sorts before digits and letters.
    """
    key = _collator().sort_key(value)
    # sort_key joins the primary, secondary and tertiary weights with 0
    return tuple(key[: key.index(0)]) if 0 in key else tuple(key)


def extract_tags(nodes: Iterable[ContentNode], dimension: TagDimension | str) -> list[str]:
    """Distinct values of a tag dimension across `nodes`, in collation order.

    Deduplication is exact string equality; values that collate equal keep
    the order they were first seen in.
    """
    seen: dict[str, None] = {}
    for node in nodes:
        for value in node.tags(dimension):
            seen.setdefault(value, None)
    return sorted(seen, key=collation_key)
