"""
Learning Site Page Generator - Content Source
=============================================
Query layer the page routines read content nodes from.

`JsonContentSource` loads `challenges.json`, `tracks.json` and `guides.json`
from a content directory (each a JSON array of records). A missing file
means the site has no content of that type.

Usage:
    source = JsonContentSource(Path("content"))
    tracks = await source.query(ContentType.TRACK)
    python_tracks = await source.query(
        ContentType.TRACK, TagFilter(languages="python")
    )
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol, Sequence

from pydantic import ValidationError as PydanticValidationError

from src.exceptions import ContentSourceError
from src.models import NODE_MODELS, ContentNode, ContentType, TagDimension, TagFilter

logger = logging.getLogger(__name__)


class ContentSource(Protocol):
    """Anything the page routines can query nodes from."""

    async def query(
        self,
        content_type: ContentType,
        tag_filter: TagFilter | None = None,
    ) -> list[ContentNode]:
        ...


def matches_tag(values: Sequence[str], wanted: str | None) -> bool:
    """True when `wanted` is a wildcard or equals one of `values` ignoring case."""
    if wanted is None:
        return True
    target = wanted.casefold()
    return any(v.casefold() == target for v in values)


def filter_nodes(nodes: Sequence[ContentNode], tag_filter: TagFilter | None) -> list[ContentNode]:
    """Apply a tag filter in memory, keeping declared order."""
    if tag_filter is None or tag_filter.is_wildcard:
        return list(nodes)
    return [
        node
        for node in nodes
        if all(matches_tag(node.tags(dim), tag_filter.value(dim)) for dim in TagDimension)
    ]


class JsonContentSource:
    """Content source backed by one JSON file per content type."""

    def __init__(self, content_dir: Path) -> None:
        self.content_dir = Path(content_dir)
        self._cache: dict[ContentType, list[ContentNode]] = {}
        self.query_count = 0

    def path_for(self, content_type: ContentType) -> Path:
        return self.content_dir / f"{content_type.collection}.json"

    def _load(self, content_type: ContentType) -> list[ContentNode]:
        if content_type in self._cache:
            return self._cache[content_type]

        path = self.path_for(content_type)
        if not path.exists():
            logger.info("No %s content at %s", content_type.value, path)
            self._cache[content_type] = []
            return []

        try:
            records = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            raise ContentSourceError(
                "Failed to read content file",
                content_type=content_type.value,
                path=str(path),
            ) from e

        if not isinstance(records, list):
            raise ContentSourceError(
                "Content file must contain a JSON array",
                content_type=content_type.value,
                path=str(path),
            )

        model = NODE_MODELS[content_type]
        nodes: list[ContentNode] = []
        for index, record in enumerate(records):
            try:
                nodes.append(model.model_validate(record))
            except PydanticValidationError as e:
                raise ContentSourceError(
                    f"Invalid {content_type.value} record at index {index}",
                    content_type=content_type.value,
                    path=str(path),
                ) from e

        logger.debug("Loaded %d %s nodes from %s", len(nodes), content_type.value, path)
        self._cache[content_type] = nodes
        return nodes

    async def query(
        self,
        content_type: ContentType,
        tag_filter: TagFilter | None = None,
    ) -> list[ContentNode]:
        """Return the nodes of a content type matching `tag_filter`, in declared order."""
        self.query_count += 1
        return filter_nodes(self._load(content_type), tag_filter)


class InMemoryContentSource:
    """Content source over already-built nodes (fixtures, other pipelines)."""

    def __init__(self, nodes: dict[ContentType, Sequence[ContentNode]] | None = None) -> None:
        self._nodes = {ct: list(items) for ct, items in (nodes or {}).items()}
        self.queries: list[tuple[ContentType, TagFilter | None]] = []

    async def query(
        self,
        content_type: ContentType,
        tag_filter: TagFilter | None = None,
    ) -> list[ContentNode]:
        self.queries.append((content_type, tag_filter))
        return filter_nodes(self._nodes.get(content_type, []), tag_filter)
