"""
Filter manifest persistence.

Each listing collection gets a `filters-<collection>.json` file holding the
languages and topics its client-side filter can offer.
"""

from __future__ import annotations

import logging
from pathlib import Path

from src.exceptions import ManifestWriteError
from src.models import FilterManifest
from src.pagegen._utils import _read_json, _write

logger = logging.getLogger(__name__)


def write_filter_manifest(path: Path, languages: list[str], topics: list[str]) -> FilterManifest:
    """Serialize the facets to `path`, replacing any previous manifest."""
    manifest = FilterManifest(languages=languages, topics=topics)
    try:
        _write(path, manifest.model_dump_json())
    except OSError as e:
        raise ManifestWriteError(str(path), reason=str(e)) from e
    logger.info(
        "Wrote filter manifest %s (%d languages, %d topics)",
        path,
        len(languages),
        len(topics),
    )
    return manifest


def read_filter_manifest(path: Path) -> FilterManifest:
    return FilterManifest.model_validate(_read_json(path))
