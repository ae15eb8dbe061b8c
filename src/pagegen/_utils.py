"""
Shared utility functions for page generation.
"""

from __future__ import annotations

import json
import re
import unicodedata
from pathlib import Path
from typing import Any


def _read_json(path: Path) -> Any:
    """Read a JSON file."""
    return json.loads(path.read_text(encoding="utf-8"))


def _write(path: Path, content: str) -> None:
    """Write content to file, creating parent directories if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _fold(value: str) -> str:
    """Strip diacritics and case so that "Élan" and "elan" fold to the same key."""
    value = unicodedata.normalize("NFKD", value)
    value = "".join(c for c in value if not unicodedata.combining(c))
    return value.casefold()


def slugify(value: str) -> str:
    """Generate a URL path segment from an arbitrary tag or title.

    Args:
        value: Input string to convert to slug.

    Returns:
        Lowercase ASCII slug with hyphen separators.

    Examples:
        >>> slugify("Machine Learning")
        'machine-learning'
        >>> slugify("Node.js")
        'node-js'
        >>> slugify("p5.js")
        'p5-js'
    """
    if not value:
        return "untitled"

    value = _fold(value.strip())

    # Convert non-alphanumeric runs into hyphens
    value = re.sub(r"[^a-z0-9]+", "-", value)

    # Strip leading/trailing hyphens
    value = value.strip("-")

    return value or "untitled"


def js_regex(value: str | None) -> str:
    """Case-insensitive, full-match JS regex literal for a filter value.

    The listing templates rebuild their filter state from this string, so it
    is written in JavaScript literal form. `None` is the wildcard.
    """
    if value is None:
        return "/^.*$/i"
    escaped = re.sub(r"([\\^$.|?*+()\[\]{}/])", r"\\\1", value)
    return f"/^{escaped}$/i"
