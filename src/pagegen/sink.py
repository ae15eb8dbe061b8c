"""
Page registration sinks.

The generator hands every page to a sink as `(path, template, context)`.
`PageRegistry` keeps them in memory; `FileSystemPageSink` also persists each
page as `<output_dir>/<path>/page-data.json` for the site renderer.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterator, Protocol

from src.exceptions import PageConflictError, PageWriteError
from src.models import Page
from src.pagegen._utils import _write

logger = logging.getLogger(__name__)

PAGE_DATA_FILENAME = "page-data.json"


class PageSink(Protocol):
    """Anything pages can be registered with."""

    def create_page(self, page: Page) -> None:
        ...


class PageRegistry:
    """In-memory, insertion-ordered page registry.

    Registering the same path twice raises `PageConflictError`.
    """

    def __init__(self) -> None:
        self._pages: dict[str, Page] = {}

    def create_page(self, page: Page) -> None:
        existing = self._pages.get(page.path)
        if existing is not None:
            raise PageConflictError(page.path, existing_template=existing.template)
        self._pages[page.path] = page

    @property
    def pages(self) -> list[Page]:
        return list(self._pages.values())

    def paths(self) -> list[str]:
        return list(self._pages)

    def get(self, path: str) -> Page | None:
        return self._pages.get(path.strip("/"))

    def by_template(self, template: str) -> list[Page]:
        return [p for p in self._pages.values() if p.template == template]

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and path.strip("/") in self._pages

    def __iter__(self) -> Iterator[Page]:
        return iter(list(self._pages.values()))

    def __len__(self) -> int:
        return len(self._pages)


class FileSystemPageSink(PageRegistry):
    """Registry that also writes each page's data file under `output_dir`."""

    def __init__(self, output_dir: Path) -> None:
        super().__init__()
        self.output_dir = Path(output_dir)

    def page_data_path(self, page: Page) -> Path:
        return self.output_dir / page.path / PAGE_DATA_FILENAME

    def create_page(self, page: Page) -> None:
        super().create_page(page)
        target = self.page_data_path(page)
        try:
            _write(target, json.dumps(page.model_dump(), ensure_ascii=False, indent=2))
        except OSError as e:
            raise PageWriteError(page.path, output_path=str(target)) from e
        logger.debug("Wrote %s", target)
