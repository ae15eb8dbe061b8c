"""
Main build orchestration for page generation.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path

from src.config import Settings, get_settings
from src.content import ContentSource, JsonContentSource
from src.exceptions import PageGenError
from src.logging_config import BuildLogContext, PerformanceTracker, configure_logging, log_error, log_event
from src.models import ContentType
from src.pagegen.pages import (
    create_challenge_pages,
    create_guide_pages,
    create_track_pages,
    create_track_video_pages,
)
from src.pagegen.sink import FileSystemPageSink, PageSink

logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    """What a build registered, per generation step."""

    build_id: str
    page_counts: dict[str, int] = field(default_factory=dict)
    manifests: list[Path] = field(default_factory=list)
    duration_ms: float = 0.0

    @property
    def total_pages(self) -> int:
        return sum(self.page_counts.values())


# Generation steps in the order they run: (name, content type, routine, writes manifest)
STEPS = (
    ("challenge_pages", ContentType.CHALLENGE, create_challenge_pages, True),
    ("track_pages", ContentType.TRACK, create_track_pages, True),
    ("track_video_pages", ContentType.TRACK, create_track_video_pages, False),
    ("guide_pages", ContentType.GUIDE, create_guide_pages, False),
)


async def build_site(
    source: ContentSource,
    sink: PageSink,
    settings: Settings | None = None,
    *,
    build_id: str | None = None,
) -> BuildReport:
    """Run every generation step in order.

    Steps run one after another; the first failure propagates and ends the
    build.
    """
    settings = settings or get_settings()
    report = BuildReport(build_id=build_id or uuid.uuid4().hex[:12])

    with BuildLogContext(build_id=report.build_id), PerformanceTracker("build") as build_timer:
        for name, content_type, routine, writes_manifest in STEPS:
            with BuildLogContext(build_id=report.build_id, content_type=content_type.value):
                with PerformanceTracker(name, content_type=content_type.value):
                    try:
                        pages = await routine(source, sink, settings)
                    except PageGenError as e:
                        e.build_id = report.build_id
                        raise
            report.page_counts[name] = len(pages)
            if writes_manifest:
                report.manifests.append(settings.manifest_path(content_type.collection))

    report.duration_ms = build_timer.duration_ms or 0.0
    log_event(
        "build_completed",
        build_id=report.build_id,
        total_pages=report.total_pages,
        duration_ms=report.duration_ms,
    )
    return report


def run_build(settings: Settings) -> BuildReport:
    """Build from the JSON content directory into the filesystem sink."""
    source = JsonContentSource(settings.content_path)
    sink = FileSystemPageSink(settings.output_path)
    return asyncio.run(build_site(source, sink, settings))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for page generation.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    parser = argparse.ArgumentParser(description="Generate listing and detail pages from site content")
    parser.add_argument("--content", type=Path, default=None, help="Directory holding challenges/tracks/guides JSON")
    parser.add_argument("--public", type=Path, default=None, help="Directory the filter manifests are written to")
    parser.add_argument("--output", type=Path, default=None, help="Directory page data files are written to")
    parser.add_argument("--items-per-page", type=int, default=None, help="Listing page size")
    parser.add_argument(
        "--skip-empty-tracks", action="store_true", help="Skip tracks without videos instead of failing"
    )
    parser.add_argument("--log-format", choices=("json", "console"), default=None, help="Log output format")
    args = parser.parse_args(argv)

    configure_logging(log_format=args.log_format)

    try:
        settings = Settings(strict=False)
        overrides = {}
        if args.content is not None:
            overrides["content_path"] = args.content
        if args.public is not None:
            overrides["public_dir"] = args.public
        if args.output is not None:
            overrides["output_path"] = args.output
        if args.items_per_page is not None:
            overrides["items_per_page"] = args.items_per_page
        if args.skip_empty_tracks:
            overrides["empty_track_policy"] = "skip"
        for name, value in overrides.items():
            setattr(settings, name, value)
        settings.validate()

        if not settings.content_path.is_dir():
            logger.error(f"Missing content directory: {settings.content_path}")
            return 1

        report = run_build(settings)
    except PageGenError as e:
        log_error("build_failed", e, error_code=e.error_code, detail=e.detail)
        return 1

    logger.info(f"Registered {report.total_pages} pages into: {settings.output_path}")
    for manifest in report.manifests:
        logger.info(f"Filter manifest: {manifest}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
