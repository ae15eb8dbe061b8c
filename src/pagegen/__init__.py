"""
Learning Site Page Generator
============================
Registers challenge, track, video and guide pages and writes the filter
manifests the listing pages read.

Usage:
  from src.pagegen import build_site
  report = await build_site(source, sink, settings)

Or via CLI:
  python3 -m src.pagegen --content content --public public --output public/page-data
"""

from __future__ import annotations

from src.pagegen.build import BuildReport, build_site, main

__all__ = ["BuildReport", "build_site", "main"]
