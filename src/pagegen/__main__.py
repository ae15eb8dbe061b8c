"""
CLI entry point for running the page generator directly.

Usage:
  python3 -m src.pagegen --content content --output public/page-data
"""

from src.pagegen.build import main

if __name__ == "__main__":
    raise SystemExit(main())
