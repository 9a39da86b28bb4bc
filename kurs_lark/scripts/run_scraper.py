"""Run one scrape-and-upload cycle from the command line."""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Sequence

from dotenv import load_dotenv

from kurs_lark.config import FETCHER_CHOICES, LarkSettings, parse_fetcher
from kurs_lark.exceptions import KursLarkError
from kurs_lark.ingestion.fetchers import build_fetcher
from kurs_lark.ingestion.sources import BANK_CONFIGS, get_source
from kurs_lark.pipeline import run_forex_scraper
from kurs_lark.utils.logger import get_logger

LOGGER = get_logger(__name__)

__all__ = ["parse_args", "main"]


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--fetcher",
        choices=FETCHER_CHOICES,
        help="Page fetcher to use (defaults to KURS_FETCHER or 'requests')",
    )
    parser.add_argument(
        "--bank",
        dest="banks",
        action="append",
        choices=sorted(BANK_CONFIGS),
        help="Restrict the run to one bank; repeat for several (default: all)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Scrape and build rows but do not upload them to Lark",
    )
    parser.add_argument(
        "--no-headless",
        dest="headless",
        action="store_false",
        help="Show the Chrome window when using the selenium fetcher",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    args = parse_args(argv)
    try:
        settings = None if args.dry_run else LarkSettings.from_env()
        kind = args.fetcher or (
            settings.fetcher if settings else parse_fetcher(os.environ.get("KURS_FETCHER"))
        )
        fetcher_kwargs = {"headless": args.headless} if kind == "selenium" else {}
        sources = [get_source(name) for name in args.banks] if args.banks else None
        result = run_forex_scraper(
            settings,
            sources=sources,
            fetcher=build_fetcher(kind, **fetcher_kwargs),
            dry_run=args.dry_run,
        )
    except KursLarkError as exc:
        LOGGER.error("Scraper failed: %s", exc)
        return 1
    print(json.dumps(result.to_dict(), indent=2))
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
