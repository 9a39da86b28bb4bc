"""One fetch -> extract -> batch -> upload cycle."""

from __future__ import annotations

import os
from typing import Protocol, Sequence

from kurs_lark.config import LarkSettings, parse_fetcher
from kurs_lark.exceptions import ScrapeFailedError
from kurs_lark.ingestion.collector import RateCollector
from kurs_lark.ingestion.fetchers import build_fetcher
from kurs_lark.ingestion.models import RunResult, SourceConfig
from kurs_lark.ingestion.sources import BANK_CONFIGS, validate_sources
from kurs_lark.ingestion.strategy import PageFetcher
from kurs_lark.publishing.batch import BatchJoiner, RateBatch, UploadRows
from kurs_lark.publishing.lark import LarkSheetsClient
from kurs_lark.utils.clock import Clock, utc_now
from kurs_lark.utils.logger import get_logger

LOGGER = get_logger(__name__)


class SheetPublisher(Protocol):
    def publish(self, rows: UploadRows) -> object:
        ...  # pragma: no cover - protocol definition


def run_forex_scraper(
    settings: LarkSettings | None = None,
    *,
    sources: Sequence[SourceConfig] | None = None,
    fetcher: PageFetcher | None = None,
    publisher: SheetPublisher | None = None,
    dry_run: bool = False,
    clock: Clock = utc_now,
) -> RunResult:
    """Scrape every source once and append the combined rows to Lark.

    The run succeeds when at least one source produced a rate. Rows are only
    uploaded when every source reported; a partial batch is dropped at the end
    of the run. Publishing errors propagate to the caller.
    """

    if settings is None and not dry_run:
        settings = LarkSettings.from_env()
    configs = validate_sources(sources if sources is not None else BANK_CONFIGS.values())

    if fetcher is None:
        kind = settings.fetcher if settings else parse_fetcher(os.environ.get("KURS_FETCHER"))
        fetcher = build_fetcher(kind)
    if publisher is None and not dry_run:
        publisher = LarkSheetsClient.from_settings(settings)

    batch = RateBatch((config.name for config in configs))
    joiner = BatchJoiner(
        batch,
        configs,
        publish=None if dry_run else publisher.publish,
        clock=clock,
    )
    LOGGER.info(
        "Starting forex scraper for %s (run %s)",
        ", ".join(config.name for config in configs),
        batch.run_id,
    )
    try:
        result = RateCollector(fetcher).collect_all(configs, on_result=joiner.record)
    finally:
        if len(batch):
            LOGGER.warning(
                "Discarding incomplete batch for run %s; missing %s",
                batch.run_id,
                sorted(batch.missing),
            )
        batch.clear()

    result.run_id = batch.run_id
    result.published = joiner.published
    if not result.success:
        raise ScrapeFailedError(result.errors)
    LOGGER.info(
        "Forex scraping completed. %s/%s banks successful",
        len(result.results),
        len(configs),
    )
    return result


__all__ = ["run_forex_scraper", "SheetPublisher"]
