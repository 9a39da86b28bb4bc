"""Concurrent fetch + extract across every configured bank."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Callable, Sequence

from kurs_lark.exceptions import ExtractError, KursLarkError
from kurs_lark.ingestion.extractor import extract_rate
from kurs_lark.ingestion.models import TARGET_CURRENCY, ExtractedRate, RunResult, SourceConfig
from kurs_lark.ingestion.strategy import PageFetcher
from kurs_lark.utils.logger import get_logger

LOGGER = get_logger(__name__)

ResultCallback = Callable[[ExtractedRate], object]


class RateCollector:
    """Run one fetch + extract per source and wait for all of them to settle.

    A failing source never cancels the others. Successful extractions are
    handed to ``on_result`` as soon as they complete, on the calling thread.
    """

    def __init__(self, fetcher: PageFetcher, *, max_workers: int | None = None) -> None:
        self.fetcher = fetcher
        self.max_workers = max_workers

    def scrape_source(self, config: SourceConfig) -> ExtractedRate:
        page = self.fetcher.fetch(config)
        rate = extract_rate(page, config)
        if rate is None:
            raise ExtractError(config.name, f"{TARGET_CURRENCY} data not found")
        LOGGER.info("%s: Buy %s, Sell %s", config.name, rate.buy_rate, rate.sell_rate)
        return rate

    def collect_all(
        self,
        configs: Sequence[SourceConfig],
        *,
        on_result: ResultCallback | None = None,
    ) -> RunResult:
        if not configs:
            return RunResult(success=False, errors=["No sources configured"])

        successes: dict[str, ExtractedRate] = {}
        failures: dict[str, str] = {}
        workers = self.max_workers or len(configs)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="kurs") as executor:
            futures: dict[Future[ExtractedRate], SourceConfig] = {
                executor.submit(self.scrape_source, config): config for config in configs
            }
            for future in as_completed(futures):
                config = futures[future]
                try:
                    rate = future.result()
                except KursLarkError as exc:
                    LOGGER.error("%s scraper failed: %s", config.name, exc)
                    failures[config.name] = str(exc)
                    continue
                except Exception as exc:  # noqa: BLE001
                    LOGGER.exception("%s scraper crashed", config.name)
                    failures[config.name] = f"{config.name}: {exc}"
                    continue
                successes[config.name] = rate
                if on_result is not None:
                    on_result(rate)

        ordered = [successes[c.name] for c in configs if c.name in successes]
        errors = [failures[c.name] for c in configs if c.name in failures]
        if errors:
            LOGGER.warning("Some scrapers failed: %s", errors)
        return RunResult(success=bool(ordered), results=ordered, errors=errors)


__all__ = ["RateCollector", "ResultCallback"]
