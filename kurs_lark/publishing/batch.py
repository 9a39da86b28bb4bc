"""Per-run batching of extracted rates into spreadsheet rows."""

from __future__ import annotations

import threading
import uuid
from datetime import datetime
from typing import Callable, Iterable, Mapping, Sequence

from kurs_lark.ingestion.models import ExtractedRate, SourceConfig
from kurs_lark.utils.clock import Clock, sheet_date, sheet_time, utc_now
from kurs_lark.utils.logger import get_logger

LOGGER = get_logger(__name__)

# Columns A:K -> Date, Type, Cut Off Time, Gotrade Indo, Gotrade Global,
# Pluang, Reku, CIMB, BCA, two spare columns.
SHEET_WIDTH = 11
SHEET_RANGE = "A:K"
FIRST_SOURCE_COLUMN = 3
DEPOSIT = "Deposit"
WITHDRAWAL = "Withdrawal"

Cell = str | int | float
UploadRows = list[list[Cell]]
Publish = Callable[[UploadRows], object]


class RateBatch:
    """Rates gathered for a single run, keyed by source name."""

    def __init__(self, expected: Iterable[str], *, run_id: str | None = None) -> None:
        self.run_id = run_id or uuid.uuid4().hex
        self.expected = frozenset(expected)
        self._rates: dict[str, ExtractedRate] = {}
        self._lock = threading.Lock()

    def add(self, rate: ExtractedRate) -> None:
        if rate.source not in self.expected:
            raise ValueError(f"Unexpected source {rate.source!r} for run {self.run_id}")
        with self._lock:
            self._rates[rate.source] = rate

    def snapshot(self) -> dict[str, ExtractedRate]:
        with self._lock:
            return dict(self._rates)

    @property
    def is_complete(self) -> bool:
        with self._lock:
            return self._rates.keys() == self.expected

    @property
    def missing(self) -> set[str]:
        with self._lock:
            return set(self.expected - self._rates.keys())

    def clear(self) -> None:
        with self._lock:
            self._rates.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._rates)

    def __contains__(self, source: object) -> bool:
        with self._lock:
            return source in self._rates


def _cell(value: float) -> Cell:
    return int(value) if float(value).is_integer() else value


def build_upload_rows(
    rates: Mapping[str, ExtractedRate],
    sources: Sequence[SourceConfig],
    now: datetime,
) -> UploadRows:
    """Build the Deposit (buy) and Withdrawal (sell) rows for one batch.

    Each source writes into its own ``column``; everything else except the
    date, type and cut-off time stays blank.
    """

    date_text = sheet_date(now)
    time_text = sheet_time(now)
    deposit: list[Cell] = [date_text, DEPOSIT, time_text] + [""] * (SHEET_WIDTH - 3)
    withdrawal: list[Cell] = [date_text, WITHDRAWAL, time_text] + [""] * (SHEET_WIDTH - 3)
    for source in sources:
        if not FIRST_SOURCE_COLUMN <= source.column < SHEET_WIDTH:
            raise ValueError(f"Column {source.column} for {source.name} is outside {SHEET_RANGE}")
        rate = rates.get(source.name)
        if rate is None:
            continue
        deposit[source.column] = _cell(rate.buy_rate)
        withdrawal[source.column] = _cell(rate.sell_rate)
    return [deposit, withdrawal]


class BatchJoiner:
    """Record rates as they arrive and publish once every source has reported."""

    def __init__(
        self,
        batch: RateBatch,
        sources: Sequence[SourceConfig],
        *,
        publish: Publish | None = None,
        clock: Clock = utc_now,
    ) -> None:
        names = {source.name for source in sources}
        if names != batch.expected:
            raise ValueError("Batch and source list disagree on the expected sources")
        self.batch = batch
        self.sources = tuple(sources)
        self.publish = publish
        self.clock = clock
        self.published = False

    def record(self, rate: ExtractedRate) -> UploadRows | None:
        self.batch.add(rate)
        LOGGER.info(
            "Stored %s rates: Buy %s, Sell %s (run %s)",
            rate.source,
            rate.buy_rate,
            rate.sell_rate,
            self.batch.run_id,
        )
        if not self.batch.is_complete:
            return None

        try:
            rows = build_upload_rows(self.batch.snapshot(), self.sources, self.clock())
            if self.publish is None:
                LOGGER.info("Dry run; not uploading rows %s", rows)
            else:
                self.publish(rows)
                self.published = True
                LOGGER.info("Combined data sent to spreadsheet (run %s)", self.batch.run_id)
            return rows
        finally:
            self.batch.clear()


__all__ = [
    "RateBatch",
    "BatchJoiner",
    "build_upload_rows",
    "UploadRows",
    "SHEET_WIDTH",
    "SHEET_RANGE",
    "DEPOSIT",
    "WITHDRAWAL",
]
