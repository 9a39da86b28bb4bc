"""Locate the USD row on a bank rate page and normalise its figures."""

from __future__ import annotations

import re
from typing import Iterator

from bs4 import BeautifulSoup, Tag

from kurs_lark.exceptions import ExtractError
from kurs_lark.ingestion.models import (
    TARGET_CURRENCY,
    ExtractedRate,
    NumberLocale,
    SourceConfig,
)
from kurs_lark.utils.logger import get_logger

LOGGER = get_logger(__name__)

_NON_NUMERIC = re.compile(r"[^\d.,]")
_DECIMAL = re.compile(r"^\d+(\.\d*)?$")


def normalise_number(text: str, locale: NumberLocale) -> float:
    """Convert a bank-formatted figure into a float.

    Everything except digits, commas and periods is discarded first, then the
    separators are resolved according to ``locale``. ``COMMA_THOUSANDS``
    figures are whole numbers; any fractional tail is dropped.
    """

    cleaned = _NON_NUMERIC.sub("", text)
    if locale is NumberLocale.COMMA_THOUSANDS:
        whole, _, _ = cleaned.replace(",", "").partition(".")
        if not whole.isdigit():
            raise ValueError(f"Cannot parse {text!r} as a comma-grouped number")
        return float(int(whole))
    if locale is NumberLocale.DOT_THOUSANDS_COMMA_DECIMAL:
        candidate = cleaned.replace(".", "")
        if candidate.count(",") > 1:
            raise ValueError(f"Cannot parse {text!r}: more than one decimal comma")
        candidate = candidate.replace(",", ".")
        if not _DECIMAL.match(candidate):
            raise ValueError(f"Cannot parse {text!r} as a dot-grouped number")
        return float(candidate)
    raise ValueError(f"Unsupported number locale: {locale!r}")


def _cell_text(cell: Tag) -> str:
    return " ".join(cell.stripped_strings).strip()


def iter_rows(page: BeautifulSoup, selector: str) -> Iterator[list[str]]:
    """Yield the trimmed ``td`` texts of every row matching ``selector``."""

    for row in page.select(selector):
        yield [_cell_text(cell) for cell in row.find_all("td")]


def extract_rate(page: BeautifulSoup | str, config: SourceConfig) -> ExtractedRate | None:
    """Return the first qualifying USD row of ``page`` or ``None``.

    A row qualifies when its currency cell matches (exactly or as a substring,
    per ``config.currency_match``) and both the buy and sell cells carry a
    figure. Rows with too few cells are skipped.
    """

    if isinstance(page, str):
        page = BeautifulSoup(page, "html.parser")

    for cells in iter_rows(page, config.selector):
        if len(cells) < config.min_cells:
            continue
        if not config.currency_match.matches(cells[config.currency_cell], TARGET_CURRENCY):
            continue
        buy_text = cells[config.buy_cell]
        sell_text = cells[config.sell_cell]
        if not _has_digits(buy_text) or not _has_digits(sell_text):
            LOGGER.debug("%s: skipping USD row with empty figures %r", config.name, cells)
            continue
        try:
            buy_rate = normalise_number(buy_text, config.number_locale)
            sell_rate = normalise_number(sell_text, config.number_locale)
        except ValueError as exc:
            raise ExtractError(config.name, str(exc)) from exc
        return ExtractedRate(source=config.name, buy_rate=buy_rate, sell_rate=sell_rate)
    return None


def _has_digits(text: str) -> bool:
    return any(char.isdigit() for char in text)


__all__ = ["normalise_number", "extract_rate", "iter_rows"]
