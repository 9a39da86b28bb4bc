"""Data models shared across ingestion and publishing modules."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

TARGET_CURRENCY = "USD"


class NumberLocale(str, Enum):
    """How a bank writes its figures."""

    # ``15,234`` -> 15234; no fractional part is published.
    COMMA_THOUSANDS = "comma_thousands"
    # ``15.234,56`` -> 15234.56
    DOT_THOUSANDS_COMMA_DECIMAL = "dot_thousands_comma_decimal"


class CurrencyMatch(str, Enum):
    """How the currency cell is compared with the target currency."""

    EXACT = "exact"
    CONTAINS = "contains"

    def matches(self, cell_text: str, currency: str = TARGET_CURRENCY) -> bool:
        if self is CurrencyMatch.EXACT:
            return cell_text == currency
        return currency in cell_text


@dataclass(frozen=True, slots=True)
class SourceConfig:
    """Static description of one bank's rate page."""

    name: str
    url: str
    selector: str
    number_locale: NumberLocale
    currency_match: CurrencyMatch
    column: int
    currency_cell: int = 0
    buy_cell: int = 1
    sell_cell: int = 2

    @property
    def min_cells(self) -> int:
        return max(3, self.currency_cell + 1, self.buy_cell + 1, self.sell_cell + 1)


@dataclass(frozen=True, slots=True)
class ExtractedRate:
    """USD buy/sell figures read from one bank page."""

    source: str
    buy_rate: float
    sell_rate: float
    currency: str = TARGET_CURRENCY

    def __post_init__(self) -> None:
        if self.currency != TARGET_CURRENCY:
            raise ValueError(f"Unsupported currency {self.currency!r}; expected {TARGET_CURRENCY}")
        for label, value in (("buy_rate", self.buy_rate), ("sell_rate", self.sell_rate)):
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{label} must be a finite non-negative number, got {value!r}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "bank": self.source,
            "currency": self.currency,
            "buyRate": self.buy_rate,
            "sellRate": self.sell_rate,
        }


@dataclass(slots=True)
class RunResult:
    """Outcome of one collection run."""

    success: bool
    results: list[ExtractedRate] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    run_id: str | None = None
    published: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "results": [rate.to_dict() for rate in self.results],
            "errors": list(self.errors),
            "runId": self.run_id,
            "published": self.published,
        }


__all__ = [
    "TARGET_CURRENCY",
    "NumberLocale",
    "CurrencyMatch",
    "SourceConfig",
    "ExtractedRate",
    "RunResult",
]
