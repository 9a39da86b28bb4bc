"""Built-in bank sources scraped on every run."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

from kurs_lark.ingestion.models import CurrencyMatch, NumberLocale, SourceConfig

CIMB = SourceConfig(
    name="CIMB",
    url=(
        "https://www.cimbniaga.co.id/content/cimb/id/personal/treasury/kurs-valas/"
        "jcr:content/responsivegrid/kurs_copy_copy_copy.get-content/"
    ),
    selector="table tr",
    number_locale=NumberLocale.COMMA_THOUSANDS,
    currency_match=CurrencyMatch.EXACT,
    column=7,
)

BCA = SourceConfig(
    name="BCA",
    url="https://www.bca.co.id/id/informasi/kurs",
    selector="table tbody tr",
    number_locale=NumberLocale.DOT_THOUSANDS_COMMA_DECIMAL,
    # BCA prefixes the code with a flag label, e.g. "USD United States Dollar".
    currency_match=CurrencyMatch.CONTAINS,
    column=8,
)

BANK_CONFIGS: Mapping[str, SourceConfig] = MappingProxyType({CIMB.name: CIMB, BCA.name: BCA})


def get_source(name: str) -> SourceConfig:
    """Return the configuration registered for ``name`` (case-insensitive)."""

    try:
        return BANK_CONFIGS[name.upper()]
    except KeyError:
        raise ValueError(f"Unsupported bank: {name}") from None


def validate_sources(sources: Iterable[SourceConfig]) -> tuple[SourceConfig, ...]:
    """Reject duplicate names or overlapping sheet columns."""

    resolved = tuple(sources)
    names = [source.name for source in resolved]
    if len(set(names)) != len(names):
        raise ValueError(f"Duplicate source names in {names}")
    columns = [source.column for source in resolved]
    if len(set(columns)) != len(columns):
        raise ValueError(f"Sources share a sheet column: {columns}")
    return resolved


__all__ = ["BANK_CONFIGS", "CIMB", "BCA", "get_source", "validate_sources"]
