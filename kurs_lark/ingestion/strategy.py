"""Abstractions for pluggable page fetchers."""

from __future__ import annotations

from typing import Protocol

from bs4 import BeautifulSoup

from kurs_lark.ingestion.models import SourceConfig


class PageFetcher(Protocol):
    """Contract for retrieving a bank rate page.

    Implementations return the parsed page once at least one element matching
    ``config.selector`` is present, and raise :class:`~kurs_lark.exceptions.FetchError`
    otherwise. They must be safe to call from several threads at once.
    """

    def fetch(self, config: SourceConfig) -> BeautifulSoup:
        ...  # pragma: no cover - protocol definition


__all__ = ["PageFetcher"]
