"""Public interface for the kurs_lark package."""

from __future__ import annotations

from importlib import metadata as importlib_metadata

from kurs_lark.config import LarkSettings
from kurs_lark.exceptions import (
    AuthError,
    ConfigError,
    ExtractError,
    FetchError,
    KursLarkError,
    PublishError,
    ScrapeFailedError,
    SheetLookupError,
    WriteError,
)
from kurs_lark.ingestion.models import ExtractedRate, RunResult, SourceConfig
from kurs_lark.ingestion.sources import BANK_CONFIGS

__all__ = [
    "__version__",
    "BANK_CONFIGS",
    "ExtractedRate",
    "LarkSettings",
    "RunResult",
    "SourceConfig",
    "run_forex_scraper",
    "create_app",
    "KursLarkError",
    "ConfigError",
    "FetchError",
    "ExtractError",
    "PublishError",
    "AuthError",
    "SheetLookupError",
    "WriteError",
    "ScrapeFailedError",
]

try:
    __version__ = importlib_metadata.version("kurs-lark")
except importlib_metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"


def run_forex_scraper(*args, **kwargs) -> RunResult:
    from kurs_lark.pipeline import run_forex_scraper as _run_forex_scraper

    return _run_forex_scraper(*args, **kwargs)


def create_app(*args, **kwargs):
    from kurs_lark.server import create_app as _create_app

    return _create_app(*args, **kwargs)
