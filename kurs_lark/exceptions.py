"""Exception hierarchy raised across the scraping and publishing layers."""

from __future__ import annotations


class KursLarkError(Exception):
    """Base class for every error raised by :mod:`kurs_lark`."""


class ConfigError(KursLarkError):
    """Required configuration is missing or invalid."""


class SourceError(KursLarkError):
    """A single bank source could not produce a rate."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(message)
        self.source = source

    def __str__(self) -> str:
        return f"{self.source}: {super().__str__()}"


class FetchError(SourceError):
    """The page was unreachable, timed out or never rendered the rate table."""


class ExtractError(SourceError):
    """The page was fetched but no usable USD row could be read from it."""


class PublishError(KursLarkError):
    """Base class for Lark Sheets failures."""


class AuthError(PublishError):
    """The tenant access token could not be obtained."""


class SheetLookupError(PublishError):
    """The destination sheet could not be resolved."""


class WriteError(PublishError):
    """Appending rows to the sheet failed."""


class ScrapeFailedError(KursLarkError):
    """Every configured source failed during a run."""

    def __init__(self, errors: list[str]) -> None:
        detail = "; ".join(errors) if errors else "no sources configured"
        super().__init__(f"All scrapers failed: {detail}")
        self.errors = list(errors)


__all__ = [
    "KursLarkError",
    "ConfigError",
    "SourceError",
    "FetchError",
    "ExtractError",
    "PublishError",
    "AuthError",
    "SheetLookupError",
    "WriteError",
    "ScrapeFailedError",
]
