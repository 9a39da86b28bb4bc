"""Process configuration read from the hosting environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

from kurs_lark.exceptions import ConfigError

LARK_BASE_URL = "https://open.larksuite.com/open-apis"
DEFAULT_PORT = 8080
FETCHER_CHOICES = ("requests", "selenium")

_REQUIRED_VARIABLES = {
    "app_id": "LARK_APP_ID",
    "app_secret": "LARK_APP_SECRET",
    "spreadsheet_token": "LARK_SPREADSHEET_TOKEN",
}


@dataclass(frozen=True, slots=True)
class LarkSettings:
    """Credentials and runtime knobs for one deployment."""

    app_id: str
    app_secret: str = field(repr=False)
    spreadsheet_token: str
    fetcher: str = "requests"
    base_url: str = LARK_BASE_URL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "LarkSettings":
        """Build settings from environment variables.

        ``LARK_APP_ID``, ``LARK_APP_SECRET`` and ``LARK_SPREADSHEET_TOKEN`` are
        required. ``KURS_FETCHER`` defaults to ``requests``. ``PORT`` is only read by the
        HTTP server, see :func:`parse_port`.
        """

        env = os.environ if environ is None else environ
        values = {key: (env.get(var) or "").strip() for key, var in _REQUIRED_VARIABLES.items()}
        missing = [_REQUIRED_VARIABLES[key] for key, value in values.items() if not value]
        if missing:
            raise ConfigError(
                "Missing required Lark configuration: "
                f"{', '.join(missing)}. Please check environment variables."
            )
        return cls(
            **values,
            fetcher=parse_fetcher(env.get("KURS_FETCHER")),
            base_url=(env.get("LARK_BASE_URL") or LARK_BASE_URL).rstrip("/"),
        )


def parse_port(value: str | None) -> int:
    if value is None or not value.strip():
        return DEFAULT_PORT
    try:
        port = int(value)
    except ValueError as exc:
        raise ConfigError(f"PORT must be an integer, got {value!r}") from exc
    if not 0 < port < 65536:
        raise ConfigError(f"PORT out of range: {port}")
    return port


def parse_fetcher(value: str | None) -> str:
    if value is None or not value.strip():
        return "requests"
    choice = value.strip().lower()
    if choice not in FETCHER_CHOICES:
        raise ConfigError(
            f"KURS_FETCHER must be one of {', '.join(FETCHER_CHOICES)}, got {value!r}"
        )
    return choice


__all__ = ["LarkSettings", "LARK_BASE_URL", "DEFAULT_PORT", "parse_port", "parse_fetcher"]
