from __future__ import annotations

import pytest

from kurs_lark.config import DEFAULT_PORT, LARK_BASE_URL, LarkSettings, parse_port
from kurs_lark.exceptions import ConfigError

ENV = {
    "LARK_APP_ID": "cli_app",
    "LARK_APP_SECRET": "s3cret",
    "LARK_SPREADSHEET_TOKEN": "sheetToken",
}


def test_from_env_reads_required_values_and_defaults():
    settings = LarkSettings.from_env(ENV)

    assert settings.app_id == "cli_app"
    assert settings.spreadsheet_token == "sheetToken"
    assert settings.fetcher == "requests"
    assert settings.base_url == LARK_BASE_URL


def test_from_env_lists_every_missing_variable():
    with pytest.raises(ConfigError) as excinfo:
        LarkSettings.from_env({"LARK_APP_ID": "cli_app", "LARK_APP_SECRET": "  "})

    message = str(excinfo.value)
    assert "LARK_APP_SECRET" in message
    assert "LARK_SPREADSHEET_TOKEN" in message
    assert "LARK_APP_ID" not in message


def test_from_env_reads_optional_values():
    settings = LarkSettings.from_env(
        {**ENV, "KURS_FETCHER": "Selenium", "LARK_BASE_URL": "https://x/open-apis/"}
    )

    assert settings.fetcher == "selenium"
    assert settings.base_url == "https://x/open-apis"


@pytest.mark.parametrize("port", ["eighty", "0", "70000"])
def test_parse_port_rejects_bad_values(port):
    with pytest.raises(ConfigError):
        parse_port(port)


@pytest.mark.parametrize(("value", "expected"), [(None, DEFAULT_PORT), ("  ", DEFAULT_PORT), ("9090", 9090)])
def test_parse_port_defaults_and_parses(value, expected):
    assert parse_port(value) == expected


def test_from_env_ignores_port():
    settings = LarkSettings.from_env({**ENV, "PORT": "eighty"})

    assert settings.app_id == "cli_app"


def test_from_env_rejects_unknown_fetcher():
    with pytest.raises(ConfigError):
        LarkSettings.from_env({**ENV, "KURS_FETCHER": "playwright"})


def test_secret_hidden_from_repr():
    assert "s3cret" not in repr(LarkSettings.from_env(ENV))
