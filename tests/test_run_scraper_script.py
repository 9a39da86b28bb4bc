from __future__ import annotations

import json

from kurs_lark.exceptions import ConfigError
from kurs_lark.ingestion.models import ExtractedRate, RunResult
from kurs_lark.scripts import run_scraper


def test_main_prints_result_on_success(monkeypatch, capsys):
    captured: dict[str, object] = {}

    def _fake_run(settings, **kwargs):
        captured["settings"] = settings
        captured.update(kwargs)
        return RunResult(
            success=True,
            results=[ExtractedRate(source="CIMB", buy_rate=15230.0, sell_rate=15330.0)],
        )

    monkeypatch.setattr(run_scraper, "run_forex_scraper", _fake_run)
    monkeypatch.setattr(run_scraper, "load_dotenv", lambda: None)

    exit_code = run_scraper.main(["--dry-run", "--bank", "CIMB", "--fetcher", "requests"])

    assert exit_code == 0
    assert captured["settings"] is None
    assert captured["dry_run"] is True
    assert [source.name for source in captured["sources"]] == ["CIMB"]
    output = json.loads(capsys.readouterr().out)
    assert output["results"][0]["bank"] == "CIMB"


def test_main_returns_one_on_failure(monkeypatch):
    def _fake_run(*_args, **_kwargs):
        raise ConfigError("Missing required Lark configuration")

    monkeypatch.setattr(run_scraper, "run_forex_scraper", _fake_run)
    monkeypatch.setattr(run_scraper, "load_dotenv", lambda: None)

    assert run_scraper.main(["--dry-run"]) == 1


def test_main_requires_configuration_without_dry_run(monkeypatch):
    for name in ("LARK_APP_ID", "LARK_APP_SECRET", "LARK_SPREADSHEET_TOKEN"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(run_scraper, "load_dotenv", lambda: None)

    assert run_scraper.main([]) == 1
