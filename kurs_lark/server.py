"""HTTP trigger for the scraper, suitable for Cloud Run + Cloud Scheduler."""

from __future__ import annotations

import os
import threading
from typing import Callable

from dotenv import load_dotenv
from flask import Flask, jsonify

from kurs_lark.config import parse_port
from kurs_lark.exceptions import KursLarkError
from kurs_lark.ingestion.models import RunResult
from kurs_lark.pipeline import run_forex_scraper
from kurs_lark.utils.clock import iso_timestamp
from kurs_lark.utils.logger import get_logger

LOGGER = get_logger(__name__)

Runner = Callable[[], RunResult]


def create_app(runner: Runner = run_forex_scraper) -> Flask:
    """Build the Flask app; ``runner`` executes one pipeline cycle."""

    app = Flask(__name__)
    # Overlapping triggers would append the same rows twice.
    run_lock = threading.Lock()

    def _run() -> RunResult:
        with run_lock:
            return runner()

    @app.get("/")
    def health():
        return jsonify(status="Forex scraper service running", timestamp=iso_timestamp())

    @app.post("/scrape")
    def scrape():
        LOGGER.info("Forex scraper triggered at: %s", iso_timestamp())
        try:
            result = _run()
        except KursLarkError as exc:
            LOGGER.error("Scraping failed: %s", exc)
            return (
                jsonify(success=False, error=str(exc), timestamp=iso_timestamp()),
                500,
            )
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("Scraping crashed")
            return (
                jsonify(success=False, error=str(exc), timestamp=iso_timestamp()),
                500,
            )
        return jsonify(
            success=True,
            message="Forex scraping completed",
            data=result.to_dict(),
            timestamp=iso_timestamp(),
        )

    @app.get("/test")
    def manual_trigger():
        try:
            result = _run()
        except KursLarkError as exc:
            LOGGER.error("Manual scrape failed: %s", exc)
            return jsonify(success=False, error=str(exc)), 500
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("Manual scrape crashed")
            return jsonify(success=False, error=str(exc)), 500
        return jsonify(success=True, data=result.to_dict())

    return app


def main() -> None:  # pragma: no cover - server entry point
    load_dotenv()
    port = parse_port(os.environ.get("PORT"))
    app = create_app()
    LOGGER.info("Server running on port %s", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
