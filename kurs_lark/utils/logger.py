"""Logging utilities for the kurs_lark package."""

from __future__ import annotations

import logging
import os
from typing import Optional

_CONFIGURED_LEVEL: Optional[int] = None


def get_logger(name: str = "kurs_lark") -> logging.Logger:
    """Return a logger, configuring the root handler on first use.

    The level is read once from ``LOG_LEVEL`` (default ``INFO``).
    """
    global _CONFIGURED_LEVEL
    if _CONFIGURED_LEVEL is None:
        level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
        _CONFIGURED_LEVEL = getattr(logging, level_name, logging.INFO)
        logging.basicConfig(
            level=_CONFIGURED_LEVEL,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
    return logging.getLogger(name)
