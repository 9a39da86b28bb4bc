"""Helpers for rendering timestamps the way the rate sheet expects them."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable
from zoneinfo import ZoneInfo

JAKARTA_TZ = ZoneInfo("Asia/Jakarta")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(now: datetime | None = None) -> str:
    """Return an ISO-8601 UTC timestamp with millisecond precision."""

    moment = (now or utc_now()).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def sheet_date(now: datetime) -> str:
    """Format ``now`` as ``18 Oct 26`` in Jakarta local time."""

    return _as_jakarta(now).strftime("%d %b %y")


def sheet_time(now: datetime) -> str:
    """Format ``now`` as a 12-hour cut-off time such as ``02:30 PM``."""

    return _as_jakarta(now).strftime("%I:%M %p")


def _as_jakarta(now: datetime) -> datetime:
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(JAKARTA_TZ)
