from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

from dateutil import parser as date_parser

Clock = Callable[[], datetime]

TZINFOS = {
    "GMT": timezone.utc,
    "UTC": timezone.utc,
    "Z": timezone.utc,
    "EST": timezone(timedelta(hours=-5)),
    "EDT": timezone(timedelta(hours=-4)),
    "CST": timezone(timedelta(hours=-6)),
    "CDT": timezone(timedelta(hours=-5)),
    "PST": timezone(timedelta(hours=-8)),
    "PDT": timezone(timedelta(hours=-7)),
    "BRT": timezone(timedelta(hours=-3)),
}

# shorter digit strings ("12", "2026") are not epochs
_EPOCH_MIN_DIGITS = 9
# epoch values with more digits than this are milliseconds
_EPOCH_SECONDS_MAX_DIGITS = 10


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso_utc(dt: datetime) -> str:
    """Format as ISO-8601 UTC with millisecond precision and a Z suffix."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str | None, default: datetime | None = None) -> datetime | None:
    """
    Parse a free-form date/time string or epoch number.

    Returns None when the value is absent, not a date, or out of range.
    Parts missing from the text (the date in "10:30") come from `default`
    rather than the system clock. Naive results are UTC.
    """
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None

    if default is not None and default.tzinfo is not None:
        default = default.astimezone(timezone.utc).replace(tzinfo=None)

    try:
        if text.isdigit():
            if len(text) < _EPOCH_MIN_DIGITS:
                return None
            n = int(text)
            if len(text) > _EPOCH_SECONDS_MAX_DIGITS:
                return datetime.fromtimestamp(n / 1000, tz=timezone.utc)
            return datetime.fromtimestamp(n, tz=timezone.utc)

        dt = date_parser.parse(text, default=default, tzinfos=TZINFOS)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None
