"""
Wall-clock and calendar helpers shared by the scheduler.

Times of day are handled as minute-of-day integers and dates as ``YYYY-MM-DD``
strings at the record boundary. None of these helpers raise on malformed
input: bad times read as midnight and bad dates read as ``SENTINEL_DATE``.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta

DATE_FORMAT = "%Y-%m-%d"

_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")

# Earlier than any real date; stands in for missing or unparseable dates.
SENTINEL_DATE = date.min


def _parse_int(value: str) -> int:
    value = value.strip()
    if not _INT_PATTERN.fullmatch(value):
        return 0
    return int(value)


def to_minutes(time_value: str | None) -> int:
    """Convert ``HH:MM`` (extra ``:SS`` ignored) into minutes after midnight."""
    if not time_value:
        return 0
    parts = time_value.split(":")
    if len(parts) < 2:
        return 0
    return _parse_int(parts[0]) * 60 + _parse_int(parts[1])


def to_time_string(minutes: int) -> str:
    """Format minutes after midnight as zero-padded ``HH:MM``."""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def parse_date(value: str | date | None) -> date:
    """Parse a strict ``YYYY-MM-DD`` date, falling back to ``SENTINEL_DATE``."""
    if isinstance(value, date):
        return value
    if not is_valid_date(value):
        return SENTINEL_DATE
    return datetime.strptime(value, DATE_FORMAT).date()


def is_valid_date(value: str | None) -> bool:
    """Whether ``value`` is a real calendar date written as zero-padded ``YYYY-MM-DD``."""
    if not value or not _DATE_PATTERN.fullmatch(value):
        return False
    try:
        datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        return False
    return True


def format_date(value: date) -> str:
    return value.isoformat()


def add_days(value: str | date, days: int) -> date:
    return parse_date(value) + timedelta(days=days)


def next_weekday(value: str | date) -> date:
    """Move forward to the first Monday-Friday on or after ``value``."""
    current = parse_date(value)
    while current.weekday() >= 5:
        current += timedelta(days=1)
    return current
