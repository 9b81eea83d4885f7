"""Parsing and formatting of node update times for the CLI.

Accepts ISO dates ("2025-01-15"), "today", "yesterday" and
"N <unit>(s) ago" for minute/hour/day/week/month/year.
"""

import re
from datetime import datetime, timedelta, timezone

from dateutil import parser as dateparser
from dateutil.relativedelta import relativedelta

from .utils import plural

_AGO_PATTERN = re.compile(r"^(\d+)\s*(minute|hour|day|week|month|year)s?\s+ago$")

_UNITS = (
    ("year", relativedelta(years=1)),
    ("month", relativedelta(months=1)),
    ("week", relativedelta(weeks=1)),
    ("day", relativedelta(days=1)),
    ("hour", relativedelta(hours=1)),
    ("minute", relativedelta(minutes=1)),
)


def parse_since(ref: str, now: datetime | None = None) -> datetime:
    """Turn a time reference into a timezone-aware UTC datetime.

    Raises:
        ValueError: If the reference cannot be parsed
    """
    now = now or datetime.now(timezone.utc)
    ref = ref.strip().lower()
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)

    if ref == "today":
        return midnight
    if ref == "yesterday":
        return midnight - timedelta(days=1)

    match = _AGO_PATTERN.match(ref)
    if match:
        amount, unit = int(match.group(1)), match.group(2)
        return now - relativedelta(**{f"{unit}s": amount})

    try:
        parsed = dateparser.parse(ref)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Cannot parse time reference: {ref}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_age(ts: datetime | None, now: datetime | None = None) -> str:
    """Describe how long ago ``ts`` was, e.g. "3 days ago"; "never" for None."""
    if ts is None:
        return "never"
    now = now or datetime.now(timezone.utc)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    if ts > now:
        return "in the future"

    for unit, step in _UNITS:
        count = 0
        while ts + step * (count + 1) <= now:
            count += 1
        if count:
            return f"{plural(count, unit)} ago"
    return "just now"
