"""
Date and time formatting for note text.

The formatters accept a ``date``, a ``datetime`` or an ISO string and return
an empty string for anything they cannot read, so callers can drop their
output straight into a note without checking for None first.

``resolve_date`` understands the loose phrases people type for due dates
("tomorrow", "next friday", "in 2 weeks") and is used by the task handlers.
"""

import re
from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from vault_notes.constants import EMPTY

DateLike = Union[date, datetime, str, None]

_DAY_NAMES = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
_MONTH_FORMATS = ("%B %d", "%b %d", "%m/%d", "%B %d, %Y", "%b %d, %Y", "%m/%d/%Y")
_RELATIVE = re.compile(r"^in (\d+) (day|days|week|weeks)$")


def parse_date(value: DateLike) -> Optional[datetime]:
    """Return a datetime for a date, datetime or ISO string, else None."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def to_iso(value: DateLike) -> str:
    """2025-10-05"""
    dt = parse_date(value)
    return dt.strftime("%Y-%m-%d") if dt else EMPTY


def to_time_12h(value: DateLike) -> str:
    """9:00 AM"""
    dt = parse_date(value)
    if not dt:
        return EMPTY
    suffix = "PM" if dt.hour >= 12 else "AM"
    return f"{dt.hour % 12 or 12}:{dt.minute:02d} {suffix}"


def to_time_24h(value: DateLike) -> str:
    """09:00"""
    dt = parse_date(value)
    return dt.strftime("%H:%M") if dt else EMPTY


def to_filename(value: DateLike) -> str:
    """Daily note file stem; the same as ``to_iso``."""
    return to_iso(value)


def to_display_date(value: DateLike) -> str:
    """October 5, 2025"""
    dt = parse_date(value)
    return f"{dt:%B} {dt.day}, {dt.year}" if dt else EMPTY


def to_short_date(value: DateLike) -> str:
    """Oct 5, 2025"""
    dt = parse_date(value)
    return f"{dt:%b} {dt.day}, {dt.year}" if dt else EMPTY


def to_day_of_week(value: DateLike) -> str:
    """Monday"""
    dt = parse_date(value)
    return dt.strftime("%A") if dt else EMPTY


def today() -> datetime:
    """Midnight at the start of the current day."""
    return start_of_day(datetime.now())


def start_of_day(value: Union[date, datetime]) -> datetime:
    day = value.date() if isinstance(value, datetime) else value
    return datetime.combine(day, time.min)


def end_of_day(value: Union[date, datetime]) -> datetime:
    # Millisecond precision, matching calendar services
    day = value.date() if isinstance(value, datetime) else value
    return datetime.combine(day, time(23, 59, 59, 999000))


def _next_occurrence(month_day: date, base: date) -> date:
    """The first date on or after base with month_day's month and day."""
    year = base.year
    while True:
        try:
            candidate = month_day.replace(year=year)
        except ValueError:  # Feb 29 outside a leap year
            year += 1
            continue
        if candidate >= base:
            return candidate
        year += 1


def resolve_date(text: str, reference: Optional[date] = None) -> Optional[date]:
    """
    Resolve a loosely written date.

    Supports ISO dates, "today"/"tomorrow"/"asap", weekday names (optionally
    prefixed with "next"), month-day forms such as "March 15" or "3/15", and
    "in N days|weeks". Leading "by", "due", "before" or "on" is ignored.
    Returns None when nothing matches.
    """
    if not text:
        return None

    base = reference or date.today()
    phrase = text.strip().lower()

    for prefix in ("before ", "by ", "due ", "on "):
        if phrase.startswith(prefix):
            phrase = phrase[len(prefix):].strip()
            break

    if phrase in ("today", "now", "asap", "immediately", "urgent"):
        return base
    if phrase == "tomorrow":
        return base + timedelta(days=1)

    try:
        return date.fromisoformat(phrase)
    except ValueError:
        pass

    for fmt in _MONTH_FORMATS:
        try:
            if "%Y" in fmt:
                return datetime.strptime(phrase, fmt).date()
            # 2000 is a leap year, so "feb 29" parses
            month_day = datetime.strptime(f"{phrase} 2000", f"{fmt} %Y").date()
        except ValueError:
            continue
        return _next_occurrence(month_day, base)

    is_next = phrase.startswith("next ")
    day_name = phrase[len("next "):].strip() if is_next else phrase
    if day_name in _DAY_NAMES:
        ahead = _DAY_NAMES.index(day_name) - base.weekday()
        if ahead <= 0 or is_next:
            ahead += 7
        return base + timedelta(days=ahead)

    match = _RELATIVE.match(phrase)
    if match:
        amount = int(match.group(1))
        if match.group(2).startswith("week"):
            return base + timedelta(weeks=amount)
        return base + timedelta(days=amount)

    return None
