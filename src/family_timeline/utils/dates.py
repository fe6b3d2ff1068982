"""Date handling shared by the validator and the change differ.

Form surfaces and audit snapshots hand us dates in whatever shape they
were stored: ``date`` objects, ISO strings, ISO timestamps with a ``Z``
suffix, US-style ``6/9/1932`` or GEDCOM-style ``9 JUN 1932``. Everything
here works on full calendar dates; a year-only value is not a date.
"""

from __future__ import annotations

import re
from datetime import date, datetime

DateInput = date | datetime | str | None

# Month name mappings
MONTH_NAMES = {
    "january": 1, "jan": 1,
    "february": 2, "feb": 2,
    "march": 3, "mar": 3,
    "april": 4, "apr": 4,
    "may": 5,
    "june": 6, "jun": 6,
    "july": 7, "jul": 7,
    "august": 8, "aug": 8,
    "september": 9, "sep": 9, "sept": 9,
    "october": 10, "oct": 10,
    "november": 11, "nov": 11,
    "december": 12, "dec": 12,
}

_ISO_DATE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
_US_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_DAY_MONTH_YEAR = re.compile(r"^(\d{1,2})\s+([a-z]+)\.?\s+(\d{4})$")
_MONTH_DAY_YEAR = re.compile(r"^([a-z]+)\.?\s+(\d{1,2}),?\s+(\d{4})$")


def is_blank(value: DateInput) -> bool:
    """True for ``None`` and for strings that are empty after stripping."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def parse_date(value: DateInput) -> date | None:
    """Parse a stored or user-entered date.

    Args:
        value: A ``date``, ``datetime`` or date string

    Returns:
        The calendar date, or None when the value is blank

    Raises:
        ValueError: If the value is not blank but is not a full date
    """
    if is_blank(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Unsupported date value: {value!r}")

    text = value.strip()

    if match := _ISO_DATE.match(text):
        year, month, day = (int(g) for g in match.groups())
        return date(year, month, day)

    if text[:4].isdigit() and ("T" in text or " " in text):
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            pass

    if match := _US_DATE.match(text):
        month, day, year = (int(g) for g in match.groups())
        return date(year, month, day)

    lowered = text.lower()

    if match := _DAY_MONTH_YEAR.match(lowered):
        day, month_name, year = match.groups()
        if month_name in MONTH_NAMES:
            return date(int(year), MONTH_NAMES[month_name], int(day))

    if match := _MONTH_DAY_YEAR.match(lowered):
        month_name, day, year = match.groups()
        if month_name in MONTH_NAMES:
            return date(int(year), MONTH_NAMES[month_name], int(day))

    raise ValueError(f"Not a valid date: {value!r}")


def try_parse_date(value: DateInput) -> date | None:
    """Like ``parse_date`` but returns None for malformed input too."""
    try:
        return parse_date(value)
    except ValueError:
        return None


def add_years(start: date, years: int) -> date:
    """Add calendar years to a date.

    A 29 February with no counterpart in the target year rolls forward
    to 1 March.
    """
    try:
        return start.replace(year=start.year + years)
    except ValueError:
        return date(start.year + years, 3, 1)


def format_display_date(value: DateInput, style: str = "us") -> str | None:
    """Render a date for change-log display.

    Unparseable text is returned as given so the reader still sees what
    was stored.
    """
    if is_blank(value):
        return None
    parsed = try_parse_date(value)
    if parsed is None:
        return str(value)
    if style == "iso":
        return parsed.isoformat()
    return f"{parsed.month}/{parsed.day}/{parsed.year}"
