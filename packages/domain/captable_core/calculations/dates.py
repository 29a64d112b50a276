"""Calendar arithmetic on YYYY-MM-DD strings.

Dates in the record are plain calendar dates. Everything here works on the
parsed (year, month, day) integers, so results never depend on the host's
timezone, DST rules, locale or clock.

Whole-month distance rule:
    months = (end.year - start.year) * 12 + (end.month - start.month)
    minus 1 if end.day < start.day

The day comparison is purely numeric. Jan 31 -> Feb 29 is 0 months (29 < 31)
and Jan 31 -> Mar 1 is 1 month.
"""

import calendar
import re
from typing import NamedTuple, Tuple, Union

from ..errors import DateFormatError

# Date part is captured; an optional time part is range-checked and discarded.
# ASCII digits only, matched against the whole string.
_DATE_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})"
    r"(?:T(?:[01]\d|2[0-3]):[0-5]\d:[0-5]\d(?:\.\d+)?Z?)?",
    re.ASCII,
)


class CalendarDate(NamedTuple):
    """A calendar date with no time-of-day or timezone."""

    year: int
    month: int
    day: int


def days_in_month(year: int, month: int) -> int:
    if month == 2:
        return 29 if calendar.isleap(year) else 28
    if month in (4, 6, 9, 11):
        return 30
    return 31


def parse_date(text: str) -> CalendarDate:
    """Parse ``YYYY-MM-DD`` (optionally followed by ``THH:MM:SS[.fff][Z]``).

    Args:
        text: Date string. A time component, if present, is ignored.

    Returns:
        CalendarDate(year, month, day)

    Raises:
        DateFormatError: Wrong separators, non-numeric fields, month outside
            1-12, or a day that does not exist in that month.

    Example:
        parse_date("2024-02-29")            -> CalendarDate(2024, 2, 29)
        parse_date("2024-02-29T23:59:59Z")  -> CalendarDate(2024, 2, 29)
    """
    if not isinstance(text, str):
        raise DateFormatError(text)

    match = _DATE_RE.fullmatch(text)
    if match is None:
        raise DateFormatError(text)

    year, month, day = (int(part) for part in match.groups())

    if not 1 <= month <= 12:
        raise DateFormatError(text, f"Invalid month {month}")
    if not 1 <= day <= days_in_month(year, month):
        raise DateFormatError(text, f"Invalid day {day} for {year:04d}-{month:02d}")

    return CalendarDate(year, month, day)


def is_valid_date(text: str) -> bool:
    """True if ``parse_date`` accepts ``text``."""
    try:
        parse_date(text)
    except DateFormatError:
        return False
    return True


def format_date(value: Union[CalendarDate, Tuple[int, int, int]]) -> str:
    """Render a (year, month, day) triple as zero-padded ``YYYY-MM-DD``."""
    year, month, day = value
    return f"{year:04d}-{month:02d}-{day:02d}"


def months_between(end_text: str, start_text: str) -> int:
    """Whole months from ``start_text`` to ``end_text``.

    Negative when ``end_text`` precedes ``start_text``.

    Example:
        months_between("2025-01-15", "2024-01-15")  -> 12
        months_between("2024-02-29", "2024-01-31")  -> 0
        months_between("2024-03-01", "2024-01-31")  -> 1
        months_between("2024-01-01", "2024-03-01")  -> -2
    """
    end = parse_date(end_text)
    start = parse_date(start_text)

    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day:
        months -= 1
    return months


def add_months(text: str, months: int) -> str:
    """Earliest date at which ``months_between(result, text) == months``.

    That is the same day number ``months`` later, or the first of the
    following month when that day does not exist (Jan 31 + 1 -> Mar 1).

    Raises:
        ValueError: If ``months`` is negative.
    """
    if months < 0:
        raise ValueError(f"months must be non-negative, got {months}")

    start = parse_date(text)
    index = start.year * 12 + (start.month - 1) + months
    year, month = divmod(index, 12)
    month += 1

    if start.day <= days_in_month(year, month):
        return format_date((year, month, start.day))

    # Roll to the first of the next month
    year, month = divmod(index + 1, 12)
    return format_date((year, month + 1, 1))
