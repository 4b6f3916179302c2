"""Normalize "Mon DD" style byline dates into YYYY/M/D."""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

from scrape_articles.errors import InvalidDayError, MalformedDateError

MONTH_NAMES = ["jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec"]

_DIGITS = re.compile(r"\d+")
_LETTERS = re.compile(r"[A-Za-z]+")


@dataclass(frozen=True)
class ParsedDate:
    """Month (1-12) and day tokens read from a raw date string."""
    month: int
    day: int


def get_month(raw_date: str) -> Optional[int]:
    """Return the 1-based month for the first alphabetic token, or None."""
    match = _LETTERS.search(raw_date)
    if match is None:
        return None
    prefix = match.group(0)[:3].lower()
    if prefix not in MONTH_NAMES:
        return None
    return MONTH_NAMES.index(prefix) + 1


def get_day(raw_date: str) -> Optional[int]:
    """Return the first run of digits as an int, or None."""
    match = _DIGITS.search(raw_date)
    return int(match.group(0)) if match else None


def parse_raw_date(raw_date: str) -> ParsedDate:
    """Split a raw date string into month and day tokens.

    Raises:
        MalformedDateError: If either token is missing.
    """
    if not raw_date:
        raise MalformedDateError(raw_date or "", "empty date")

    month = get_month(raw_date)
    if month is None:
        raise MalformedDateError(raw_date, "no month name found")

    day = get_day(raw_date)
    if day is None:
        raise MalformedDateError(raw_date, "no day found")

    return ParsedDate(month=month, day=day)


def format_canonical_date(value: date) -> str:
    """Render a date as YYYY/M/D without zero padding."""
    return f"{value.year}/{value.month}/{value.day}"


def normalize_date(raw_date: str, reference_year: int) -> str:
    """Normalize a raw date such as "Mar 14" using the given year.

    Out-of-range days are rejected rather than rolled into the next month.

    Args:
        raw_date: Free-form date text from the listing page.
        reference_year: Year to assume, normally the current year.

    Returns:
        The canonical date string, e.g. "2024/3/14".

    Raises:
        MalformedDateError: If no month name or day is present.
        InvalidDayError: If the day does not exist in that month and year.
    """
    parsed = parse_raw_date(raw_date)

    days_in_month = calendar.monthrange(reference_year, parsed.month)[1]
    if not 1 <= parsed.day <= days_in_month:
        raise InvalidDayError(
            raw_date,
            f"day {parsed.day} out of range for {MONTH_NAMES[parsed.month - 1]} {reference_year}",
        )

    return format_canonical_date(date(reference_year, parsed.month, parsed.day))
