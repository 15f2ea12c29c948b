"""Calendar period helpers: week of month, paycheck period, weekends."""

from __future__ import annotations

import math
from datetime import date, datetime


def parse_date(value) -> date:
    """
    Parse a calendar date without going through a timezone-aware parser.

    Strings are split into their numeric year/month/day components so a
    ``YYYY-MM-DD`` value can never shift by a day.

    Args:
        value: ``date``, ``datetime`` (including pandas Timestamps) or ``YYYY-MM-DD`` string

    Returns:
        The calendar date

    Raises:
        ValueError: If the value is not a recognisable date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip() if value is not None else ""
    # tolerate a trailing time component, e.g. "2024-06-03 00:00:00"
    parts = text.split(" ")[0].split("T")[0].split("-")
    if len(parts) != 3:
        raise ValueError(f"Invalid date {value!r}: expected YYYY-MM-DD")
    try:
        year, month, day = (int(p) for p in parts)
        return date(year, month, day)
    except ValueError as e:
        raise ValueError(f"Invalid date {value!r}: {e}") from e


def week_of_month(day) -> int:
    """Week index 1..4 counted in 7-day buckets from the first of the month."""
    d = parse_date(day)
    return max(1, min(4, math.ceil(d.day / 7)))


def paycheck_period(day) -> int:
    """Paycheck period: weeks 1-2 are period 1, weeks 3-4 are period 2."""
    return 1 if week_of_month(day) <= 2 else 2


def same_week(first, second) -> bool:
    return week_of_month(first) == week_of_month(second)


def same_paycheck_period(first, second) -> bool:
    return paycheck_period(first) == paycheck_period(second)


def same_month(first, second) -> bool:
    a, b = parse_date(first), parse_date(second)
    return (a.year, a.month) == (b.year, b.month)


def is_weekend(day) -> bool:
    """True for Saturday and Sunday."""
    return parse_date(day).weekday() >= 5


def days_between(first, second) -> int:
    """Absolute number of calendar days separating two dates."""
    return abs((parse_date(second) - parse_date(first)).days)
