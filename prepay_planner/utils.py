"""Utility functions for the prepayment planner.

This module provides helpers for parsing user input into Python data types and
for handling dates: parsing ``YYYY-MM-DD``/``YYYY-MM`` strings, adding months,
normalizing to the first day of a month and counting whole months between two
dates. It uses Python's ``datetime`` module to calculate month offsets.
"""

from __future__ import annotations

import calendar
import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, getcontext
from typing import Optional, Union

getcontext().prec = 28  # increase decimal precision to avoid rounding errors

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime, str, None]


def parse_date(value: DateLike) -> date:
    """Parse a date from a ``date``, ``datetime`` or string value.

    Strings may be ``"YYYY-MM-DD"`` or ``"YYYY-MM"`` (the latter yields the
    first day of the month).

    Raises
    ------
    ValueError
        If the value is missing or is not a valid calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        raise ValueError(f"Invalid date: {value!r}")
    text = value.strip()
    try:
        parts = text.split("-")
        if len(parts) == 2:
            return date(int(parts[0]), int(parts[1]), 1)
        if len(parts) == 3:
            return date.fromisoformat(text)
        raise ValueError
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid date: {value!r}") from exc


def parse_date_or_default(value: DateLike, default: date) -> date:
    """Like :func:`parse_date` but fall back to ``default`` instead of raising."""
    if value is None or value == "":
        return default
    try:
        return parse_date(value)
    except ValueError:
        logger.warning("Could not parse date %r; using %s", value, default.isoformat())
        return default


def add_months(dt: date, months: int) -> date:
    """Return a new date a number of months after ``dt``.

    The day of the month is clamped to the last valid day if needed (e.g.,
    adding one month to Jan 31 yields Feb 28 or 29).
    """
    year = dt.year + (dt.month - 1 + months) // 12
    month = (dt.month - 1 + months) % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def month_start(dt: date) -> date:
    """Return the first day of ``dt``'s month."""
    return dt.replace(day=1)


def months_between(start: date, end: date) -> int:
    """Whole calendar months from ``start``'s month to ``end``'s month."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def decimal_from_str(value: Union[str, int, float, Decimal, None]) -> Decimal:
    """Convert a numeric value into a ``Decimal``.

    Strings have any commas stripped. Floats go through ``str`` so that
    ``0.1`` becomes ``Decimal("0.1")``. Raises ``ValueError`` if conversion
    fails.
    """
    if isinstance(value, Decimal):
        return value
    try:
        cleaned = str(value).strip().replace(",", "")
        result = Decimal(cleaned)
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"Invalid numeric value: {value}") from exc
    if not result.is_finite():
        raise ValueError(f"Invalid numeric value: {value}")
    return result
