"""
Calendar helpers for report date handling.

All report bounds are inclusive calendar days. Inputs may be date objects,
ISO-8601 strings ('2025-08-01') or ISO datetimes ('2025-08-01T10:00:00');
anything unparseable becomes None.
"""

import calendar
from datetime import date, datetime, timedelta

from django.utils.dateparse import parse_date

from .exceptions import ValidationError


def parse_day(value):
    """
    Coerce a report date bound to a date.

    Returns None for empty or malformed input instead of raising.
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if 'T' in text:
        text = text.split('T')[0]
    try:
        return parse_date(text)
    except ValueError:
        # Well formatted but impossible, e.g. 2025-02-30
        return None


def require_range(start, end):
    """
    Parse a mandatory inclusive range.

    Raises:
        ValidationError: if a bound is missing/malformed or end < start
    """
    start_day = parse_day(start)
    end_day = parse_day(end)

    if start_day is None or end_day is None:
        raise ValidationError(f'Invalid date range: {start!r} to {end!r}')
    if end_day < start_day:
        raise ValidationError(f'End date {end_day} is before start date {start_day}')

    return start_day, end_day


def iter_days(start, end):
    """Yield every calendar day from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def week_bounds(day):
    """Monday and Sunday of the ISO week containing day."""
    monday = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=6)


def month_bounds(day):
    """First and last day of the calendar month containing day."""
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def clip(bounds, start=None, end=None):
    """Intersect (lo, hi) with an optional [start, end] range."""
    lo, hi = bounds
    if start is not None and lo < start:
        lo = start
    if end is not None and hi > end:
        hi = end
    return lo, hi
