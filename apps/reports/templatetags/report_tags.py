"""
Template tags and filters for reports app.

Filters:
- duration: Format seconds as "H:MM:SS"
- time_estimate: Format a task's estimate as "Xh Ym" or "No estimate"
- dwm_cell: Format a DWM row cell for a horizon ("6/10", "0/0" or "N/A")
- long_date: Format a date as "Saturday, August 2, 2025"

Usage:
    {% load report_tags %}

    {{ row.seconds|duration }}
    {{ task|time_estimate }}
    {{ row|dwm_cell:"weekly" }}
    {{ row.day|long_date }}
"""

from django import template

from apps.reports.formatting import (
    format_duration, format_estimate, format_long_date, NOT_AVAILABLE,
)

register = template.Library()


@register.filter
def duration(seconds):
    """
    Format elapsed seconds.

    Examples:
        3661 -> "1:01:01"
        0 -> "0:00:00"
    """
    return format_duration(seconds)


@register.filter
def time_estimate(obj):
    """
    Format the estimate of a Task, a consolidated row, or a dict with
    time_estimate_hours / time_estimate_minutes keys.
    """
    if obj is None:
        return format_estimate(0, 0)

    if isinstance(obj, dict):
        hours = obj.get('time_estimate_hours')
        minutes = obj.get('time_estimate_minutes')
    else:
        hours = getattr(obj, 'time_estimate_hours', 0)
        minutes = getattr(obj, 'time_estimate_minutes', 0)

    return format_estimate(hours, minutes)


@register.filter
def dwm_cell(row, horizon):
    """
    Render one horizon of a DwmRow.

    Unknown horizons render "N/A".
    """
    if row is None:
        return NOT_AVAILABLE
    try:
        return row.display(horizon)
    except (ValueError, AttributeError):
        return NOT_AVAILABLE


@register.filter
def long_date(day):
    if not day:
        return ''
    return format_long_date(day)
