"""
Display formatting for report values.

Registered as template filters in templatetags/report_tags.py and used by
the report row serializers.
"""

NOT_AVAILABLE = 'N/A'
NO_ESTIMATE = 'No estimate'


def format_duration(seconds):
    """
    Format whole seconds as H:MM:SS.

    Examples:
        3661 -> "1:01:01"
        59 -> "0:00:59"
        90000 -> "25:00:00"
        None -> "0:00:00"
    """
    try:
        seconds = int(seconds or 0)
    except (ValueError, TypeError):
        seconds = 0
    seconds = max(seconds, 0)

    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours}:{minutes:02d}:{secs:02d}"


def format_estimate(hours, minutes):
    """
    Format a task time estimate.

    Examples:
        (1, 30) -> "1h 30m"
        (0, 45) -> "0h 45m"
        (0, 0) -> "No estimate"
    """
    hours = int(hours or 0)
    minutes = int(minutes or 0)
    if hours == 0 and minutes == 0:
        return NO_ESTIMATE
    return f"{hours}h {minutes}m"


def format_ratio(completed, total, always_numeric=False):
    """
    Format a completion cell as "completed/total".

    A zero total renders as "N/A" unless always_numeric is set
    (the daily DWM column shows "0/0").
    """
    if not total and not always_numeric:
        return NOT_AVAILABLE
    return f"{completed}/{total}"


def format_long_date(day):
    """'Saturday, August 2, 2025' for a date."""
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"
