"""
Time log reports.

Two views over the same scoped entries (TimeLogFilter):
- get_time_log: one row per log entry, ordered by log date
- get_consolidated_time_log: one row per (task, employee), seconds summed
  over the range, ordered by total seconds descending

For identical filters both reports have the same grand total.
"""

import logging
from dataclasses import dataclass

from django.db.models import IntegerField, Sum
from django.db.models.functions import Coalesce

from apps.tasks.filters import TimeLogFilter
from apps.tasks.models import Task

from . import facts
from .cache import cached_report
from .dates import parse_day
from .formatting import format_duration, format_estimate

logger = logging.getLogger(__name__)


def _priority_label(value):
    try:
        return Task.Priority(value).label
    except ValueError:
        return value


@dataclass(frozen=True)
class TimeLogRow:
    employee: str
    task_id: int
    task_title: str
    log_date: object
    label: str
    priority: str
    seconds: int

    @property
    def duration(self):
        return format_duration(self.seconds)

    @property
    def priority_display(self):
        return _priority_label(self.priority)


@dataclass(frozen=True)
class ConsolidatedRow:
    """Seconds one employee logged against one task over the range."""

    employee: str
    task_id: int
    task_title: str
    label: str
    priority: str
    seconds: int
    time_estimate_hours: int
    time_estimate_minutes: int

    @property
    def duration(self):
        return format_duration(self.seconds)

    @property
    def estimate(self):
        return format_estimate(self.time_estimate_hours, self.time_estimate_minutes)

    @property
    def priority_display(self):
        return _priority_label(self.priority)


@dataclass(frozen=True)
class TimeLogReport:
    rows: tuple = ()
    total_seconds: int = 0

    @property
    def total_duration(self):
        return format_duration(self.total_seconds)


def _filter_data(start_date, end_date, employee, department, task_name):
    return {
        'start_date': start_date or '',
        'end_date': end_date or '',
        'employee': employee or '',
        'department': department or '',
        'task_name': task_name or '',
    }


def _is_reversed(start_date, end_date):
    start = parse_day(start_date)
    end = parse_day(end_date)
    return start is not None and end is not None and end < start


def scoped_entries(start_date=None, end_date=None, employee=None, department=None,
                   task_name=None):
    """Time log entries matching the filters, joined to their task."""
    data = _filter_data(start_date, end_date, employee, department, task_name)
    return TimeLogFilter(data, queryset=facts.time_log_facts()).qs


def _compute_time_log(filters):
    entries = scoped_entries(**filters).order_by('log_date', 'employee_name', 'id')
    rows = tuple(
        TimeLogRow(
            employee=entry.employee_name,
            task_id=entry.task_id,
            task_title=entry.task.title,
            log_date=entry.log_date,
            label=entry.task.labels,
            priority=entry.task.priority,
            seconds=entry.seconds,
        )
        for entry in facts.fetch(entries, 'time log entries')
    )
    return TimeLogReport(rows=rows, total_seconds=sum(row.seconds for row in rows))


def _compute_consolidated(filters):
    grouped = (
        scoped_entries(**filters)
        .values(
            'task_id', 'employee_name', 'task__title', 'task__labels', 'task__priority',
            'task__time_estimate_hours', 'task__time_estimate_minutes',
        )
        .annotate(total_seconds=Coalesce(Sum('seconds'), 0, output_field=IntegerField()))
        .order_by('-total_seconds', 'employee_name', 'task__title', 'task_id')
    )
    rows = tuple(
        ConsolidatedRow(
            employee=group['employee_name'],
            task_id=group['task_id'],
            task_title=group['task__title'],
            label=group['task__labels'],
            priority=group['task__priority'],
            seconds=group['total_seconds'],
            time_estimate_hours=group['task__time_estimate_hours'],
            time_estimate_minutes=group['task__time_estimate_minutes'],
        )
        for group in facts.fetch(grouped, 'consolidated time log')
    )
    return TimeLogReport(rows=rows, total_seconds=sum(row.seconds for row in rows))


def get_time_log(start_date=None, end_date=None, employee=None, department=None,
                 task_name=None):
    """
    Per-entry time log.

    Returns:
        TimeLogReport of TimeLogRow, ordered by log date. An end date before
        the start date yields an empty report.
    """
    if _is_reversed(start_date, end_date):
        logger.warning(f'Time log requested with end {end_date} before start {start_date}')
        return TimeLogReport()

    filters = {
        'start_date': start_date, 'end_date': end_date, 'employee': employee,
        'department': department, 'task_name': task_name,
    }
    return cached_report('time_log', filters, lambda: _compute_time_log(filters))


def get_consolidated_time_log(start_date=None, end_date=None, employee=None,
                              department=None, task_name=None):
    """
    Time log grouped by (task, employee).

    Each row carries the task's estimate as-is; estimates are never summed.

    Returns:
        TimeLogReport of ConsolidatedRow, ordered by seconds descending.
    """
    if _is_reversed(start_date, end_date):
        logger.warning(
            f'Consolidated time log requested with end {end_date} before start {start_date}'
        )
        return TimeLogReport()

    filters = {
        'start_date': start_date, 'end_date': end_date, 'employee': employee,
        'department': department, 'task_name': task_name,
    }
    return cached_report('consolidated_time_log', filters, lambda: _compute_consolidated(filters))
