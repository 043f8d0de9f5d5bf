"""
Service layer for reports app.

Entry points for the reporting engine. Callers (views, API handlers,
scheduled jobs) go through these functions rather than the engines.

Services:
- get_task_stats: task counts and the filtered task list
- get_dwm_rows / get_dwm_drilldown: DWM completion rollup
- get_time_log / get_consolidated_time_log: time log reports
- aget_*: awaitable versions for async callers
- aload_report_bundle: reference data and DWM rows loaded concurrently
"""

import asyncio
import logging

from asgiref.sync import sync_to_async
from django.db import connections
from django.db.models import Count, Q
from django.utils import timezone

from apps.idle_accountability.services import get_my_idle_items
from apps.tasks.filters import TaskReportFilter
from apps.tasks.models import Task

from . import facts
from .cache import cached_report
from .dates import parse_day
from .dwm import get_dwm_drilldown, get_dwm_rows
from .reference import list_departments, list_idle_categories
from .timelog import get_consolidated_time_log, get_time_log

logger = logging.getLogger(__name__)

__all__ = [
    'get_task_stats', 'get_dwm_rows', 'get_dwm_drilldown', 'get_time_log',
    'get_consolidated_time_log', 'aget_task_stats', 'aget_dwm_rows',
    'aget_dwm_drilldown', 'aget_time_log', 'aget_consolidated_time_log',
    'aget_my_idle_items', 'alist_departments', 'aload_report_bundle',
]


def _empty_stats():
    return {'total': 0, 'completed': 0, 'in_progress': 0, 'overdue': 0, 'tasks': []}


def _compute_task_stats(data):
    tasks = TaskReportFilter(data, queryset=facts.task_facts()).qs
    today = timezone.localdate()
    completed_q = Q(status=Task.Status.COMPLETED)

    counts = facts.aggregate(
        tasks,
        'task stats',
        total=Count('id'),
        completed=Count('id', filter=completed_q),
        in_progress=Count('id', filter=Q(status=Task.Status.IN_PROGRESS)),
        overdue=Count('id', filter=Q(due_date__lt=today) & ~completed_q),
    )
    counts['tasks'] = facts.fetch(tasks, 'task list')
    return counts


def get_task_stats(filters=None):
    """
    Task statistics for the filtered task set.

    Args:
        filters: TaskReportFilter data (start_date, end_date, due_date_from,
            due_date_to, department, assigned_to, status, priority, label)

    Returns:
        dict with total, completed, in_progress, overdue and tasks.
        Overdue means due before today and not completed.
    """
    data = {key: value for key, value in (filters or {}).items() if value not in (None, '')}

    start = parse_day(data.get('start_date'))
    end = parse_day(data.get('end_date'))
    if start is not None and end is not None and end < start:
        logger.warning(f'Task stats requested with end {end} before start {start}')
        return _empty_stats()

    parts = dict(data, today=timezone.localdate())
    return cached_report('task_stats', parts, lambda: _compute_task_stats(data))


# =============================================================================
# Async facades
# =============================================================================

aget_task_stats = sync_to_async(get_task_stats)
aget_dwm_rows = sync_to_async(get_dwm_rows)
aget_dwm_drilldown = sync_to_async(get_dwm_drilldown)
aget_time_log = sync_to_async(get_time_log)
aget_consolidated_time_log = sync_to_async(get_consolidated_time_log)
aget_my_idle_items = sync_to_async(get_my_idle_items)


def _list_departments_on_worker():
    # Runs on an executor thread with its own connection; release it there
    try:
        return list_departments()
    finally:
        connections.close_all()


# Off the request thread so it overlaps the DWM read in aload_report_bundle
alist_departments = sync_to_async(_list_departments_on_worker, thread_sensitive=False)


async def aload_report_bundle(start_date, end_date, department=None, employee=None):
    """
    Load the DWM page data concurrently.

    The department list is read on a worker thread while the DWM rollup
    runs on the request thread, so it reads committed data only.

    Returns:
        dict with departments, idle_categories and dwm_rows
    """
    departments, rows = await asyncio.gather(
        alist_departments(),
        aget_dwm_rows(start_date, end_date, department=department, employee=employee),
    )
    return {
        'departments': departments,
        'idle_categories': list_idle_categories(),
        'dwm_rows': rows,
    }
