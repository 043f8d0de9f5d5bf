"""
Read-only access to the fact store.

The reporting engine never writes task, time log or idle event records.
Querysets built here are lazy; evaluate them through fetch() or
aggregate() so that database failures surface as UpstreamFailure.
"""

import logging
from contextlib import contextmanager

from django.db import DatabaseError

from apps.tasks.models import Task, TimeLogEntry

from .exceptions import UpstreamFailure

logger = logging.getLogger(__name__)


def task_facts():
    """Base queryset of task records."""
    return Task.objects.select_related('department')


def time_log_facts():
    """Base queryset of time log entries joined to their task."""
    return TimeLogEntry.objects.select_related('task', 'task__department')


def idle_event_facts():
    """Base queryset of raw idle events."""
    from apps.idle_accountability.models import IdleEvent

    return IdleEvent.objects.select_related('employee')


@contextmanager
def upstream_guard(source):
    """Translate database errors raised inside the block into UpstreamFailure."""
    try:
        yield
    except DatabaseError as e:
        logger.error(f'Fact store read failed ({source}): {e}')
        raise UpstreamFailure(source) from e


def fetch(queryset, source):
    """Evaluate a queryset into a list."""
    with upstream_guard(source):
        return list(queryset)


def aggregate(queryset, source, **expressions):
    """Run queryset.aggregate(**expressions)."""
    with upstream_guard(source):
        return queryset.aggregate(**expressions)
