"""
Daily / Weekly / Monthly (DWM) completion rollup.

For every day of a requested range the rollup reports completed/total task
counts over three horizons:
- daily: the day itself
- weekly: the ISO week (Monday..Sunday) containing the day
- monthly: the calendar month containing the day

Each horizon span is clipped to the requested range, so a weekly cell
always equals the sum of the daily cells of the in-range days of that
week. The summary rows and the drill-down both scope tasks through
horizon_span() and scoped_tasks(). The cached rollup keeps the task ids
behind every span, and a drill-down over the same range reads those ids,
so it lists exactly the tasks counted in the cell that linked to it even
when the facts were changed by writes that send no model signals.
"""

import logging
from dataclasses import dataclass, field

from django.db import models
from django.db.models import IntegerField, Q, Sum
from django.db.models.functions import Coalesce

from apps.tasks.filters import TaskReportFilter
from apps.tasks.models import Task

from . import facts
from .cache import cached_report, peek_report
from .dates import clip, iter_days, month_bounds, parse_day, week_bounds
from .exceptions import NotFoundError, UpstreamFailure, ValidationError
from .formatting import NOT_AVAILABLE, format_ratio

logger = logging.getLogger(__name__)


class Horizon(models.TextChoices):
    DAILY = 'daily', 'Daily'
    WEEKLY = 'weekly', 'Weekly'
    MONTHLY = 'monthly', 'Monthly'


@dataclass(frozen=True)
class DwmRow:
    """
    One calendar day of the DWM rollup.

    degraded holds the horizons whose counts could not be read; their
    counts are 0 and they render as "N/A".
    """

    day: object
    daily_completed: int = 0
    daily_total: int = 0
    weekly_completed: int = 0
    weekly_total: int = 0
    monthly_completed: int = 0
    monthly_total: int = 0
    degraded: frozenset = field(default_factory=frozenset)

    def cell(self, horizon):
        """(completed, total) for a horizon."""
        horizon = Horizon(horizon)
        return (
            getattr(self, f'{horizon.value}_completed'),
            getattr(self, f'{horizon.value}_total'),
        )

    def display(self, horizon):
        """
        Render a horizon cell.

        Daily cells are always numeric ("0/0" included); weekly and monthly
        cells with no tasks render "N/A", as do degraded cells.
        """
        horizon = Horizon(horizon)
        if horizon in self.degraded:
            return NOT_AVAILABLE
        completed, total = self.cell(horizon)
        return format_ratio(completed, total, always_numeric=horizon == Horizon.DAILY)

    def as_dict(self):
        data = {'date': self.day.isoformat()}
        for horizon in Horizon:
            completed, total = self.cell(horizon)
            data[f'{horizon.value}_completed'] = completed
            data[f'{horizon.value}_total'] = total
            data[f'{horizon.value}_display'] = self.display(horizon)
        data['degraded'] = sorted(h.value for h in self.degraded)
        return data


@dataclass(frozen=True)
class DrilldownResult:
    """Tasks behind one DWM cell, each annotated with logged_seconds."""

    day: object
    horizon: str
    completed: bool
    span: tuple
    items: list
    total_seconds: int

    def as_dict(self):
        return {
            'date': self.day.isoformat(),
            'horizon': self.horizon,
            'completed': self.completed,
            'span': [self.span[0].isoformat(), self.span[1].isoformat()],
            'items': [
                {
                    'id': task.pk,
                    'title': task.title,
                    'status': task.status,
                    'assigned_to': task.assigned_to,
                    'department': task.department_name,
                    'labels': task.labels,
                    'seconds': task.logged_seconds,
                }
                for task in self.items
            ],
            'total_seconds': self.total_seconds,
        }


def coerce_horizon(value):
    """
    Raises:
        ValidationError: if value is not a known horizon
    """
    try:
        return Horizon(value)
    except ValueError:
        raise ValidationError(f'Unknown horizon: {value!r}')


def horizon_span(day, horizon, start=None, end=None):
    """Inclusive (lo, hi) span of a horizon around day, clipped to [start, end]."""
    horizon = coerce_horizon(horizon)
    if horizon == Horizon.DAILY:
        bounds = (day, day)
    elif horizon == Horizon.WEEKLY:
        bounds = week_bounds(day)
    else:
        bounds = month_bounds(day)
    return clip(bounds, start, end)


def scoped_tasks(lo, hi, department=None, employee=None):
    """Tasks created within [lo, hi], optionally scoped to a department and assignee."""
    data = {'start_date': lo, 'end_date': hi}
    if department:
        data['department'] = department
    if employee:
        data['assigned_to'] = employee
    return TaskReportFilter(data, queryset=facts.task_facts()).qs


@dataclass(frozen=True)
class SpanTasks:
    """Ids of the tasks counted in one span, split by completion, in title order."""

    completed_ids: tuple = ()
    other_ids: tuple = ()

    @property
    def counts(self):
        return len(self.completed_ids), len(self.completed_ids) + len(self.other_ids)

    def ids(self, completed):
        return self.completed_ids if completed else self.other_ids


@dataclass(frozen=True)
class DwmSnapshot:
    """
    Rows of one rollup plus the task ids behind every span.

    Cached as a unit, so a drill-down served from the snapshot lists exactly
    the tasks its cell counted even if the facts changed in the meantime.
    spans maps (lo, hi) to SpanTasks, or None for a span that failed to read.
    """

    rows: list
    spans: dict


def _snapshot_parts(start, end, department, employee):
    return {
        'start': start,
        'end': end,
        'department': department or '',
        'employee': employee or '',
    }


def _read_span(span, department, employee):
    lo, hi = span
    pairs = facts.fetch(
        scoped_tasks(lo, hi, department, employee).order_by('title', 'id').values_list('id', 'status'),
        f'dwm tasks {lo}..{hi}',
    )
    return SpanTasks(
        completed_ids=tuple(pk for pk, status in pairs if status == Task.Status.COMPLETED),
        other_ids=tuple(pk for pk, status in pairs if status != Task.Status.COMPLETED),
    )


def _compute_snapshot(start, end, department, employee):
    spans = {}
    rows = []
    degraded_cells = 0

    for day in iter_days(start, end):
        values = {}
        degraded = set()
        for horizon in Horizon:
            span = horizon_span(day, horizon, start, end)
            if span not in spans:
                try:
                    spans[span] = _read_span(span, department, employee)
                except UpstreamFailure:
                    spans[span] = None

            if spans[span] is None:
                degraded.add(horizon)
                counts = (0, 0)
            else:
                counts = spans[span].counts
            values[f'{horizon.value}_completed'], values[f'{horizon.value}_total'] = counts

        degraded_cells += len(degraded)
        rows.append(DwmRow(day=day, degraded=frozenset(degraded), **values))

    if degraded_cells:
        logger.warning(
            f'DWM rollup {start}..{end} degraded: {degraded_cells} cell(s) unavailable'
        )
    return DwmSnapshot(rows=rows, spans=spans)


def get_dwm_rows(start_date, end_date, department=None, employee=None):
    """
    DWM rollup for every day of [start_date, end_date], ascending.

    A malformed range or an end before the start yields no rows.

    Returns:
        list of DwmRow
    """
    start = parse_day(start_date)
    end = parse_day(end_date)
    if start is None or end is None or end < start:
        logger.warning(f'DWM rollup requested with invalid range {start_date!r}..{end_date!r}')
        return []

    snapshot = cached_report(
        'dwm',
        _snapshot_parts(start, end, department, employee),
        lambda: _compute_snapshot(start, end, department, employee),
        is_degraded=lambda snap: any(row.degraded for row in snap.rows),
    )
    return snapshot.rows


def get_dwm_drilldown(day, horizon, completed, department=None, employee=None,
                      start_date=None, end_date=None):
    """
    Tasks counted in one DWM cell.

    Pass the same range the rows were requested with: the cell's span is
    clipped to it, and while those rows are cached the drill-down lists
    the task ids cached with them. Without a range the span is the whole
    day, ISO week or calendar month, which for a weekly or monthly cell
    near a range edge holds more tasks than the clipped cell shows.

    Args:
        day: ISO date (or date) of the row the cell belongs to
        horizon: 'daily', 'weekly' or 'monthly'
        completed: True for the completed tasks, False for the rest
        department, employee: same scope as the summary
        start_date, end_date: same range as the summary

    Returns:
        DrilldownResult ordered by task title; total_seconds is the time
        logged against those tasks inside the cell's span.

    Raises:
        ValidationError: unknown horizon
        NotFoundError: unparseable day, or day outside the range
        UpstreamFailure: the tasks could not be read
    """
    horizon = coerce_horizon(horizon)
    target = parse_day(day)
    if target is None:
        raise NotFoundError(f'No DWM row for {day!r}')

    start = parse_day(start_date)
    end = parse_day(end_date)
    if (start is not None and target < start) or (end is not None and target > end):
        raise NotFoundError(f'{target} is outside the requested range')

    lo, hi = horizon_span(target, horizon, start, end)

    span_tasks = None
    if start is not None and end is not None:
        snapshot = peek_report('dwm', _snapshot_parts(start, end, department, employee))
        if snapshot is not None:
            span_tasks = snapshot.spans.get((lo, hi))
    if span_tasks is None:
        span_tasks = _read_span((lo, hi), department, employee)

    ids = span_tasks.ids(completed)
    tasks = facts.task_facts().filter(pk__in=ids).annotate(
        logged_seconds=Coalesce(
            Sum('time_logs__seconds', filter=Q(time_logs__log_date__range=(lo, hi))),
            0,
            output_field=IntegerField(),
        )
    ).order_by('title', 'id')

    items = facts.fetch(tasks, f'dwm drilldown {horizon.value} {lo}..{hi}')
    if len(items) != len(ids):
        logger.warning(
            f'DWM drilldown {target} {horizon.value}: {len(ids) - len(items)} task(s) '
            f'deleted since the rollup was computed'
        )
    return DrilldownResult(
        day=target,
        horizon=horizon.value,
        completed=bool(completed),
        span=(lo, hi),
        items=items,
        total_seconds=sum(task.logged_seconds for task in items),
    )
