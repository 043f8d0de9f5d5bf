"""
Report filters using django-filter.

Every field is optional; an absent or empty value means "no constraint".
Values that fail to parse (e.g. a malformed date) are dropped by the
form's validation and likewise impose no constraint. Filtering only
narrows the queryset, so the incoming ordering is preserved.

- TaskReportFilter: task statistics and task list
- TimeLogFilter: shared scoping step of both time log reports
"""

import django_filters

from .models import Task, TimeLogEntry


def _choice_value(choices, value):
    """
    Map a display label ('In Progress') to its stored value ('in_progress').
    Unknown values are returned unchanged so they simply match nothing.
    """
    for stored, label in choices:
        if value == label:
            return stored
    return value


class TaskReportFilter(django_filters.FilterSet):
    """
    Ad-hoc task report filter.

    Usage:
        filterset = TaskReportFilter({'status': 'Completed', 'label': 'daily'},
                                     queryset=Task.objects.all())
        tasks = filterset.qs
    """

    # Creation date range (calendar days, inclusive)
    start_date = django_filters.DateFilter(
        field_name='created_at',
        lookup_expr='date__gte',
        label='Created From',
    )
    end_date = django_filters.DateFilter(
        field_name='created_at',
        lookup_expr='date__lte',
        label='Created To',
    )

    # Due date range; tasks without a due date never satisfy a bound
    due_date_from = django_filters.DateFilter(
        field_name='due_date',
        lookup_expr='gte',
        label='Due From',
    )
    due_date_to = django_filters.DateFilter(
        field_name='due_date',
        lookup_expr='lte',
        label='Due To',
    )

    department = django_filters.CharFilter(
        field_name='department__name',
        label='Department',
    )
    assigned_to = django_filters.CharFilter(
        field_name='assigned_to',
        label='Assigned To',
    )
    status = django_filters.CharFilter(
        method='filter_status',
        label='Status',
    )
    priority = django_filters.CharFilter(
        method='filter_priority',
        label='Priority',
    )

    # Case-insensitive substring; empty labels never match
    label = django_filters.CharFilter(
        field_name='labels',
        lookup_expr='icontains',
        label='Label',
    )

    class Meta:
        model = Task
        fields = ['status', 'priority']

    def filter_status(self, queryset, name, value):
        """Exact match on status, accepting the stored value or its label."""
        return queryset.filter(status=_choice_value(Task.Status.choices, value))

    def filter_priority(self, queryset, name, value):
        """Exact match on priority, accepting the stored value or its label."""
        return queryset.filter(priority=_choice_value(Task.Priority.choices, value))

    @property
    def is_filtered(self):
        """True when at least one constraint survived validation."""
        if not self.is_bound:
            return False
        self.form.is_valid()
        return any(value not in (None, '') for value in self.form.cleaned_data.values())


class TimeLogFilter(django_filters.FilterSet):
    """
    Scoping step shared by the per-entry and consolidated time log reports.

    Usage:
        filterset = TimeLogFilter({'start_date': '2025-08-01', 'task_name': 'design'},
                                  queryset=TimeLogEntry.objects.all())
        entries = filterset.qs
    """

    start_date = django_filters.DateFilter(
        field_name='log_date',
        lookup_expr='gte',
        label='From Date',
    )
    end_date = django_filters.DateFilter(
        field_name='log_date',
        lookup_expr='lte',
        label='To Date',
    )
    employee = django_filters.CharFilter(
        field_name='employee_name',
        label='Employee',
    )
    department = django_filters.CharFilter(
        field_name='task__department__name',
        label='Department',
    )
    task_name = django_filters.CharFilter(
        field_name='task__title',
        lookup_expr='icontains',
        label='Task Name',
    )

    class Meta:
        model = TimeLogEntry
        fields = []
