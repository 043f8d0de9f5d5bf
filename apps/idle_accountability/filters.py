"""
Admin listing filter for idle accountability items.
"""

import django_filters

from .models import IdleAccountabilityItem


class IdleItemFilter(django_filters.FilterSet):
    """
    Usage:
        filterset = IdleItemFilter({'status': 'pending', 'department': 'Engineering'},
                                   queryset=IdleAccountabilityItem.objects.all())
        items = filterset.qs
    """

    start_date = django_filters.DateFilter(
        field_name='date',
        lookup_expr='gte',
        label='From Date',
    )
    end_date = django_filters.DateFilter(
        field_name='date',
        lookup_expr='lte',
        label='To Date',
    )
    status = django_filters.ChoiceFilter(
        choices=IdleAccountabilityItem.Status.choices,
        label='Status',
    )
    department = django_filters.CharFilter(
        field_name='employee__department__name',
        label='Department',
    )
    category = django_filters.CharFilter(
        field_name='category',
        label='Category',
    )
    employee = django_filters.NumberFilter(
        field_name='employee_id',
        label='Employee',
    )

    class Meta:
        model = IdleAccountabilityItem
        fields = ['status', 'category']
