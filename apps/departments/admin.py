"""
Admin configuration for departments app.
"""

from django.contrib import admin
from django.db.models import Count

from .models import Department


@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):
    """Admin for Department model."""

    list_display = ('name', 'code', 'head', 'task_count', 'created_at')
    search_fields = ('name', 'code')
    ordering = ('name',)
    readonly_fields = ('created_at',)

    def get_queryset(self, request):
        """Optimize with select_related and annotate task counts."""
        return (
            super().get_queryset(request)
            .select_related('head')
            .annotate(num_tasks=Count('tasks'))
        )

    @admin.display(description='Tasks', ordering='num_tasks')
    def task_count(self, obj):
        return obj.num_tasks
