"""
Admin configuration for tasks app.
"""

from django.contrib import admin

from .models import Task, TimeLogEntry


class TimeLogEntryInline(admin.TabularInline):
    """Inline admin for time logged against a task."""
    model = TimeLogEntry
    extra = 0
    readonly_fields = ('employee_name', 'log_date', 'seconds', 'created_at')
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    """Admin for Task model."""

    list_display = (
        'title', 'assigned_to', 'department', 'status', 'priority',
        'labels', 'due_date', 'is_overdue_display', 'created_at'
    )
    list_filter = ('status', 'priority', 'department', 'created_at', 'due_date')
    search_fields = ('title', 'assigned_to', 'labels')
    ordering = ('-created_at',)
    date_hierarchy = 'created_at'

    fieldsets = (
        (None, {
            'fields': ('title', 'labels')
        }),
        ('Assignment', {
            'fields': ('assigned_to', 'department')
        }),
        ('Status & Priority', {
            'fields': ('status', 'priority', 'due_date')
        }),
        ('Estimate', {
            'fields': ('time_estimate_hours', 'time_estimate_minutes'),
        }),
        ('Timestamps', {
            'fields': ('created_at',),
            'classes': ('collapse',),
        }),
    )

    inlines = [TimeLogEntryInline]

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('department')

    @admin.display(description='Overdue', boolean=True)
    def is_overdue_display(self, obj):
        return obj.is_overdue


@admin.register(TimeLogEntry)
class TimeLogEntryAdmin(admin.ModelAdmin):
    """Admin for TimeLogEntry model."""

    list_display = ('employee_name', 'task', 'log_date', 'seconds')
    list_filter = ('log_date',)
    search_fields = ('employee_name', 'task__title')
    date_hierarchy = 'log_date'
    raw_id_fields = ('task',)

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('task')
