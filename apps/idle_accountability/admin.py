"""
Admin configuration for idle accountability app.
"""

from django.contrib import admin

from .models import IdleAccountabilityItem, IdleEvent


@admin.register(IdleAccountabilityItem)
class IdleAccountabilityItemAdmin(admin.ModelAdmin):
    """Admin for IdleAccountabilityItem. State changes go through the services."""

    list_display = (
        'employee', 'date', 'idle_minutes', 'threshold_minutes', 'status',
        'category', 'subcategory', 'ticket_id', 'submitted_at'
    )
    list_filter = ('status', 'category', 'date')
    search_fields = ('employee__email', 'employee__first_name', 'employee__last_name', 'ticket_id')
    date_hierarchy = 'date'
    readonly_fields = (
        'status', 'category', 'subcategory', 'reason_text', 'ticket_id',
        'submitted_at', 'created_at', 'updated_at'
    )
    raw_id_fields = ('employee',)

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('employee')


@admin.register(IdleEvent)
class IdleEventAdmin(admin.ModelAdmin):
    list_display = ('employee', 'started_at', 'idle_seconds')
    list_filter = ('started_at',)
    raw_id_fields = ('employee',)
