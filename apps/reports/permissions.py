"""
Report access gating.

Works purely on capability sets from
apps.accounts.capabilities.resolve_capabilities(); role names are never
inspected here.

- Capability.VIEW_ALL_REPORTS: every report view
- Capability.VIEW_CONSOLIDATED_ONLY: consolidated time log only
- anything else: no report views
"""

from django.core.exceptions import PermissionDenied
from django.db import models

from apps.accounts.capabilities import Capability


class ReportView(models.TextChoices):
    TASKS = 'tasks', 'Task Report'
    TIME_LOG = 'time_log', 'Time Log'
    CONSOLIDATED_TIME_LOG = 'consolidated_time_log', 'Consolidated Time Log'
    DWM = 'dwm', 'Daily / Weekly / Monthly'


def report_views_for(capabilities):
    """Report views reachable with a capability set, in display order."""
    if Capability.VIEW_ALL_REPORTS in capabilities:
        return list(ReportView)
    if Capability.VIEW_CONSOLIDATED_ONLY in capabilities:
        return [ReportView.CONSOLIDATED_TIME_LOG]
    return []


def can_view_report(capabilities, view):
    return view in report_views_for(capabilities)


def require_capability(capabilities, capability):
    """
    Raises:
        PermissionDenied: if capability is not in the set
    """
    if capability not in capabilities:
        raise PermissionDenied(f'Missing capability: {capability}')


def require_report_view(capabilities, view):
    """
    Raises:
        PermissionDenied: if the report view is not reachable
    """
    if not can_view_report(capabilities, view):
        raise PermissionDenied(f'Report not available: {view}')
