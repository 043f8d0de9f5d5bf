"""
Scheduled jobs for idle accountability.

Registered with Django-Q2 by `manage.py setup_schedules`:
- run_daily_idle_detection: detect yesterday's idle items (daily)
- run_idle_escalation: escalate yesterday's unresolved items (daily)
"""

import logging
from datetime import timedelta

from django.conf import settings
from django.utils import timezone
from django.utils.module_loading import import_string

from .services import detect_idle_for_date, escalate_unresolved_for_date

logger = logging.getLogger(__name__)


def _yesterday():
    return timezone.localdate() - timedelta(days=1)


def run_daily_idle_detection():
    """Detect idle items for yesterday from the raw idle events."""
    day = _yesterday()
    created = detect_idle_for_date(day)
    return f'{created} idle item(s) created for {day}'


def run_idle_escalation():
    """
    Escalate yesterday's still-pending items through the ticket factory
    named by settings.IDLE_TICKET_FACTORY. Skipped when unset.
    """
    factory_path = settings.IDLE_TICKET_FACTORY
    if not factory_path:
        logger.info('IDLE_TICKET_FACTORY not configured, skipping idle escalation')
        return 'skipped'

    create_ticket = import_string(factory_path)
    day = _yesterday()
    result = escalate_unresolved_for_date(day, create_ticket)
    return f"{result['escalated']} escalated, {result['failed']} failed for {day}"
