"""
Cache invalidation for cached reports.

Any write to a task, time log entry or department bumps the report data
generation, which makes every previously cached report key unreachable.
Writers that bypass model signals (QuerySet.update(), bulk_create(), raw
SQL imports) call apps.reports.cache.invalidate_reports() themselves.
"""

import logging

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from apps.departments.models import Department
from apps.tasks.models import Task, TimeLogEntry

from .cache import invalidate_reports

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Task)
@receiver(post_delete, sender=Task)
@receiver(post_save, sender=TimeLogEntry)
@receiver(post_delete, sender=TimeLogEntry)
@receiver(post_save, sender=Department)
@receiver(post_delete, sender=Department)
def facts_changed(sender, instance, **kwargs):
    logger.debug(f'{sender.__name__} {instance.pk} changed, invalidating cached reports')
    invalidate_reports()
