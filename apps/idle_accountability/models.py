"""
Idle accountability models.

Models:
- IdleEvent: raw idle period reported by the activity tracker
- IdleAccountabilityItem: one per (employee, day) whose idle time exceeded
  the threshold; the employee explains it or it gets escalated to a ticket

Item lifecycle:
    pending -> submitted            (reason filed)
    submitted -> submitted          (reason edited)
    pending | submitted -> ticket_created   (escalated, final)
"""

from django.conf import settings
from django.db import models


class IdleEvent(models.Model):
    """Idle period of one employee, as reported by the tracker."""

    employee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='idle_events',
    )
    started_at = models.DateTimeField(db_index=True)
    idle_seconds = models.PositiveIntegerField()

    class Meta:
        ordering = ['started_at']
        indexes = [
            models.Index(fields=['employee', 'started_at']),
        ]

    def __str__(self):
        return f"{self.employee} idle {self.idle_seconds}s at {self.started_at}"


def default_threshold_minutes():
    return settings.IDLE_THRESHOLD_MINUTES


class IdleAccountabilityItem(models.Model):
    """
    Idle time of one employee on one day that needs an explanation.
    """

    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        SUBMITTED = 'submitted', 'Submitted'
        TICKET_CREATED = 'ticket_created', 'Ticket Created'

    # States from which a reason may be filed or edited
    REASON_STATES = (Status.PENDING, Status.SUBMITTED)

    employee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='idle_items',
    )
    date = models.DateField(db_index=True)
    idle_minutes = models.PositiveIntegerField()
    threshold_minutes = models.PositiveIntegerField(default=default_threshold_minutes)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )

    category = models.CharField(max_length=50, blank=True)
    subcategory = models.CharField(max_length=50, blank=True)
    reason_text = models.TextField(blank=True)
    ticket_id = models.CharField(max_length=100, blank=True)

    submitted_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'idle accountability item'
        verbose_name_plural = 'idle accountability items'
        ordering = ['-date', 'employee_id']
        constraints = [
            models.UniqueConstraint(
                fields=['employee', 'date'],
                name='unique_idle_item_per_employee_day',
            ),
        ]
        indexes = [
            models.Index(fields=['employee', 'status']),
            models.Index(fields=['date', 'status']),
        ]

    def __str__(self):
        return f"{self.employee} {self.date}: {self.idle_minutes} min ({self.get_status_display()})"

    @property
    def is_pending(self):
        return self.status == self.Status.PENDING

    @property
    def accepts_reason(self):
        return self.status in self.REASON_STATES
