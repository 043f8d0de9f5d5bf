"""
Task fact models.

Models:
- Task: task record as imported from the task tracker (status, priority,
  labels, estimate). Read-only to the reporting engine.
- TimeLogEntry: seconds an employee logged against a task on a given day.

Recurring tasks carry their cadence in the free-text label
(e.g. "Daily", "Weekly review", "monthly-close").
"""

from django.db import models
from django.utils import timezone


class Task(models.Model):
    """
    Task record consumed by the reports.

    created_at is a plain default (not auto_now_add) because records are
    imported with their original creation timestamp.
    """

    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        IN_PROGRESS = 'in_progress', 'In Progress'
        COMPLETED = 'completed', 'Completed'
        DUE = 'due', 'Due'

    class Priority(models.TextChoices):
        HIGH = 'high', 'High'
        MEDIUM = 'medium', 'Medium'
        LOW = 'low', 'Low'

    title = models.CharField(max_length=255)
    status = models.CharField(
        max_length=15,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )
    priority = models.CharField(
        max_length=10,
        choices=Priority.choices,
        default=Priority.MEDIUM,
        db_index=True,
    )
    department = models.ForeignKey(
        'departments.Department',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='tasks',
    )
    assigned_to = models.CharField(
        max_length=255,
        blank=True,
        db_index=True,
        help_text='Assignee name as recorded by the task tracker'
    )
    labels = models.CharField(
        max_length=255,
        blank=True,
        help_text='Free-text tag, may encode Daily/Weekly/Monthly cadence'
    )

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    due_date = models.DateField(null=True, blank=True, db_index=True)

    # Estimate (hours + minutes), property of the task, never summed
    time_estimate_hours = models.PositiveIntegerField(default=0)
    time_estimate_minutes = models.PositiveSmallIntegerField(default=0)

    class Meta:
        verbose_name = 'task'
        verbose_name_plural = 'tasks'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'assigned_to']),
            models.Index(fields=['department', 'status']),
            models.Index(fields=['created_at', 'status']),
        ]

    def __str__(self):
        return self.title

    @property
    def is_completed(self):
        return self.status == self.Status.COMPLETED

    @property
    def is_overdue(self):
        """Past its due date and not completed."""
        if not self.due_date:
            return False
        if self.is_completed:
            return False
        return self.due_date < timezone.localdate()

    @property
    def department_name(self):
        return self.department.name if self.department_id else 'Unassigned'


class TimeLogEntry(models.Model):
    """
    Elapsed time logged by an employee against a task on one calendar day.

    Label and priority are read from the owning task for display.
    """

    task = models.ForeignKey(
        Task,
        on_delete=models.CASCADE,
        related_name='time_logs',
    )
    employee_name = models.CharField(max_length=255, db_index=True)
    log_date = models.DateField(db_index=True)
    seconds = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'time log entry'
        verbose_name_plural = 'time log entries'
        ordering = ['log_date', 'employee_name', 'id']
        indexes = [
            models.Index(fields=['log_date', 'employee_name']),
            models.Index(fields=['task', 'log_date']),
        ]

    def __str__(self):
        return f"{self.employee_name} on {self.task} ({self.log_date}): {self.seconds}s"
