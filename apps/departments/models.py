"""
Department reference data.

Departments scope every report (task statistics, DWM rollup, time logs)
and the idle accountability admin listing. Tasks and users point at a
department; records without one are reported as 'Unassigned'.
"""

from django.db import models
from django.conf import settings


UNASSIGNED_DEPARTMENT = 'Unassigned'


class Department(models.Model):
    """
    Organizational department. Flat, no parent/child relationships.
    """

    name = models.CharField(
        max_length=100,
        unique=True,
        help_text='Full department name, used as the report filter value'
    )
    code = models.CharField(
        max_length=10,
        unique=True,
        help_text='Short identifier (e.g., ENG, HR, FIN)'
    )
    head = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='headed_departments',
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'department'
        verbose_name_plural = 'departments'
        ordering = ['name']

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if self.code:
            self.code = self.code.upper()
        super().save(*args, **kwargs)
