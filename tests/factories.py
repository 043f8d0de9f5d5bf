"""
Test data helpers.
"""

from datetime import date, datetime, time

from django.utils import timezone

from apps.accounts.models import User
from apps.departments.models import Department
from apps.tasks.models import Task, TimeLogEntry


def make_department(name='Engineering', code='ENG'):
    return Department.objects.create(name=name, code=code)


def make_user(email='employee@example.com', role=User.Role.EMPLOYEE, **kwargs):
    kwargs.setdefault('first_name', email.split('@')[0].title())
    kwargs.setdefault('last_name', 'Test')
    return User.objects.create_user(email=email, password='testpass123', role=role, **kwargs)


def at_noon(day):
    """Aware datetime at noon local time."""
    return timezone.make_aware(datetime.combine(day, time(12, 0)))


def make_task(title, created, status=Task.Status.PENDING, **kwargs):
    return Task.objects.create(title=title, created_at=at_noon(created), status=status, **kwargs)


def log_time(task, employee_name, log_date, seconds):
    return TimeLogEntry.objects.create(
        task=task, employee_name=employee_name, log_date=log_date, seconds=seconds
    )


def d(value):
    return date.fromisoformat(value)
