"""
Tests for task statistics.
"""

from datetime import timedelta

from django.test import TestCase
from django.utils import timezone

from apps.reports.services import get_task_stats
from apps.tasks.models import Task

from .factories import make_task


class TaskStatsTests(TestCase):

    @classmethod
    def setUpTestData(cls):
        today = timezone.localdate()
        yesterday = today - timedelta(days=1)
        cls.overdue = make_task('Overdue report', yesterday, due_date=yesterday, labels='Daily')
        cls.done_late = make_task(
            'Closed after due', yesterday, status=Task.Status.COMPLETED, due_date=yesterday
        )
        cls.working = make_task('In flight', today, status=Task.Status.IN_PROGRESS, due_date=today)
        cls.no_due = make_task('Backlog item', today)

    def test_counts(self):
        stats = get_task_stats()
        self.assertEqual(stats['total'], 4)
        self.assertEqual(stats['completed'], 1)
        self.assertEqual(stats['in_progress'], 1)
        self.assertEqual(stats['overdue'], 1)
        self.assertEqual(len(stats['tasks']), 4)

    def test_filtered(self):
        stats = get_task_stats({'status': 'Pending', 'label': 'daily'})
        self.assertEqual(stats['total'], 1)
        self.assertEqual(stats['overdue'], 1)
        self.assertEqual(stats['tasks'], [self.overdue])

    def test_is_overdue_property_agrees(self):
        overdue = [task for task in get_task_stats()['tasks'] if task.is_overdue]
        self.assertEqual(overdue, [self.overdue])

    def test_reversed_range(self):
        stats = get_task_stats({'start_date': '2025-08-05', 'end_date': '2025-08-01'})
        self.assertEqual(stats, {'total': 0, 'completed': 0, 'in_progress': 0, 'overdue': 0, 'tasks': []})
