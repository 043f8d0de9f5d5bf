"""
Tests for the per-entry and consolidated time log reports.
"""

from django.test import TestCase

from apps.reports.timelog import get_consolidated_time_log, get_time_log
from apps.tasks.models import Task

from .factories import d, log_time, make_department, make_task


class TimeLogTests(TestCase):

    @classmethod
    def setUpTestData(cls):
        eng = make_department('Engineering', 'ENG')
        cls.design = make_task(
            'Landing page design', d('2025-07-30'),
            department=eng, labels='Weekly', priority=Task.Priority.HIGH,
            time_estimate_hours=1, time_estimate_minutes=30,
        )
        cls.budget = make_task('Budget review', d('2025-07-30'), labels='Monthly')

        log_time(cls.design, 'Ayesha', d('2025-08-01'), 3661)
        log_time(cls.budget, 'Bilal', d('2025-08-02'), 1800)
        log_time(cls.budget, 'Bilal', d('2025-08-01'), 600)
        log_time(cls.budget, 'Ayesha', d('2025-08-03'), 7200)

    def test_task_name_filter(self):
        report = get_time_log('2025-08-01', '2025-08-31', task_name='design')

        self.assertEqual(len(report.rows), 1)
        row = report.rows[0]
        self.assertEqual(row.employee, 'Ayesha')
        self.assertEqual(row.task_title, 'Landing page design')
        self.assertEqual(row.label, 'Weekly')
        self.assertEqual(row.priority_display, 'High')
        self.assertEqual(row.duration, '1:01:01')
        self.assertEqual(report.total_duration, '1:01:01')

    def test_rows_ordered_by_log_date(self):
        report = get_time_log()
        self.assertEqual(
            [row.log_date for row in report.rows],
            [d('2025-08-01'), d('2025-08-01'), d('2025-08-02'), d('2025-08-03')],
        )
        self.assertEqual(report.total_seconds, 3661 + 1800 + 600 + 7200)

    def test_consolidated_groups_by_task_and_employee(self):
        report = get_consolidated_time_log('2025-08-01', '2025-08-31')

        self.assertEqual(
            [(row.task_title, row.employee, row.seconds) for row in report.rows],
            [
                ('Budget review', 'Ayesha', 7200),
                ('Landing page design', 'Ayesha', 3661),
                ('Budget review', 'Bilal', 2400),
            ],
        )
        self.assertEqual(report.rows[1].estimate, '1h 30m')
        self.assertEqual(report.rows[0].estimate, 'No estimate')
        self.assertEqual(report.rows[2].duration, '0:40:00')

    def test_estimate_is_not_summed(self):
        log_time(self.design, 'Ayesha', d('2025-08-04'), 60)
        report = get_consolidated_time_log(employee='Ayesha', task_name='design')

        self.assertEqual(len(report.rows), 1)
        self.assertEqual(report.rows[0].seconds, 3721)
        self.assertEqual(
            (report.rows[0].time_estimate_hours, report.rows[0].time_estimate_minutes), (1, 30)
        )

    def test_grand_totals_agree(self):
        for filters in (
            {},
            {'start_date': '2025-08-01', 'end_date': '2025-08-01'},
            {'employee': 'Bilal'},
            {'department': 'Engineering'},
            {'task_name': 'review', 'start_date': '2025-08-02'},
        ):
            self.assertEqual(
                get_time_log(**filters).total_seconds,
                get_consolidated_time_log(**filters).total_seconds,
                filters,
            )

    def test_reversed_range_is_empty(self):
        with self.assertLogs('apps.reports.timelog', level='WARNING'):
            report = get_time_log('2025-08-31', '2025-08-01')
        self.assertEqual(report.rows, ())
        self.assertEqual(report.total_duration, '0:00:00')
        self.assertEqual(get_consolidated_time_log('2025-08-31', '2025-08-01').total_seconds, 0)
