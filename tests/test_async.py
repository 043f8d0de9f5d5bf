"""
Tests for the awaitable report facades.
"""

import threading
from unittest.mock import patch

from django.test import TestCase, TransactionTestCase

from apps.reports import services
from apps.tasks.models import Task

from .factories import d, log_time, make_department, make_task, make_user


class AsyncFacadeTests(TestCase):

    @classmethod
    def setUpTestData(cls):
        make_department('Engineering', 'ENG')
        make_department('Finance', 'FIN')
        cls.task = make_task('Design review', d('2025-08-02'), status=Task.Status.COMPLETED)
        log_time(cls.task, 'Ayesha', d('2025-08-02'), 3661)
        cls.employee = make_user('ayesha@example.com')

    async def test_time_logs_and_drilldown(self):
        report = await services.aget_time_log(task_name='design')
        consolidated = await services.aget_consolidated_time_log(task_name='design')
        drilldown = await services.aget_dwm_drilldown('2025-08-02', 'daily', True)

        self.assertEqual(report.total_duration, '1:01:01')
        self.assertEqual(consolidated.total_seconds, report.total_seconds)
        self.assertEqual(drilldown.total_seconds, 3661)

    async def test_task_stats_and_idle_items(self):
        stats = await services.aget_task_stats({'status': 'Completed'})
        idle = await services.aget_my_idle_items(self.employee)

        self.assertEqual(stats['completed'], 1)
        self.assertEqual(idle, {'pending': [], 'resolved': []})


class ReportBundleTests(TransactionTestCase):
    """The department list is read on a worker thread, so its data must be committed."""

    def setUp(self):
        make_department('Engineering', 'ENG')
        make_department('Finance', 'FIN')
        make_task('Design review', d('2025-08-02'), status=Task.Status.COMPLETED)

    async def test_report_bundle(self):
        bundle = await services.aload_report_bundle('2025-08-01', '2025-08-03')

        self.assertEqual(bundle['departments'], ['Engineering', 'Finance'])
        self.assertEqual([c['key'] for c in bundle['idle_categories']], ['personal', 'work_process', 'other'])
        self.assertEqual(len(bundle['dwm_rows']), 3)
        self.assertEqual(bundle['dwm_rows'][1].display('daily'), '1/1')

    async def test_departments_read_off_the_request_thread(self):
        reader_threads = []

        def list_departments():
            reader_threads.append(threading.get_ident())
            return ['Engineering']

        with patch('apps.reports.services.list_departments', side_effect=list_departments):
            bundle = await services.aload_report_bundle('2025-08-02', '2025-08-02')

        self.assertEqual(bundle['departments'], ['Engineering'])
        self.assertEqual(len(reader_threads), 1)
        self.assertNotEqual(reader_threads[0], threading.main_thread().ident)
