"""
Tests for the report cache and its invalidation.
"""

from unittest.mock import patch

from django.core.cache import cache
from django.test import TestCase, override_settings

from apps.reports.cache import invalidate_reports, report_cache_key
from apps.reports.dwm import get_dwm_drilldown, get_dwm_rows
from apps.reports.exceptions import UpstreamFailure
from apps.reports.timelog import get_time_log
from apps.tasks.models import Task

from .factories import d, log_time, make_department, make_task

LOCMEM = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'report-cache-tests',
    }
}


@override_settings(CACHES=LOCMEM)
class ReportCacheTests(TestCase):

    def setUp(self):
        cache.clear()
        self.task = make_task('Daily sync', d('2025-08-02'))

    def test_key_depends_on_parts_and_generation(self):
        key = report_cache_key('dwm', {'start': d('2025-08-01')})

        self.assertEqual(key, report_cache_key('dwm', {'start': d('2025-08-01')}))
        self.assertNotEqual(key, report_cache_key('dwm', {'start': d('2025-08-02')}))
        self.assertNotEqual(key, report_cache_key('time_log', {'start': d('2025-08-01')}))

        invalidate_reports()
        self.assertNotEqual(key, report_cache_key('dwm', {'start': d('2025-08-01')}))

    def test_cached_until_facts_change(self):
        first = get_dwm_rows('2025-08-02', '2025-08-02')
        self.assertEqual(first[0].cell('daily'), (0, 1))

        # QuerySet.update() sends no signals, so the cached rows stay
        Task.objects.filter(pk=self.task.pk).update(status=Task.Status.COMPLETED)
        self.assertEqual(get_dwm_rows('2025-08-02', '2025-08-02')[0].cell('daily'), (0, 1))

        make_task('Weekly sync', d('2025-08-02'))
        self.assertEqual(get_dwm_rows('2025-08-02', '2025-08-02')[0].cell('daily'), (1, 2))

    def test_time_log_invalidated_by_new_entry(self):
        self.assertEqual(get_time_log().total_seconds, 0)
        log_time(self.task, 'Ayesha', d('2025-08-02'), 120)
        self.assertEqual(get_time_log().total_seconds, 120)

    def test_degraded_rows_are_not_cached(self):
        with patch('apps.reports.facts.fetch', side_effect=UpstreamFailure('tasks')):
            degraded = get_dwm_rows('2025-08-02', '2025-08-02')
        self.assertTrue(degraded[0].degraded)

        rows = get_dwm_rows('2025-08-02', '2025-08-02')
        self.assertFalse(rows[0].degraded)
        self.assertEqual(rows[0].cell('daily'), (0, 1))

    def test_drilldown_follows_cached_cell_after_signal_free_update(self):
        make_task('Weekly sync', d('2025-08-02'))
        make_task('Monthly close', d('2025-08-02'))
        start, end = '2025-08-01', '2025-08-05'

        self.assertEqual(get_dwm_rows(start, end)[1].cell('daily'), (0, 3))

        Task.objects.filter(pk=self.task.pk).update(status=Task.Status.COMPLETED)

        self.assertEqual(get_dwm_rows(start, end)[1].cell('daily'), (0, 3))
        done = get_dwm_drilldown('2025-08-02', 'daily', True, start_date=start, end_date=end)
        rest = get_dwm_drilldown('2025-08-02', 'daily', False, start_date=start, end_date=end)
        self.assertEqual(done.items, [])
        self.assertEqual(len(rest.items), 3)

        invalidate_reports()

        self.assertEqual(get_dwm_rows(start, end)[1].cell('daily'), (1, 3))
        done = get_dwm_drilldown('2025-08-02', 'daily', True, start_date=start, end_date=end)
        self.assertEqual(done.items, [self.task])

    def test_department_rename_invalidates(self):
        department = make_department('Engineering', 'ENG')
        make_task('Deploy', d('2025-08-02'), department=department)
        self.assertEqual(
            get_dwm_rows('2025-08-02', '2025-08-02', department='Engineering')[0].cell('daily'), (0, 1)
        )

        department.name = 'Platform'
        department.save()

        self.assertEqual(
            get_dwm_rows('2025-08-02', '2025-08-02', department='Engineering')[0].cell('daily'), (0, 0)
        )
        self.assertEqual(
            get_dwm_rows('2025-08-02', '2025-08-02', department='Platform')[0].cell('daily'), (0, 1)
        )
