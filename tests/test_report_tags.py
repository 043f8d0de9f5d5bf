"""
Tests for report formatting and template filters.
"""

from datetime import date

from django.template import Context, Template
from django.test import SimpleTestCase

from apps.reports.dwm import DwmRow, Horizon
from apps.reports.formatting import format_duration, format_estimate, format_ratio
from apps.reports.templatetags.report_tags import dwm_cell, long_date, time_estimate


class FormattingTests(SimpleTestCase):

    def test_format_duration(self):
        self.assertEqual(format_duration(3661), '1:01:01')
        self.assertEqual(format_duration(0), '0:00:00')
        self.assertEqual(format_duration(None), '0:00:00')
        self.assertEqual(format_duration(90000), '25:00:00')
        self.assertEqual(format_duration('abc'), '0:00:00')

    def test_format_estimate(self):
        self.assertEqual(format_estimate(0, 0), 'No estimate')
        self.assertEqual(format_estimate(None, None), 'No estimate')
        self.assertEqual(format_estimate(2, 0), '2h 0m')
        self.assertEqual(format_estimate(0, 45), '0h 45m')

    def test_format_ratio(self):
        self.assertEqual(format_ratio(6, 10), '6/10')
        self.assertEqual(format_ratio(0, 0), 'N/A')
        self.assertEqual(format_ratio(0, 0, always_numeric=True), '0/0')


class ReportTagsTests(SimpleTestCase):

    def test_duration_filter_in_template(self):
        rendered = Template('{% load report_tags %}{{ seconds|duration }}').render(
            Context({'seconds': 3661})
        )
        self.assertEqual(rendered, '1:01:01')

    def test_time_estimate(self):
        self.assertEqual(time_estimate({'time_estimate_hours': 1, 'time_estimate_minutes': 5}), '1h 5m')
        self.assertEqual(time_estimate(None), 'No estimate')

    def test_dwm_cell(self):
        row = DwmRow(
            day=date(2025, 8, 4), daily_completed=0, daily_total=0,
            weekly_completed=0, weekly_total=0, monthly_completed=6, monthly_total=10,
        )
        self.assertEqual(dwm_cell(row, 'daily'), '0/0')
        self.assertEqual(dwm_cell(row, 'weekly'), 'N/A')
        self.assertEqual(dwm_cell(row, 'monthly'), '6/10')
        self.assertEqual(dwm_cell(row, 'yearly'), 'N/A')
        self.assertEqual(dwm_cell(None, 'daily'), 'N/A')

    def test_degraded_cell(self):
        row = DwmRow(day=date(2025, 8, 4), daily_total=3, degraded=frozenset({Horizon.DAILY}))
        self.assertEqual(dwm_cell(row, 'daily'), 'N/A')

    def test_long_date(self):
        self.assertEqual(long_date(date(2025, 8, 2)), 'Saturday, August 2, 2025')
        self.assertEqual(long_date(None), '')
