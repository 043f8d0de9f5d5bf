"""
Tests for capability resolution and report gating.
"""

from django.contrib.auth.models import AnonymousUser
from django.core.exceptions import PermissionDenied
from django.test import TestCase

from apps.accounts.capabilities import Capability, resolve_capabilities
from apps.accounts.models import User
from apps.reports.permissions import (
    ReportView, can_view_report, report_views_for, require_capability, require_report_view,
)

from .factories import make_user


class ResolveCapabilitiesTests(TestCase):

    def test_roles(self):
        admin = make_user('admin@example.com', role=User.Role.ADMIN)
        senior = make_user('sm2@example.com', role=User.Role.SENIOR_MANAGER_2)
        manager = make_user('manager@example.com', role=User.Role.MANAGER)
        employee = make_user('employee@example.com')

        self.assertEqual(resolve_capabilities(admin), frozenset(Capability))
        self.assertIn(Capability.VIEW_ALL_REPORTS, resolve_capabilities(senior))
        self.assertIn(Capability.VIEW_IDLE_ADMIN, resolve_capabilities(senior))
        self.assertEqual(
            resolve_capabilities(manager),
            {Capability.VIEW_CONSOLIDATED_ONLY, Capability.SUBMIT_IDLE_REASON},
        )
        self.assertEqual(resolve_capabilities(employee), {Capability.SUBMIT_IDLE_REASON})

    def test_superuser_is_admin(self):
        root = User.objects.create_superuser(
            email='root@example.com', password='testpass123', first_name='Root', last_name='User',
            role=User.Role.EMPLOYEE,
        )
        self.assertEqual(resolve_capabilities(root), frozenset(Capability))

    def test_anonymous_and_inactive(self):
        inactive = make_user('gone@example.com', role=User.Role.ADMIN, is_active=False)
        self.assertEqual(resolve_capabilities(AnonymousUser()), frozenset())
        self.assertEqual(resolve_capabilities(inactive), frozenset())
        self.assertEqual(resolve_capabilities(None), frozenset())


class ReportGatingTests(TestCase):

    def test_all_reports(self):
        self.assertEqual(report_views_for({Capability.VIEW_ALL_REPORTS}), list(ReportView))

    def test_consolidated_only(self):
        capabilities = {Capability.VIEW_CONSOLIDATED_ONLY}
        self.assertEqual(report_views_for(capabilities), [ReportView.CONSOLIDATED_TIME_LOG])
        self.assertFalse(can_view_report(capabilities, ReportView.DWM))
        with self.assertRaises(PermissionDenied):
            require_report_view(capabilities, ReportView.TIME_LOG)
        require_report_view(capabilities, ReportView.CONSOLIDATED_TIME_LOG)

    def test_no_reports(self):
        self.assertEqual(report_views_for({Capability.SUBMIT_IDLE_REASON}), [])
        with self.assertRaises(PermissionDenied):
            require_capability(frozenset(), Capability.VIEW_IDLE_ADMIN)
