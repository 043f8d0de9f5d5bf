"""
Capability resolution for report access.

The role of the authenticated user is mapped to a capability set exactly
once, here. Everything downstream (report view gating, idle admin listing)
checks membership in that set and never looks at role names.

Usage:
    capabilities = resolve_capabilities(request.user)
    if Capability.VIEW_ALL_REPORTS in capabilities:
        ...
"""

from django.db import models

from .models import User


class Capability(models.TextChoices):
    VIEW_ALL_REPORTS = 'view_all_reports', 'View all reports'
    VIEW_CONSOLIDATED_ONLY = 'view_consolidated_only', 'View Consolidated Time Log only'
    VIEW_IDLE_ADMIN = 'view_idle_admin', 'View idle accountability admin listing'
    SUBMIT_IDLE_REASON = 'submit_idle_reason', 'Submit idle accountability reasons'


ROLE_CAPABILITIES = {
    User.Role.ADMIN: frozenset(Capability),
    User.Role.SENIOR_MANAGER_1: frozenset({
        Capability.VIEW_ALL_REPORTS,
        Capability.VIEW_IDLE_ADMIN,
        Capability.SUBMIT_IDLE_REASON,
    }),
    User.Role.SENIOR_MANAGER_2: frozenset({
        Capability.VIEW_ALL_REPORTS,
        Capability.VIEW_IDLE_ADMIN,
        Capability.SUBMIT_IDLE_REASON,
    }),
    User.Role.MANAGER: frozenset({
        Capability.VIEW_CONSOLIDATED_ONLY,
        Capability.SUBMIT_IDLE_REASON,
    }),
    User.Role.EMPLOYEE: frozenset({
        Capability.SUBMIT_IDLE_REASON,
    }),
}


def resolve_capabilities(user):
    """
    Return the frozenset of Capability values granted to a user.

    Anonymous or inactive users get an empty set. Superusers are treated
    as admins regardless of their stored role.
    """
    if user is None or not user.is_authenticated or not user.is_active:
        return frozenset()

    if user.is_superuser:
        return ROLE_CAPABILITIES[User.Role.ADMIN]

    return ROLE_CAPABILITIES.get(user.role, frozenset())
