"""
Reference data lookups for report filters.
"""

from apps.departments.models import Department
from apps.idle_accountability.taxonomy import get_taxonomy

from . import facts


def list_departments():
    """Department names, alphabetical."""
    names = Department.objects.order_by('name').values_list('name', flat=True)
    return facts.fetch(names, 'departments')


def list_idle_categories():
    """
    Idle reason taxonomy as plain data.

    Returns:
        [{'key', 'label', 'subcategories': [{'key', 'label'}, ...]}, ...]
    """
    return [category.as_dict() for category in get_taxonomy()]
