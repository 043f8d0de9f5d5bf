"""
Idle reason category taxonomy.

Read from settings.IDLE_REASON_CATEGORIES:

    [
        {'key': 'personal', 'label': 'Personal', 'subcategories': [
            {'key': 'health', 'label': 'Health related'},
        ]},
    ]

Order in settings is display order.
"""

from dataclasses import dataclass

from django.conf import settings

from apps.reports.exceptions import InvalidStateError, ValidationError


@dataclass(frozen=True)
class Subcategory:
    key: str
    label: str

    def as_dict(self):
        return {'key': self.key, 'label': self.label}


@dataclass(frozen=True)
class Category:
    key: str
    label: str
    subcategories: tuple

    def as_dict(self):
        return {
            'key': self.key,
            'label': self.label,
            'subcategories': [sub.as_dict() for sub in self.subcategories],
        }

    def get_subcategory(self, key):
        for sub in self.subcategories:
            if sub.key == key:
                return sub
        return None


def get_taxonomy():
    """Tuple of Category, in configured order."""
    return tuple(
        Category(
            key=entry['key'],
            label=entry['label'],
            subcategories=tuple(
                Subcategory(key=sub['key'], label=sub['label'])
                for sub in entry.get('subcategories', [])
            ),
        )
        for entry in settings.IDLE_REASON_CATEGORIES
    )


def get_category(key):
    for category in get_taxonomy():
        if category.key == key:
            return category
    return None


def validate(category_key, subcategory_key):
    """
    Check a (category, subcategory) pair.

    Returns:
        (Category, Subcategory)

    Raises:
        ValidationError: unknown category
        InvalidStateError: subcategory does not belong to the category
    """
    category = get_category(category_key)
    if category is None:
        raise ValidationError(f'Unknown idle reason category: {category_key!r}')

    subcategory = category.get_subcategory(subcategory_key)
    if subcategory is None:
        raise InvalidStateError(
            f'Subcategory {subcategory_key!r} is not part of category {category_key!r}'
        )
    return category, subcategory
