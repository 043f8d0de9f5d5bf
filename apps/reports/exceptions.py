"""
Error taxonomy for the reporting engine.

- ValidationError: malformed or contradictory input
- NotFoundError: referenced item or drill-down cell has no backing data
- InvalidStateError: request conflicts with the current state of an item
- UpstreamFailure: the fact store could not be read

ValidationError and NotFoundError extend Django's own exceptions so callers
that already handle django.core.exceptions keep working.
"""

from django.core.exceptions import ObjectDoesNotExist
from django.core.exceptions import ValidationError as DjangoValidationError


class ReportingError(Exception):
    """Base class for every reporting engine error."""


class ValidationError(ReportingError, DjangoValidationError):
    pass


class NotFoundError(ReportingError, ObjectDoesNotExist):
    pass


class InvalidStateError(ReportingError):
    pass


class UpstreamFailure(ReportingError):
    """
    Raised when a fact-store or reference-data read fails.

    Attributes:
        source: short description of what was being read
    """

    def __init__(self, source, message=None):
        self.source = source
        super().__init__(message or f'{source} is unavailable')
