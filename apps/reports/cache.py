"""
Report result cache on top of Django's cache framework.

Keys are built from the report kind, a hash of the report parameters and
the current data generation. invalidate_reports() bumps the generation,
so stale entries are never read again and simply expire.

Usage:
    rows = cached_report(
        'dwm',
        {'start': start, 'end': end, 'department': department},
        lambda: compute_rows(start, end, department),
        is_degraded=lambda rows: any(row.degraded for row in rows),
    )
"""

import hashlib
import json
import logging

from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)

GENERATION_KEY = 'reports:generation'
KEY_PREFIX = 'reports'


def current_generation():
    """Current data generation, starting at 1."""
    return cache.get_or_set(GENERATION_KEY, 1, timeout=None)


def invalidate_reports():
    """Invalidate every cached report."""
    try:
        cache.incr(GENERATION_KEY)
    except ValueError:
        # Generation key evicted or never set
        cache.set(GENERATION_KEY, current_generation() + 1, timeout=None)


def report_cache_key(kind, parts):
    """
    Build the cache key for a report.

    Args:
        kind: report name ('dwm', 'time_log', ...)
        parts: dict of the parameters that determine the result

    Returns:
        'reports:<kind>:<generation>:<sha256 of parts>'
    """
    payload = json.dumps(parts, sort_keys=True, default=str)
    digest = hashlib.sha256(payload.encode('utf-8')).hexdigest()
    return f'{KEY_PREFIX}:{kind}:{current_generation()}:{digest}'


def cached_report(kind, parts, compute, is_degraded=None):
    """
    Return the cached result for (kind, parts) or compute and store it.

    Results for which is_degraded(result) is true are returned but never
    stored.
    """
    key = report_cache_key(kind, parts)
    result = cache.get(key)
    if result is not None:
        logger.debug(f'Report cache hit: {key}')
        return result

    result = compute()
    if is_degraded is not None and is_degraded(result):
        logger.debug(f'Not caching degraded {kind} report')
        return result

    cache.set(key, result, settings.REPORT_CACHE_TIMEOUT)
    return result


def peek_report(kind, parts):
    """Cached result for (kind, parts), or None. Never computes."""
    return cache.get(report_cache_key(kind, parts))
