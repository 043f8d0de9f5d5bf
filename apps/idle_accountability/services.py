"""
Service layer for idle accountability.

All state changes of IdleAccountabilityItem go through this module.

Services:
- record_idle_detection: create/update the item for an (employee, day)
- detect_idle_for_date: derive detections from raw IdleEvent records
- get_my_idle_items: employee-facing pending / resolved lists
- submit_idle_reason: file or edit the reason for an item
- mark_ticket_created: escalate an item to a ticket (final)
- escalate_unresolved_for_date: escalate a day's still-pending items
- list_idle_items_admin: filtered listing for admins
"""

import logging
from datetime import datetime, time, timedelta

from django.conf import settings
from django.db import transaction
from django.db.models import F, Q, Sum
from django.utils import timezone

from apps.accounts.capabilities import Capability
from apps.reports import facts
from apps.reports.dates import parse_day
from apps.reports.exceptions import InvalidStateError, NotFoundError, ValidationError
from apps.reports.permissions import require_capability

from . import taxonomy
from .filters import IdleItemFilter
from .models import IdleAccountabilityItem

logger = logging.getLogger(__name__)


def _pending_floor():
    return settings.IDLE_PENDING_FLOOR_MINUTES


# =============================================================================
# Detection
# =============================================================================

def record_idle_detection(employee, day, idle_minutes, threshold_minutes=None):
    """
    Record the idle minutes detected for an employee on a day.

    A new item starts pending. Re-detection updates idle_minutes and
    threshold_minutes only; the status of an existing item is untouched.

    Args:
        employee: User
        day: date or ISO string
        idle_minutes: total idle minutes for the day
        threshold_minutes: defaults to settings.IDLE_THRESHOLD_MINUTES

    Returns:
        (item, created), or (None, False) when idle_minutes does not exceed
        the threshold and no item exists yet.
    """
    day = parse_day(day)
    if day is None:
        raise ValidationError('A valid detection date is required')
    if idle_minutes is None or idle_minutes < 0:
        raise ValidationError(f'Invalid idle minutes: {idle_minutes!r}')

    if threshold_minutes is None:
        threshold_minutes = settings.IDLE_THRESHOLD_MINUTES

    defaults = {'idle_minutes': idle_minutes, 'threshold_minutes': threshold_minutes}

    if idle_minutes <= threshold_minutes:
        updated = IdleAccountabilityItem.objects.filter(employee=employee, date=day).update(**defaults)
        if not updated:
            logger.debug(f'{employee} idle {idle_minutes} min on {day}, below threshold')
            return None, False
        return IdleAccountabilityItem.objects.get(employee=employee, date=day), False

    item, created = IdleAccountabilityItem.objects.update_or_create(
        employee=employee,
        date=day,
        defaults=defaults,
    )
    if created:
        logger.info(f'Idle item {item.pk} created for {employee} on {day} ({idle_minutes} min)')
    return item, created


def detect_idle_for_date(day, threshold_minutes=None):
    """
    Derive per-employee idle minutes for a day from IdleEvent records and
    record each detection.

    Idle minutes are round(sum(idle_seconds) / 60), days are taken in the
    current time zone.

    Returns:
        number of items created
    """
    day = parse_day(day)
    if day is None:
        raise ValidationError('A valid detection date is required')

    tz = timezone.get_current_timezone()
    day_start = timezone.make_aware(datetime.combine(day, time.min), tz)
    day_end = day_start + timedelta(days=1)

    totals = (
        facts.idle_event_facts()
        .filter(started_at__gte=day_start, started_at__lt=day_end)
        .values('employee')
        .annotate(seconds=Sum('idle_seconds'))
        .order_by('employee')
    )
    totals = facts.fetch(totals, f'idle events {day}')

    from apps.accounts.models import User

    employees = User.objects.in_bulk([row['employee'] for row in totals])
    created_count = 0
    for row in totals:
        idle_minutes = round((row['seconds'] or 0) / 60)
        _, created = record_idle_detection(
            employees[row['employee']], day, idle_minutes, threshold_minutes
        )
        created_count += int(created)

    logger.info(f'Idle detection for {day}: {len(totals)} employee(s), {created_count} new item(s)')
    return created_count


# =============================================================================
# Queries
# =============================================================================

def get_my_idle_items(employee, start_date=None, end_date=None):
    """
    Employee-facing idle items.

    pending holds pending items above both the pending floor and their own
    threshold. resolved holds every item that is no longer pending, whatever
    its idle minutes, so a filed reason stays visible after re-detection
    lowers them. Both lists come from one read, so each item is in exactly
    one.

    Returns:
        {'pending': [...], 'resolved': [...]}, newest first
    """
    pending = Q(status=IdleAccountabilityItem.Status.PENDING)
    surfaced_pending = pending & Q(idle_minutes__gt=_pending_floor()) & Q(
        idle_minutes__gt=F('threshold_minutes')
    )
    items = IdleAccountabilityItem.objects.filter(employee=employee).filter(
        surfaced_pending | ~pending
    )

    start = parse_day(start_date)
    end = parse_day(end_date)
    if start is not None:
        items = items.filter(date__gte=start)
    if end is not None:
        items = items.filter(date__lte=end)

    result = {'pending': [], 'resolved': []}
    for item in facts.fetch(items.order_by('-date', '-id'), 'idle items'):
        result['pending' if item.is_pending else 'resolved'].append(item)
    return result


def list_idle_items_admin(capabilities, filters=None):
    """
    Admin listing of idle items.

    Args:
        capabilities: caller's capability set
        filters: IdleItemFilter data (start_date, end_date, status,
            department, category, employee)

    Raises:
        PermissionDenied: without Capability.VIEW_IDLE_ADMIN
    """
    require_capability(capabilities, Capability.VIEW_IDLE_ADMIN)

    queryset = IdleAccountabilityItem.objects.select_related('employee', 'employee__department')
    items = IdleItemFilter(filters or {}, queryset=queryset).qs.order_by('-date', '-id')
    return facts.fetch(items[:settings.IDLE_ADMIN_LIST_LIMIT], 'idle admin listing')


# =============================================================================
# State changes
# =============================================================================

def _get_item(item_id, lock=False):
    queryset = IdleAccountabilityItem.objects.all()
    if lock:
        queryset = queryset.select_for_update()
    try:
        return queryset.get(pk=item_id)
    except (IdleAccountabilityItem.DoesNotExist, ValueError, TypeError):
        raise NotFoundError(f'Idle item {item_id!r} not found')


def submit_idle_reason(item_id, category, subcategory, reason, employee=None,
                       capabilities=None):
    """
    File or edit the reason for an idle item.

    Allowed while the item is pending or submitted. Filing the same
    (category, subcategory, reason) again changes nothing.

    Args:
        item_id: IdleAccountabilityItem id
        category, subcategory: keys from the reason taxonomy
        reason: free-text explanation, required
        employee: when given, the item must belong to this user
        capabilities: caller's capability set; when given it must hold
            Capability.SUBMIT_IDLE_REASON

    Returns:
        Updated IdleAccountabilityItem

    Raises:
        PermissionDenied: capabilities given without SUBMIT_IDLE_REASON
        ValidationError: empty reason or unknown category
        InvalidStateError: subcategory outside category, or item already escalated
        NotFoundError: unknown item (or not the employee's)
    """
    if capabilities is not None:
        require_capability(capabilities, Capability.SUBMIT_IDLE_REASON)

    reason = (reason or '').strip()
    if not reason:
        raise ValidationError('A reason is required')
    taxonomy.validate(category, subcategory)

    with transaction.atomic():
        item = _get_item(item_id, lock=True)

        if employee is not None and item.employee_id != employee.pk:
            raise NotFoundError(f'Idle item {item_id!r} not found')

        if not item.accepts_reason:
            raise InvalidStateError(
                f'Idle item {item.pk} is {item.get_status_display()} and no longer accepts reasons'
            )

        if (
            item.status == IdleAccountabilityItem.Status.SUBMITTED
            and (item.category, item.subcategory, item.reason_text) == (category, subcategory, reason)
        ):
            return item

        now = timezone.now()
        fields = {
            'status': IdleAccountabilityItem.Status.SUBMITTED,
            'category': category,
            'subcategory': subcategory,
            'reason_text': reason,
            'submitted_at': now,
            'updated_at': now,
        }
        updated = IdleAccountabilityItem.objects.filter(
            pk=item.pk,
            status__in=IdleAccountabilityItem.REASON_STATES,
        ).update(**fields)
        if not updated:
            raise InvalidStateError(f'Idle item {item.pk} changed state during submission')

        for name, value in fields.items():
            setattr(item, name, value)

    logger.info(f'Idle reason submitted for item {item.pk}: {category}/{subcategory}')
    return item


def mark_ticket_created(item_id, ticket_id):
    """
    Escalate an idle item to a ticket.

    Final: a ticketed item never changes again. Repeating the call with
    the same ticket id changes nothing.

    Raises:
        ValidationError: empty ticket id
        InvalidStateError: item already carries a different ticket
        NotFoundError: unknown item
    """
    ticket_id = str(ticket_id or '').strip()
    if not ticket_id:
        raise ValidationError('A ticket id is required')

    with transaction.atomic():
        item = _get_item(item_id, lock=True)

        if item.status == IdleAccountabilityItem.Status.TICKET_CREATED:
            if item.ticket_id == ticket_id:
                return item
            raise InvalidStateError(
                f'Idle item {item.pk} already has ticket {item.ticket_id}'
            )

        now = timezone.now()
        updated = IdleAccountabilityItem.objects.filter(
            pk=item.pk,
            status__in=IdleAccountabilityItem.REASON_STATES,
        ).update(
            status=IdleAccountabilityItem.Status.TICKET_CREATED,
            ticket_id=ticket_id,
            updated_at=now,
        )
        if not updated:
            raise InvalidStateError(f'Idle item {item.pk} changed state during escalation')

        item.status = IdleAccountabilityItem.Status.TICKET_CREATED
        item.ticket_id = ticket_id
        item.updated_at = now

    logger.info(f'Idle item {item.pk} escalated to ticket {ticket_id}')
    return item


def escalate_unresolved_for_date(day, create_ticket):
    """
    Escalate every still-pending item of a day above the pending floor.

    Args:
        day: date or ISO string
        create_ticket: callable(item) -> ticket id

    Returns:
        dict with escalated and failed counts. A failing ticket factory is
        logged and counted; the remaining items are still processed.
    """
    day = parse_day(day)
    if day is None:
        raise ValidationError('A valid escalation date is required')

    items = IdleAccountabilityItem.objects.filter(
        date=day,
        status=IdleAccountabilityItem.Status.PENDING,
        idle_minutes__gt=_pending_floor(),
    ).select_related('employee').order_by('id')

    escalated = 0
    failed = 0
    for item in facts.fetch(items, f'pending idle items {day}'):
        try:
            ticket_id = create_ticket(item)
            mark_ticket_created(item.pk, ticket_id)
        except Exception as e:
            failed += 1
            logger.error(f'Failed to escalate idle item {item.pk}: {e}')
            continue
        escalated += 1

    logger.info(f'Idle escalation for {day}: {escalated} escalated, {failed} failed')
    return {'escalated': escalated, 'failed': failed}
