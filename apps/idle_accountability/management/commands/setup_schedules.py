"""
Management command to set up Django-Q2 schedules for idle accountability jobs.

This command creates/updates the scheduled tasks required for:
- Daily idle detection (previous day's idle events)
- Daily escalation of unresolved idle items

Usage:
    python manage.py setup_schedules

The command is idempotent - safe to run multiple times.
Existing schedules will be updated if their configuration changes.
"""
from datetime import datetime, time, timedelta

from django.core.management.base import BaseCommand
from django.utils import timezone
from django_q.models import Schedule


SCHEDULES = [
    {
        'name': 'Daily Idle Detection',
        'func': 'apps.idle_accountability.tasks.run_daily_idle_detection',
        'at': time(1, 0),
        'description': 'daily at 1:00 AM',
    },
    {
        'name': 'Idle Escalation',
        'func': 'apps.idle_accountability.tasks.run_idle_escalation',
        'at': time(9, 0),
        'description': 'daily at 9:00 AM',
    },
]


def next_run_at(at):
    """Next occurrence of a local wall-clock time."""
    now = timezone.localtime()
    run = timezone.make_aware(datetime.combine(now.date(), at))
    if run <= now:
        run += timedelta(days=1)
    return run


class Command(BaseCommand):
    help = 'Set up Django-Q2 schedules for idle accountability jobs'

    def handle(self, *args, **options):
        self.stdout.write('\nSetting up Django-Q2 schedules...\n')

        schedules_created = 0
        schedules_updated = 0

        for entry in SCHEDULES:
            _, created = Schedule.objects.update_or_create(
                name=entry['name'],
                defaults={
                    'func': entry['func'],
                    'schedule_type': Schedule.DAILY,
                    'next_run': next_run_at(entry['at']),
                    'repeats': -1,  # Run forever
                },
            )
            if created:
                schedules_created += 1
                self.stdout.write(
                    self.style.SUCCESS(f"✓ Created schedule: {entry['name']} ({entry['description']})")
                )
            else:
                schedules_updated += 1
                self.stdout.write(
                    self.style.WARNING(f"↻ Updated schedule: {entry['name']} ({entry['description']})")
                )

        total = schedules_created + schedules_updated
        self.stdout.write('')
        self.stdout.write(
            self.style.SUCCESS(
                f'Done! {schedules_created} schedule(s) created, '
                f'{schedules_updated} schedule(s) updated. '
                f'Total: {total} schedules configured.'
            )
        )
        self.stdout.write('')
        self.stdout.write(
            self.style.NOTICE(
                'Note: Ensure Django-Q cluster is running: python manage.py qcluster'
            )
        )
        self.stdout.write('')
