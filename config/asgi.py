"""
ASGI config for workforce_reports project.

The async report facades in apps.reports.services run under this entry point.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

application = get_asgi_application()
