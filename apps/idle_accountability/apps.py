from django.apps import AppConfig


class IdleAccountabilityConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.idle_accountability'
    verbose_name = 'Idle Accountability'
