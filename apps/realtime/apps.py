from django.apps import AppConfig


class RealtimeConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.realtime'
    verbose_name = 'Realtime change feed'

    def ready(self):
        """Register the change-publishing signal receivers."""
        import apps.realtime.signals  # noqa: F401
