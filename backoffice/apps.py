from django.apps import AppConfig


class BackofficeConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'backoffice'
    verbose_name = 'Restaurant Back-Office'

    def ready(self):
        from . import signals  # noqa
