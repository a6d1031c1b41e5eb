from django.apps import AppConfig


class WardConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'ward'

    def ready(self) -> None:
        from . import signals  # noqa: F401
