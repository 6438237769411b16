from django.apps import AppConfig


class CoreConfig(AppConfig):
    """App configuration for the core application (restaurants, comments, favorites, likes)."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "core"
