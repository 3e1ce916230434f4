"""Core Django App Configuration."""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Shared building blocks: base models, pagination, errors, middleware."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "src.apps.core"
    label = "core"
    verbose_name = "Core"
