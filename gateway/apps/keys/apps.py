"""Django app configuration for keys app."""

from django.apps import AppConfig


class KeysConfig(AppConfig):
    """Configuration for keys app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'gateway.apps.keys'
    verbose_name = 'API Keys'
