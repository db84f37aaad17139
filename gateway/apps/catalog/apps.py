"""Django app configuration for catalog app."""

from django.apps import AppConfig


class CatalogConfig(AppConfig):
    """Configuration for catalog app (documentation tree, theme links)."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'gateway.apps.catalog'
    verbose_name = 'Catalog'
