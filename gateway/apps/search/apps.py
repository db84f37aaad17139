"""Django app configuration for search app."""

from django.apps import AppConfig


class SearchConfig(AppConfig):
    """Configuration for search app."""

    name = 'gateway.apps.search'
    verbose_name = 'Search'
