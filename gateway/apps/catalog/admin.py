"""Django admin configuration for catalog app."""

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from gateway.apps.catalog.models import CidTheme, Doc


@admin.register(Doc)
class DocAdmin(admin.ModelAdmin):
    """Admin interface for Doc model."""

    list_display = [
        'title',
        'path',
        'version',
        'parent',
        'updated_at',
    ]

    list_filter = [
        'is_children',
    ]

    search_fields = [
        'title',
        'path',
    ]

    readonly_fields = [
        'created_at',
        'updated_at',
    ]

    def get_queryset(self, request: HttpRequest) -> QuerySet[Doc]:
        """Optimize queryset with select_related."""
        return super().get_queryset(request).select_related('parent')


@admin.register(CidTheme)
class CidThemeAdmin(admin.ModelAdmin):
    """Admin interface for CidTheme model."""

    list_display = ['name', 'cid']
    search_fields = ['name', 'cid']
