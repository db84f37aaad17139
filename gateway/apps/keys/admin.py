"""Django admin configuration for keys app."""

from typing import override

from django.contrib import admin
from django.db.models import Count, QuerySet
from django.http import HttpRequest

from gateway.apps.keys.models import ApiKey


@admin.register(ApiKey)
class ApiKeyAdmin(admin.ModelAdmin):
    """Admin interface for ApiKey model."""

    list_display = [
        'label',
        'permission',
        'token_display',
        'file_count',
        'created_at',
    ]

    list_filter = [
        'permission',
        'created_at',
    ]

    search_fields = [
        'label',
    ]

    readonly_fields = [
        'created_at',
    ]

    def token_display(self, obj: ApiKey) -> str:
        """Display the first characters of the token only.

        Args:
            obj: ApiKey instance.

        Returns:
            Token prefix followed by an ellipsis.
        """
        return f'{obj.token[:8]}...'
    token_display.short_description = 'Token'  # type: ignore[attr-defined]

    def file_count(self, obj: ApiKey) -> int:
        """Number of files owned by this key."""
        return obj.file_count  # type: ignore[attr-defined]
    file_count.short_description = 'Files'  # type: ignore[attr-defined]

    @override
    def get_queryset(self, request: HttpRequest) -> QuerySet[ApiKey]:
        """Annotate owned file counts."""
        return super().get_queryset(request).annotate(
            file_count=Count('files'),
        )
