"""Django admin configuration for files app."""

from typing import Any, Final

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from gateway.apps.files.models import StoredFile
from gateway.apps.search.index import get_search_index
from gateway.apps.search.logic.sync import sync_visibility

_KIB: Final = 1024


def _format_bytes(size_bytes: int) -> str:
    """Format bytes in human-readable format.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Formatted size string (e.g., '1.5 MB', '234 KB').
    """
    if size_bytes < _KIB:
        return f'{size_bytes} B'
    if size_bytes < _KIB ** 2:
        return f'{size_bytes / _KIB:.1f} KB'
    if size_bytes < _KIB ** 3:
        return f'{size_bytes / _KIB ** 2:.1f} MB'
    return f'{size_bytes / _KIB ** 3:.1f} GB'


@admin.register(StoredFile)
class StoredFileAdmin(admin.ModelAdmin):
    """Admin interface for StoredFile model.

    Everything except the privacy flag is immutable once recorded.
    """

    list_display = [
        'file_name',
        'cid',
        'api_key',
        'mime_type',
        'size_display',
        'is_private',
        'created_at',
    ]

    list_filter = [
        'is_private',
        'mime_type',
        'created_at',
    ]

    search_fields = [
        'cid',
        'file_name',
    ]

    readonly_fields = [
        'cid',
        'api_key',
        'file_name',
        'mime_type',
        'size_bytes',
        'created_at',
    ]

    fieldsets = (
        ('File Information', {
            'fields': ('cid', 'file_name', 'api_key'),
        }),
        ('Metadata', {
            'fields': ('mime_type', 'size_bytes'),
        }),
        ('Visibility', {
            'fields': ('is_private',),
        }),
        ('Timestamps', {
            'fields': ('created_at',),
        }),
    )

    def size_display(self, obj: StoredFile) -> str:
        """Display file size in human-readable format."""
        return _format_bytes(obj.size_bytes)
    size_display.short_description = 'Size'  # type: ignore[attr-defined]

    def save_model(
        self,
        request: HttpRequest,
        obj: StoredFile,
        form: Any,
        change: bool,  # noqa: FBT001
    ) -> None:
        """Save and keep the search index in line with the privacy flag."""
        super().save_model(request, obj, form, change)
        if 'is_private' in form.changed_data:
            sync_visibility(get_search_index(), obj)

    def get_queryset(self, request: HttpRequest) -> QuerySet[StoredFile]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('api_key')
