"""Paginated file listings."""

import logging
from dataclasses import dataclass
from typing import Any, Final

from django.db import DatabaseError
from django.db.models import QuerySet

from gateway.apps.files.models import StoredFile
from gateway.apps.keys.logic.guard import ApiKeyIdentity
from gateway.common.exceptions import ListingFailed
from gateway.common.http import PageRequest

logger = logging.getLogger(__name__)

_PUBLIC_FIELDS: Final = ('cid', 'file_name', 'mime_type', 'size_bytes')
_OWNED_FIELDS: Final = ('cid', 'is_private', 'file_name', 'mime_type', 'size_bytes')


@dataclass(frozen=True, slots=True)
class FilePage:
    """One page of a file listing."""

    files: list[dict[str, Any]]
    total: int
    page: int
    limit: int
    total_pages: int

    def as_dict(self) -> dict[str, Any]:
        """Serialize for the JSON response."""
        return {
            'files': self.files,
            'total': self.total,
            'page': self.page,
            'limit': self.limit,
            'totalPages': self.total_pages,
        }


def _encode_row(row: dict[str, Any]) -> dict[str, Any]:
    encoded = dict(row)
    encoded['file_size'] = encoded.pop('size_bytes')
    return encoded


def _paginate(
    queryset: QuerySet[StoredFile],
    fields: tuple[str, ...],
    page_request: PageRequest,
) -> FilePage:
    try:
        total = queryset.count()
        window = queryset.values(*fields)[
            page_request.offset:page_request.offset + page_request.limit
        ]
        files = [_encode_row(row) for row in window]
    except (DatabaseError, KeyError) as error:
        logger.exception('Failed to build file listing')
        raise ListingFailed() from error

    return FilePage(
        files=files,
        total=total,
        page=page_request.page,
        limit=page_request.limit,
        total_pages=page_request.total_pages(total),
    )


def list_public_files(page_request: PageRequest) -> FilePage:
    """List public files, newest first.

    Args:
        page_request: Requested page.

    Returns:
        FilePage, empty when the page lies past the end.

    Raises:
        ListingFailed: If the listing could not be built.
    """
    return _paginate(
        StoredFile.objects.filter(is_private=False),
        _PUBLIC_FIELDS,
        page_request,
    )


def list_owned_files(
    identity: ApiKeyIdentity,
    page_request: PageRequest,
) -> FilePage:
    """List every file uploaded with the caller's key, newest first.

    Raises:
        ListingFailed: If the listing could not be built.
    """
    return _paginate(
        StoredFile.objects.filter(api_key_id=identity.api_key_id),
        _OWNED_FIELDS,
        page_request,
    )
