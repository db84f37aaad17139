"""Download pipeline: look up, authorize, fetch."""

import logging
from dataclasses import dataclass
from typing import Final

from gateway.apps.files.infrastructure.content_store import ContentStoreClient
from gateway.apps.files.models import StoredFile, Visibility
from gateway.apps.keys.logic.guard import can_read
from gateway.common.exceptions import (
    EmptyContent,
    NotFound,
    NotFoundOrUnauthorized,
    WrongMediaType,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AccessRule:
    """What an endpoint is willing to serve.

    ``visibility`` limits the endpoint to public or private files (any
    when None). ``mime_prefix`` and ``mime_exact`` restrict the media type.
    """

    visibility: Visibility | None = None
    mime_prefix: str | None = None
    mime_exact: str | None = None

    def allows_visibility(self, record: StoredFile) -> bool:
        """Whether the endpoint serves files with this visibility."""
        return self.visibility is None or record.visibility == self.visibility

    def allows_media_type(self, mime_type: str) -> bool:
        """Whether the endpoint serves this MIME type."""
        if self.mime_prefix is not None and not mime_type.startswith(self.mime_prefix):
            return False
        return self.mime_exact is None or mime_type == self.mime_exact


ANY_FILE: Final = AccessRule()
PUBLIC_FILE: Final = AccessRule(visibility=Visibility.PUBLIC)
PUBLIC_IMAGE: Final = AccessRule(
    visibility=Visibility.PUBLIC,
    mime_prefix='image/',
)
PRIVATE_IMAGE: Final = AccessRule(
    visibility=Visibility.PRIVATE,
    mime_prefix='image/',
)
PUBLIC_LOTTIE: Final = AccessRule(
    visibility=Visibility.PUBLIC,
    mime_exact='application/json',
)


@dataclass(frozen=True, slots=True)
class RetrievedFile:
    """File bytes plus what the response headers need."""

    content: bytes
    mime_type: str
    file_name: str

    @property
    def size_bytes(self) -> int:
        """Length of the content."""
        return len(self.content)


def retrieve_file(
    cid: str,
    api_key_id: int | None,
    rule: AccessRule,
    content_store: ContentStoreClient,
) -> RetrievedFile:
    """Fetch a file the caller is allowed to read.

    The record is checked before the object store is touched, so unknown
    ids never cost a store round-trip.

    Args:
        cid: Content id to fetch.
        api_key_id: Caller's key id, None for anonymous callers.
        rule: Endpoint restrictions.
        content_store: Object store client.

    Returns:
        RetrievedFile with content and metadata.

    Raises:
        NotFound: If no record has this content id.
        NotFoundOrUnauthorized: If the caller may not read the record.
        WrongMediaType: If the endpoint does not serve the file's type.
        BackendUnavailable: If the object store is down.
        RetrievalFailed: If every read attempt failed.
        EmptyContent: If the object store returned no bytes.
    """
    record = StoredFile.objects.filter(cid=cid).first()
    if record is None:
        raise NotFound()

    if not rule.allows_visibility(record) or not can_read(record, api_key_id):
        logger.warning(
            'Refused access to %s for key %s',
            cid,
            api_key_id,
        )
        raise NotFoundOrUnauthorized()

    if not rule.allows_media_type(record.mime_type):
        raise WrongMediaType()

    content = content_store.get(cid)
    if not content:
        logger.error('Content store returned no bytes for %s', cid)
        raise EmptyContent()

    logger.info('Serving %s (%d bytes)', cid, len(content))
    return RetrievedFile(
        content=content,
        mime_type=record.mime_type,
        file_name=record.file_name,
    )
