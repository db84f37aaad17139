"""Upload pipeline: stage, store, record, index."""

import logging
from typing import IO, Any

from django.db import IntegrityError, transaction

from gateway.apps.files.exceptions import ContentStoreError
from gateway.apps.files.infrastructure.content_store import ContentStoreClient
from gateway.apps.files.infrastructure.metadata import detect_mime_type
from gateway.apps.files.infrastructure.staging import staged_upload
from gateway.apps.files.models import StoredFile
from gateway.apps.keys.logic.guard import resolve_api_key
from gateway.apps.search.index import SearchIndex
from gateway.apps.search.logic.sync import document_for
from gateway.common.exceptions import DuplicateContent, UploadFailed

logger = logging.getLogger(__name__)


def ingest_file(  # noqa: WPS211
    *,
    token: str | None,
    upload: IO[bytes] | Any,
    file_name: str,
    mime_type: str | None,
    is_private: bool,
    content_store: ContentStoreClient,
    search_index: SearchIndex,
    scratch_dir: str | None = None,
) -> StoredFile:
    """Store an uploaded file and record its metadata.

    Order of effects: object store write, then the metadata insert, then
    (public files only) the index write. Nothing is recorded when the
    object store write fails. An index failure leaves the record and the
    object in place.

    Args:
        token: Caller's API key token.
        upload: Uploaded file or binary stream.
        file_name: Original file name.
        mime_type: Declared MIME type, detected from the name if empty.
        is_private: Whether only the owner may read the file.
        content_store: Object store client.
        search_index: Index that mirrors public files.
        scratch_dir: Directory for the staging file.

    Returns:
        Created StoredFile.

    Raises:
        Unauthorized: If the token is missing or unknown.
        UploadFailed: If the object store rejects the bytes.
        DuplicateContent: If these bytes are already recorded.
        IndexingFailed: If a public file could not be indexed.
    """
    identity = resolve_api_key(token)
    resolved_mime_type = mime_type or detect_mime_type(file_name)

    with staged_upload(upload, scratch_dir) as staged:
        try:
            cid = content_store.put(staged.file)
        except ContentStoreError as error:
            logger.exception('Upload of %s failed', file_name)
            raise UploadFailed() from error

        try:
            with transaction.atomic():
                record = StoredFile.objects.create(
                    cid=cid,
                    api_key_id=identity.api_key_id,
                    file_name=file_name,
                    mime_type=resolved_mime_type,
                    size_bytes=staged.size_bytes,
                    is_private=is_private,
                )
        except IntegrityError as error:
            if StoredFile.objects.filter(cid=cid).exists():
                logger.warning('Rejected duplicate content: %s', cid)
                raise DuplicateContent(cid) from error
            raise

    logger.info(
        'Stored %s as %s (%d bytes, private=%s)',
        file_name,
        cid,
        record.size_bytes,
        record.is_private,
    )

    if not record.is_private:
        search_index.index_document(document_for(record))

    return record
