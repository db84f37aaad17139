"""Mirror public file records into the search index."""

import logging

from gateway.apps.files.models import StoredFile
from gateway.apps.search.index import SearchDocument, SearchIndex
from gateway.common.exceptions import IndexingFailed

logger = logging.getLogger(__name__)


def document_for(record: StoredFile) -> SearchDocument:
    """Build the search document for a file record."""
    return SearchDocument(
        cid=record.cid,
        file_name=record.file_name,
        mime_type=record.mime_type,
        is_private=record.is_private,
    )


def sync_visibility(index: SearchIndex, record: StoredFile) -> None:
    """Make the index agree with the record's visibility.

    Public records are (re)indexed, private ones removed.

    Args:
        index: Search index to update.
        record: File record in its current state.

    Raises:
        IndexingFailed: If the index write fails.
    """
    if record.is_private:
        index.delete_document(record.cid)
    else:
        index.index_document(document_for(record))


def backfill_public_files(index: SearchIndex) -> int:
    """Index every public file record.

    Rows that fail to index are logged and skipped.

    Args:
        index: Search index to fill.

    Returns:
        Number of documents indexed.
    """
    indexed = 0
    public_files = (
        StoredFile.objects
        .filter(is_private=False)
        .only('cid', 'file_name', 'mime_type', 'is_private')
        .order_by('pk')
    )

    for record in public_files.iterator():
        try:
            index.index_document(document_for(record))
        except IndexingFailed:
            logger.warning('Skipping file during backfill: %s', record.cid)
            continue
        indexed += 1

    logger.info('Backfilled %d public files into the search index', indexed)
    return indexed
