"""Flip a file between public and private."""

import logging

from django.db import transaction

from gateway.apps.files.models import StoredFile
from gateway.apps.keys.logic.guard import ApiKeyIdentity, require_write
from gateway.apps.search.index import SearchIndex
from gateway.apps.search.logic.sync import sync_visibility
from gateway.common.exceptions import NotFoundOrUnauthorized

logger = logging.getLogger(__name__)


def toggle_visibility(
    cid: str,
    identity: ApiKeyIdentity,
    search_index: SearchIndex,
) -> StoredFile:
    """Toggle the privacy flag of a file owned by the caller.

    The flag is flipped under a row lock and committed before the index
    is touched. An index failure therefore leaves the flag flipped.

    Args:
        cid: Content id of the file.
        identity: Caller.
        search_index: Index that mirrors public files.

    Returns:
        Updated StoredFile.

    Raises:
        Forbidden: If the caller's key is read-only.
        NotFoundOrUnauthorized: If the caller owns no file with this id.
        IndexingFailed: If the index could not be brought in line.
    """
    require_write(identity)

    with transaction.atomic():
        record = (
            StoredFile.objects
            .select_for_update()
            .filter(cid=cid, api_key_id=identity.api_key_id)
            .first()
        )
        if record is None:
            raise NotFoundOrUnauthorized()

        record.is_private = not record.is_private
        record.save(update_fields=['is_private'])

    logger.info(
        'Key %d set %s to %s',
        identity.api_key_id,
        cid,
        record.visibility,
    )
    sync_visibility(search_index, record)
    return record
