"""Signal handlers for files app."""

import logging

from django.db.models.signals import post_delete
from django.dispatch import receiver

from gateway.apps.files.models import StoredFile
from gateway.apps.search.index import get_search_index
from gateway.common.exceptions import IndexingFailed

logger = logging.getLogger(__name__)


@receiver(post_delete, sender=StoredFile)
def remove_from_search_index(
    sender: type[StoredFile],
    instance: StoredFile,
    **kwargs: object,
) -> None:
    """Drop the search document when a file record is deleted.

    Records are only deleted out-of-band (admin, shell). The stored
    object is left in place, content-addressed objects may be shared.

    Args:
        sender: The StoredFile model class.
        instance: The StoredFile instance being deleted.
        **kwargs: Additional signal arguments.
    """
    try:
        get_search_index().delete_document(instance.cid)
    except IndexingFailed:
        # DB delete already succeeded, a rebuild removes the stale document
        logger.exception(
            'Search document left behind for deleted file: %s',
            instance.cid,
        )
