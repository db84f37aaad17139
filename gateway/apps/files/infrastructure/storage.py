"""Custom storage backend for the S3-compatible object store."""

import logging
from typing import Any, Final, final, override

from botocore.exceptions import BotoCoreError, ClientError
from storages.backends.s3 import S3Storage

logger = logging.getLogger(__name__)

_MISSING_OBJECT_CODES: Final = frozenset(('404', 'NoSuchKey', 'NotFound'))


@final
class ContentStorage(S3Storage):
    """S3 storage backend holding file bytes under their content id.

    Extends django-storages S3Storage with:
    - Liveness check against the bucket
    - Enhanced error logging
    """

    @override
    def save(  # noqa: WPS211
        self,
        name: str,
        content: Any,
        max_length: int | None = None,
    ) -> str:
        """Save object to S3 with error handling and logging.

        Args:
            name: Object key (the content id).
            content: File content (file-like object).
            max_length: Optional maximum length for the key.

        Returns:
            Object key actually used.

        Raises:
            Exception: If S3 upload fails.
        """
        try:
            logger.info('Uploading object to storage: %s', name)
            saved_name = super().save(name, content, max_length)
            logger.info('Successfully uploaded object: %s', saved_name)
        except Exception:
            logger.exception('Failed to upload object to storage: %s', name)
            raise
        else:
            return saved_name

    def has_object(self, name: str) -> bool:
        """Check whether an object exists under the given key.

        Args:
            name: Object key (the content id).

        Returns:
            True if the object exists, False otherwise.

        Raises:
            ClientError: For S3 errors other than a missing object.
        """
        try:
            self.connection.meta.client.head_object(
                Bucket=self.bucket_name,
                Key=name,
            )
        except ClientError as error:
            if error.response['Error']['Code'] in _MISSING_OBJECT_CODES:
                return False
            raise
        return True

    def read_bytes(self, name: str) -> bytes:
        """Download a whole object.

        Args:
            name: Object key (the content id).

        Returns:
            Object bytes.

        Raises:
            Exception: If the object is missing or the download fails.
        """
        with self.open(name, 'rb') as stored:
            return stored.read()

    def is_available(self) -> bool:
        """Check that the bucket answers.

        Returns:
            True if the bucket is reachable, False otherwise.
        """
        try:
            self.connection.meta.client.head_bucket(Bucket=self.bucket_name)
        except (BotoCoreError, ClientError):
            logger.warning(
                'Storage liveness check failed for bucket: %s',
                self.bucket_name,
                exc_info=True,
            )
            return False
        return True
