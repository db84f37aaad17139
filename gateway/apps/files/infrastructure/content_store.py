"""Client for the content-addressed object store.

Wraps the storage capability ``{put, get, is_available}`` and applies the
read retry policy: a bounded number of attempts (three by default, never
more) with a fixed backoff between them. Every failure is treated as
transient and retried the same way, except a failed liveness check which
ends the read immediately.
"""

import functools
import logging
import random
import time
from collections.abc import Callable
from typing import BinaryIO, Final, Protocol

from django.conf import settings
from django.core.files.storage import storages

from gateway.apps.files.exceptions import (
    BackendUnavailable,
    RetrievalFailed,
    WriteFailed,
)
from gateway.apps.files.infrastructure.metadata import compute_cid

logger = logging.getLogger(__name__)

MAX_ATTEMPTS: Final = 3
DEFAULT_BACKOFF_SECONDS: Final = 2.0

_STORAGE_ALIAS: Final = 'content'


class ObjectStorage(Protocol):
    """Storage operations the client relies on."""

    def has_object(self, name: str) -> bool:
        """Whether an object is stored under ``name``."""

    def save(self, name: str, content: BinaryIO, max_length: int | None = None) -> str:
        """Store ``content`` under ``name``."""

    def read_bytes(self, name: str) -> bytes:
        """Download the object stored under ``name``."""

    def is_available(self) -> bool:
        """Liveness check."""


class ContentStoreClient:
    """Content-addressed put/get with bounded read retries."""

    def __init__(  # noqa: WPS211
        self,
        storage: ObjectStorage,
        *,
        attempts: int = MAX_ATTEMPTS,
        backoff: float = DEFAULT_BACKOFF_SECONDS,
        jitter: float = 0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the client.

        Args:
            storage: Object storage backend.
            attempts: Read attempts, clamped to 1..3.
            backoff: Seconds to wait between read attempts.
            jitter: Upper bound of random seconds added to each wait.
            sleep: Wait function, replaced in tests.
        """
        self._storage = storage
        self._attempts = min(max(attempts, 1), MAX_ATTEMPTS)
        self._backoff = backoff
        self._jitter = jitter
        self._sleep = sleep

    @property
    def attempts(self) -> int:
        """Maximum number of read attempts."""
        return self._attempts

    def is_available(self) -> bool:
        """Return True if the object store answers its liveness check."""
        return self._storage.is_available()

    def put(self, file_obj: BinaryIO) -> str:
        """Store bytes and return their content id.

        Identical bytes always yield the same id; an object already stored
        under that id is not uploaded again.

        Args:
            file_obj: Seekable binary file to store.

        Returns:
            Content id of the stored bytes.

        Raises:
            BackendUnavailable: If the liveness check fails.
            WriteFailed: If the storage write fails.
        """
        if not self.is_available():
            raise BackendUnavailable()

        cid = compute_cid(file_obj)
        try:
            if self._storage.has_object(cid):
                logger.info('Content already stored, skipping upload: %s', cid)
            else:
                self._storage.save(cid, file_obj)
        except Exception as error:
            logger.exception('Failed to store content: %s', cid)
            raise WriteFailed() from error

        return cid

    def get(self, cid: str) -> bytes:
        """Fetch bytes by content id, retrying failed attempts.

        Args:
            cid: Content id to fetch.

        Returns:
            Stored bytes (possibly empty, callers decide what that means).

        Raises:
            BackendUnavailable: If the liveness check fails on any attempt.
            RetrievalFailed: If every attempt failed.
        """
        last_error: Exception | None = None

        for attempt in range(1, self._attempts + 1):
            if not self.is_available():
                logger.error(
                    'Attempt %d: content store unavailable, giving up on %s',
                    attempt,
                    cid,
                )
                raise BackendUnavailable()

            logger.info('Attempt %d: downloading %s', attempt, cid)
            try:
                content = self._storage.read_bytes(cid)
            except Exception as error:
                last_error = error
                logger.warning(
                    'Attempt %d: failed to download %s: %s',
                    attempt,
                    cid,
                    error,
                )
            else:
                logger.info(
                    'Attempt %d: downloaded %s (%d bytes)',
                    attempt,
                    cid,
                    len(content),
                )
                return content

            if attempt < self._attempts:
                self._sleep(self._backoff_delay())

        raise RetrievalFailed(cid, self._attempts, last_error)

    def _backoff_delay(self) -> float:
        if self._jitter <= 0:
            return self._backoff
        return self._backoff + random.uniform(0, self._jitter)  # noqa: S311


@functools.cache
def get_content_store() -> ContentStoreClient:
    """Process-wide content store client built from settings.

    Returns:
        ContentStoreClient over the ``content`` storage alias.
    """
    return ContentStoreClient(
        storages[_STORAGE_ALIAS],
        attempts=settings.CONTENT_STORE_RETRY_ATTEMPTS,
        backoff=settings.CONTENT_STORE_RETRY_BACKOFF,
        jitter=settings.CONTENT_STORE_RETRY_JITTER,
    )
