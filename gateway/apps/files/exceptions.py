"""Exceptions for files app."""

from gateway.common.exceptions import GatewayError


class ContentStoreError(GatewayError):
    """Base class for object-store failures."""

    default_message = 'Content store error'


class BackendUnavailable(ContentStoreError):
    """Object store failed its liveness check."""

    default_message = 'Content store is not available'


class WriteFailed(ContentStoreError):
    """Object store rejected or failed a write."""

    default_message = 'Failed to write content to the content store'


class RetrievalFailed(ContentStoreError):
    """Every read attempt for a content id failed."""

    def __init__(
        self,
        cid: str,
        attempts: int,
        cause: BaseException | None,
    ) -> None:
        """Initialize RetrievalFailed.

        Args:
            cid: Content id that could not be read.
            attempts: Number of attempts made.
            cause: Error raised by the last attempt.
        """
        self.cid = cid
        self.attempts = attempts
        self.cause = cause
        super().__init__(
            f'Failed to retrieve {cid} from the content store '
            f'after {attempts} attempts',
        )
