"""Error taxonomy shared by every gateway app.

Each error maps to exactly one HTTP status. ``GatewayErrorMiddleware``
turns them into JSON responses, so logic code simply raises.
"""

from http import HTTPStatus
from typing import ClassVar

# Absent and forbidden records must be indistinguishable to the client.
_NOT_FOUND_MESSAGE = 'File not found or unauthorized access'


class GatewayError(Exception):
    """Base class for errors that terminate a request."""

    status_code: ClassVar[int] = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message: ClassVar[str] = 'Internal server error'

    def __init__(self, message: str | None = None) -> None:
        """Initialize GatewayError.

        Args:
            message: Human-readable message, defaults to the class message.
        """
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(GatewayError):
    """Malformed or missing request parameter or body."""

    status_code = HTTPStatus.BAD_REQUEST
    default_message = 'Invalid request'


class WrongMediaType(GatewayError):
    """Requested file does not have the MIME type the endpoint serves."""

    status_code = HTTPStatus.BAD_REQUEST
    default_message = 'Requested file has an unsupported media type'


class Unauthorized(GatewayError):
    """Missing or unknown API key."""

    status_code = HTTPStatus.UNAUTHORIZED
    default_message = 'Invalid API Key'


class Forbidden(GatewayError):
    """Known API key without the permission the operation needs."""

    status_code = HTTPStatus.FORBIDDEN
    default_message = 'Insufficient permissions'


class NotFound(GatewayError):
    """Requested record does not exist."""

    status_code = HTTPStatus.NOT_FOUND
    default_message = _NOT_FOUND_MESSAGE


class NotFoundOrUnauthorized(NotFound):
    """Record exists but the caller may not see it.

    Shares status and message with ``NotFound`` so the response never
    reveals that private content exists.
    """


class DuplicateContent(GatewayError):
    """Identical bytes were already ingested under the same content id."""

    status_code = HTTPStatus.CONFLICT
    default_message = 'File content already exists'

    def __init__(self, cid: str) -> None:
        """Initialize DuplicateContent.

        Args:
            cid: Content id that is already recorded.
        """
        self.cid = cid
        super().__init__(f'File content already exists: {cid}')


class UploadFailed(GatewayError):
    """Object-store write failed, nothing was recorded."""

    default_message = 'Failed to upload file to the content store'


class IndexingFailed(GatewayError):
    """Search index write failed after the record was stored."""

    default_message = 'Failed to index file'


class SearchFailed(GatewayError):
    """Search index query failed."""

    default_message = 'Search failed'


class EmptyContent(GatewayError):
    """Object store returned zero bytes for a recorded file."""

    default_message = 'File content is empty or could not be retrieved'


class ListingFailed(GatewayError):
    """A row could not be encoded while building a listing."""

    default_message = 'Failed to list files'
