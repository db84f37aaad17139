"""Authorization guard.

Resolves API key tokens to identities and decides read/write eligibility.
Read access to someone else's private file is reported exactly like a
missing file so private content never leaks its existence.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from gateway.apps.keys.models import ApiKey, Permission
from gateway.common.exceptions import Forbidden, Unauthorized

if TYPE_CHECKING:
    from gateway.apps.files.models import StoredFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ApiKeyIdentity:
    """Resolved caller."""

    api_key_id: int
    permission: str

    @property
    def can_write(self) -> bool:
        """Whether this caller may run write-class operations."""
        return can_write(self.permission)


def resolve_api_key(token: str | None) -> ApiKeyIdentity:
    """Resolve a token to the caller identity.

    Args:
        token: Value of the X-API-Key header.

    Returns:
        Identity with key id and permission level.

    Raises:
        Unauthorized: If the token is missing or unknown.
    """
    if not token or not token.strip():
        raise Unauthorized('Missing API Key')

    row = (
        ApiKey.objects
        .filter(token=token.strip())
        .values_list('pk', 'permission')
        .first()
    )
    if row is None:
        logger.warning('Rejected unknown API key')
        raise Unauthorized('Invalid API Key')

    api_key_id, permission = row
    return ApiKeyIdentity(api_key_id=api_key_id, permission=permission)


def can_write(permission: str) -> bool:
    """Return True iff the permission allows write-class operations."""
    return permission == Permission.WRITE


def require_write(identity: ApiKeyIdentity) -> None:
    """Ensure the caller may run a write-class operation.

    Raises:
        Forbidden: If the key only has read permission.
    """
    if not identity.can_write:
        logger.warning(
            'Write operation refused for read-only key %d',
            identity.api_key_id,
        )
        raise Forbidden()


def can_read(record: 'StoredFile', api_key_id: int | None) -> bool:
    """Decide whether a caller may read a file.

    Args:
        record: File metadata.
        api_key_id: Caller's key id, None for anonymous callers.

    Returns:
        True if the file is public or owned by the caller.
    """
    if not record.is_private:
        return True
    return api_key_id is not None and record.api_key_id == api_key_id


def resolve_writer(token: str | None) -> ApiKeyIdentity:
    """Resolve a token and require write permission in one step.

    Raises:
        Unauthorized: If the token is missing or unknown.
        Forbidden: If the key only has read permission.
    """
    identity = resolve_api_key(token)
    require_write(identity)
    return identity
