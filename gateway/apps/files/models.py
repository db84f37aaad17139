"""Database models for files app."""

from typing import ClassVar, Final, final, override

from django.db import models

from gateway.apps.keys.models import ApiKey

# Constants for field max lengths
_CID_MAX_LENGTH: Final = 128
_FILE_NAME_MAX_LENGTH: Final = 255
_MIME_TYPE_MAX_LENGTH: Final = 255


class Visibility(models.TextChoices):
    """Who may read a file."""

    PUBLIC = 'public', 'Public'
    PRIVATE = 'private', 'Private'


@final
class StoredFile(models.Model):
    """Metadata for one object in the content-addressed store.

    The content id is the object-store key: unique, derived from the
    bytes and never reused. The owning key is fixed at creation, only
    ``is_private`` changes afterwards. Public records are mirrored into
    the search index.
    """

    cid = models.CharField(
        max_length=_CID_MAX_LENGTH,
        unique=True,
        help_text='Content identifier returned by the object store',
    )

    # Ownership cannot be transferred and keys with files cannot be dropped
    api_key = models.ForeignKey(
        ApiKey,
        on_delete=models.PROTECT,
        related_name='files',
        db_index=True,
    )

    file_name = models.CharField(
        max_length=_FILE_NAME_MAX_LENGTH,
        help_text='Original name of the uploaded file',
    )

    mime_type = models.CharField(
        max_length=_MIME_TYPE_MAX_LENGTH,
        help_text='MIME type declared by the uploader',
    )

    size_bytes = models.BigIntegerField(
        help_text='File size in bytes',
    )

    is_private = models.BooleanField(
        default=False,
        db_index=True,
        help_text='Private files are readable by their owner only',
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'File'  # type: ignore[mutable-override]
        verbose_name_plural = 'Files'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-created_at', '-id']

        indexes: ClassVar[list[models.Index]] = [
            # Owner listings
            models.Index(
                fields=['api_key', '-created_at'],
                name='files_owner_recent_idx',
            ),
        ]

        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.CheckConstraint(
                condition=models.Q(size_bytes__gte=0),
                name='files_size_bytes_non_negative',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.file_name} ({self.cid})'

    @property
    def visibility(self) -> Visibility:
        """Visibility derived from the privacy flag."""
        return Visibility.PRIVATE if self.is_private else Visibility.PUBLIC
