"""Database models for keys app."""

from typing import ClassVar, Final, final, override

from django.db import models

_TOKEN_MAX_LENGTH: Final = 128
_LABEL_MAX_LENGTH: Final = 255


class Permission(models.TextChoices):
    """Capability carried by an API key."""

    READ = 'read', 'Read'
    WRITE = 'write', 'Write'


@final
class ApiKey(models.Model):
    """Bearer token identifying a caller.

    The key is also the ownership scope for every file uploaded with it.
    Keys are created out-of-band (admin or ``create_api_key``) and are
    read-only from the gateway's point of view.
    """

    token = models.CharField(
        max_length=_TOKEN_MAX_LENGTH,
        unique=True,
        help_text='Secret sent in the X-API-Key header',
    )

    permission = models.CharField(
        max_length=5,
        choices=Permission.choices,
        default=Permission.READ,
        help_text='Write keys may create, update, delete and toggle',
    )

    label = models.CharField(
        max_length=_LABEL_MAX_LENGTH,
        blank=True,
        default='',
        help_text='Who or what the key was issued to',
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'API Key'  # type: ignore[mutable-override]
        verbose_name_plural = 'API Keys'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-created_at']

    @override
    def __str__(self) -> str:
        """String representation without leaking the token."""
        return f'{self.label or "key"} #{self.pk} ({self.permission})'
