"""Database models for catalog app."""

from typing import ClassVar, Final, final, override

from django.db import models

_TITLE_MAX_LENGTH: Final = 255
_PATH_MAX_LENGTH: Final = 512
_CID_MAX_LENGTH: Final = 128
_NAME_MAX_LENGTH: Final = 255


@final
class Doc(models.Model):
    """Documentation page, optionally nested under a parent page."""

    title = models.CharField(max_length=_TITLE_MAX_LENGTH)

    path = models.CharField(
        max_length=_PATH_MAX_LENGTH,
        blank=True,
        default='',
    )

    doc_src = models.TextField(
        blank=True,
        default='',
        help_text='Page source',
    )

    version = models.FloatField(default=0)

    is_children = models.BooleanField(default=False)

    parent = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='children',
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Doc'  # type: ignore[mutable-override]
        verbose_name_plural = 'Docs'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['id']

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.title} (v{self.version})'


@final
class CidTheme(models.Model):
    """Named theme pointing at stored content."""

    cid = models.CharField(
        max_length=_CID_MAX_LENGTH,
        help_text='Content id of the theme asset',
    )

    name = models.CharField(max_length=_NAME_MAX_LENGTH)

    class Meta:
        """Model metadata."""

        verbose_name = 'CID Theme'  # type: ignore[mutable-override]
        verbose_name_plural = 'CID Themes'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['id']

    @override
    def __str__(self) -> str:
        """String representation."""
        return self.name
