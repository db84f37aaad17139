"""Theme to content id links."""

import logging
from typing import Any

from gateway.apps.catalog.models import CidTheme
from gateway.common.exceptions import NotFound, ValidationFailed

logger = logging.getLogger(__name__)


def serialize_theme(theme: CidTheme) -> dict[str, Any]:
    """Encode a theme for a JSON response."""
    return {'id': theme.pk, 'cid': theme.cid, 'name': theme.name}


def _clean_payload(payload: dict[str, Any]) -> dict[str, str]:
    cleaned = {}
    for field in ('cid', 'name'):
        value = payload.get(field)
        if not isinstance(value, str) or not value.strip():
            raise ValidationFailed(f'Invalid {field} value')
        cleaned[field] = value.strip()
    return cleaned


def _get_theme(theme_id: Any) -> CidTheme:
    if isinstance(theme_id, bool) or not isinstance(theme_id, int):
        raise ValidationFailed('Missing id parameter')
    theme = CidTheme.objects.filter(pk=theme_id).first()
    if theme is None:
        raise NotFound('Theme not found')
    return theme


def list_themes() -> list[dict[str, Any]]:
    """Every theme, in creation order."""
    return [serialize_theme(theme) for theme in CidTheme.objects.all()]


def add_theme(payload: dict[str, Any]) -> CidTheme:
    """Create a theme from ``{cid, name}``.

    Raises:
        ValidationFailed: If cid or name is missing.
    """
    theme = CidTheme.objects.create(**_clean_payload(payload))
    logger.info('Added theme %d: %s', theme.pk, theme.name)
    return theme


def update_theme(payload: dict[str, Any]) -> CidTheme:
    """Replace cid and name of the theme identified by ``payload['id']``.

    Raises:
        ValidationFailed: If id, cid or name is missing.
        NotFound: If no theme has this id.
    """
    theme = _get_theme(payload.get('id'))
    for field, value in _clean_payload(payload).items():
        setattr(theme, field, value)
    theme.save()
    logger.info('Updated theme %d', theme.pk)
    return theme


def delete_theme(theme_id: int) -> None:
    """Delete a theme.

    Raises:
        NotFound: If no theme has this id.
    """
    _get_theme(theme_id).delete()
    logger.info('Deleted theme %d', theme_id)
