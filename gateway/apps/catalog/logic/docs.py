"""Documentation page operations."""

import logging
from typing import Any, Final

from gateway.apps.catalog.models import Doc
from gateway.common.exceptions import NotFound, ValidationFailed

logger = logging.getLogger(__name__)

_TEXT_FIELDS: Final = ('title', 'path', 'doc_src')


def serialize_doc(doc: Doc) -> dict[str, Any]:
    """Encode a doc for a JSON response."""
    return {
        'id': doc.pk,
        'title': doc.title,
        'path': doc.path,
        'doc_src': doc.doc_src,
        'version': doc.version,
        'is_children': doc.is_children,
        'parent_id': doc.parent_id,
        'created_at': doc.created_at.isoformat(),
        'updated_at': doc.updated_at.isoformat(),
    }


def _clean_parent_id(raw_value: Any, doc_id: int | None) -> int | None:
    # 0 is what older clients send for "no parent"
    if raw_value is None or raw_value == 0:
        return None
    if isinstance(raw_value, bool) or not isinstance(raw_value, int):
        raise ValidationFailed('Invalid parent_id')
    if raw_value == doc_id or not Doc.objects.filter(pk=raw_value).exists():
        logger.warning('Rejected parent_id %s for doc %s', raw_value, doc_id)
        raise ValidationFailed('Invalid parent_id')
    return raw_value


def _clean_payload(
    payload: dict[str, Any],
    doc_id: int | None = None,
) -> dict[str, Any]:
    """Validate the writable fields present in ``payload``.

    Raises:
        ValidationFailed: If a field has the wrong type or the parent
            does not exist.
    """
    cleaned: dict[str, Any] = {}

    for field in _TEXT_FIELDS:
        if field in payload:
            if not isinstance(payload[field], str):
                raise ValidationFailed(f'Invalid {field} value')
            cleaned[field] = payload[field]

    if 'version' in payload:
        version = payload['version']
        if isinstance(version, bool) or not isinstance(version, int | float):
            raise ValidationFailed('Invalid version value')
        cleaned['version'] = float(version)

    if 'is_children' in payload:
        if not isinstance(payload['is_children'], bool):
            raise ValidationFailed('Invalid is_children value')
        cleaned['is_children'] = payload['is_children']

    if 'parent_id' in payload:
        cleaned['parent_id'] = _clean_parent_id(payload['parent_id'], doc_id)

    return cleaned


def list_docs() -> list[dict[str, Any]]:
    """Every doc, in creation order."""
    return [serialize_doc(doc) for doc in Doc.objects.all()]


def get_doc(doc_id: int) -> Doc:
    """Fetch a doc by id.

    Raises:
        NotFound: If no doc has this id.
    """
    doc = Doc.objects.filter(pk=doc_id).first()
    if doc is None:
        raise NotFound('Document not found')
    return doc


def create_doc(payload: dict[str, Any]) -> Doc:
    """Create a doc from a JSON payload.

    Args:
        payload: Decoded request body.

    Returns:
        Created Doc.

    Raises:
        ValidationFailed: If the payload is invalid.
    """
    doc = Doc.objects.create(**_clean_payload(payload))
    logger.info('Created doc %d: %s', doc.pk, doc.title)
    return doc


def update_doc(doc_id: int, payload: dict[str, Any]) -> Doc:
    """Apply the fields present in ``payload`` to an existing doc.

    Raises:
        NotFound: If no doc has this id.
        ValidationFailed: If the payload is invalid.
    """
    doc = get_doc(doc_id)
    for field, value in _clean_payload(payload, doc_id).items():
        setattr(doc, field, value)
    doc.save()
    logger.info('Updated doc %d', doc.pk)
    return doc


def delete_doc(doc_id: int) -> None:
    """Delete a doc, its children become top-level pages.

    Raises:
        NotFound: If no doc has this id.
    """
    get_doc(doc_id).delete()
    logger.info('Deleted doc %d', doc_id)
