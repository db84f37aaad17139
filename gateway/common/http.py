"""Request parsing helpers shared by the HTTP layer."""

import json
import math
from dataclasses import dataclass
from typing import Any, Final

from django.http import HttpRequest

from gateway.common.exceptions import ValidationFailed

API_KEY_HEADER: Final = 'X-API-Key'

DEFAULT_PAGE: Final = 1
DEFAULT_LIMIT: Final = 10

# Same spellings Go's strconv.ParseBool accepts, which existing clients send.
_TRUE_VALUES: Final = frozenset(('1', 't', 'T', 'TRUE', 'true', 'True'))
_FALSE_VALUES: Final = frozenset(('0', 'f', 'F', 'FALSE', 'false', 'False'))


@dataclass(frozen=True, slots=True)
class PageRequest:
    """One page of a paginated listing."""

    page: int
    limit: int

    @property
    def offset(self) -> int:
        """Number of rows to skip."""
        return (self.page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        """Number of pages needed for ``total`` rows."""
        return math.ceil(total / self.limit)


def api_key_from_request(request: HttpRequest) -> str | None:
    """Read the API key header.

    Args:
        request: Incoming request.

    Returns:
        Token string, or None when the header is absent.
    """
    return request.headers.get(API_KEY_HEADER)


def parse_bool(raw_value: str | None, field_name: str) -> bool:
    """Parse a boolean form value.

    Args:
        raw_value: Submitted value.
        field_name: Field name used in the error message.

    Returns:
        Parsed boolean.

    Raises:
        ValidationFailed: If the value is missing or not a boolean.
    """
    if raw_value in _TRUE_VALUES:
        return True
    if raw_value in _FALSE_VALUES:
        return False
    raise ValidationFailed(f'Invalid {field_name} value')


def _positive_int(raw_value: str | None, default: int) -> int:
    if not raw_value:
        return default
    try:
        parsed = int(raw_value)
    except ValueError:
        return default
    return parsed if parsed >= 1 else default


def parse_page_request(request: HttpRequest) -> PageRequest:
    """Read ``page`` and ``limit`` query parameters.

    Missing, non-numeric or non-positive values fall back to page 1 and
    10 rows per page.

    Args:
        request: Incoming request.

    Returns:
        PageRequest for the listing.
    """
    return PageRequest(
        page=_positive_int(request.GET.get('page'), DEFAULT_PAGE),
        limit=_positive_int(request.GET.get('limit'), DEFAULT_LIMIT),
    )


def require_query_param(request: HttpRequest, name: str) -> str:
    """Return a mandatory query parameter.

    Raises:
        ValidationFailed: If the parameter is missing or blank.
    """
    value = request.GET.get(name, '').strip()
    if not value:
        raise ValidationFailed(f'Missing {name} parameter')
    return value


def parse_json_body(request: HttpRequest) -> dict[str, Any]:
    """Decode a JSON object request body.

    Raises:
        ValidationFailed: If the body is not a JSON object.
    """
    try:
        payload = json.loads(request.body or b'null')
    except (json.JSONDecodeError, UnicodeDecodeError) as error:
        raise ValidationFailed('Invalid request payload') from error
    if not isinstance(payload, dict):
        raise ValidationFailed('Invalid request payload')
    return payload


def require_int_param(request: HttpRequest, name: str) -> int:
    """Return a mandatory integer query parameter.

    Raises:
        ValidationFailed: If the parameter is missing or not an integer.
    """
    raw_value = require_query_param(request, name)
    try:
        return int(raw_value)
    except ValueError as error:
        raise ValidationFailed(f'Invalid {name} parameter') from error
