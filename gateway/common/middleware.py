"""Middleware mapping the error taxonomy to HTTP responses."""

import logging
from collections.abc import Callable
from typing import final

from django.http import HttpRequest, HttpResponse, JsonResponse

from gateway.common.exceptions import GatewayError

logger = logging.getLogger(__name__)

_SERVER_ERROR_THRESHOLD = 500


@final
class GatewayErrorMiddleware:
    """Convert ``GatewayError`` raised by views into JSON error responses.

    Any other exception is left to Django's default handling.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Initialize the middleware.

        Args:
            get_response: Next handler in the middleware chain.
        """
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Pass the request through unchanged."""
        return self.get_response(request)

    def process_exception(
        self,
        request: HttpRequest,
        exception: Exception,
    ) -> HttpResponse | None:
        """Render gateway errors.

        Args:
            request: Request being processed.
            exception: Exception raised by the view.

        Returns:
            JSON error response, or None for foreign exceptions.
        """
        if not isinstance(exception, GatewayError):
            return None

        status = int(exception.status_code)
        if status >= _SERVER_ERROR_THRESHOLD:
            logger.error(
                '%s %s failed: %s',
                request.method,
                request.path,
                exception.message,
                exc_info=exception,
            )
        else:
            logger.warning(
                '%s %s rejected (%d): %s',
                request.method,
                request.path,
                status,
                exception.message,
            )

        return JsonResponse({'error': exception.message}, status=status)
