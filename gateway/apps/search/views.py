"""HTTP endpoint for full-text search over public files."""

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_GET

from gateway.apps.search.index import get_search_index
from gateway.common.http import parse_page_request, require_query_param


@require_GET
def search_public_files(request: HttpRequest) -> JsonResponse:
    """Search public file metadata.

    Query parameters: ``query`` (required), ``page`` and ``limit``.
    """
    query = require_query_param(request, 'query')
    page_request = parse_page_request(request)

    result = get_search_index().search(
        query,
        page_request.page,
        page_request.limit,
    )
    return JsonResponse({
        'results': [hit.as_dict() for hit in result.hits],
        'total': result.total,
        'totalPages': result.total_pages,
    })
