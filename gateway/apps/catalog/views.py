"""HTTP endpoints for docs and CID themes.

Reads are open, every write needs a key with write permission.
"""

from http import HTTPStatus

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from gateway.apps.catalog.logic import docs, themes
from gateway.apps.keys.logic.guard import resolve_writer
from gateway.common.exceptions import ValidationFailed
from gateway.common.http import (
    api_key_from_request,
    parse_json_body,
    require_int_param,
)


@csrf_exempt
@require_http_methods(['GET', 'POST'])
def doc_collection(request: HttpRequest) -> JsonResponse:
    """List docs or create one."""
    if request.method == 'GET':
        return JsonResponse(docs.list_docs(), safe=False)

    resolve_writer(api_key_from_request(request))
    doc = docs.create_doc(parse_json_body(request))
    return JsonResponse(docs.serialize_doc(doc), status=HTTPStatus.CREATED)


@csrf_exempt
@require_http_methods(['GET', 'PUT', 'DELETE'])
def doc_detail(request: HttpRequest) -> JsonResponse:
    """Get, update or delete the doc named by ``?id=``."""
    if request.method == 'GET':
        doc = docs.get_doc(require_int_param(request, 'id'))
        return JsonResponse(docs.serialize_doc(doc))

    resolve_writer(api_key_from_request(request))

    if request.method == 'DELETE':
        docs.delete_doc(require_int_param(request, 'id'))
        return JsonResponse({'message': 'Document deleted successfully'})

    payload = parse_json_body(request)
    if 'id' in request.GET:
        doc_id = require_int_param(request, 'id')
    else:
        doc_id = payload.get('id')
        if isinstance(doc_id, bool) or not isinstance(doc_id, int):
            raise ValidationFailed('Missing id parameter')
    doc = docs.update_doc(doc_id, payload)
    return JsonResponse(docs.serialize_doc(doc))


@csrf_exempt
@require_http_methods(['GET', 'POST', 'PUT', 'DELETE'])
def cid_themes(request: HttpRequest) -> JsonResponse:
    """List, add, update or delete CID themes."""
    if request.method == 'GET':
        return JsonResponse(themes.list_themes(), safe=False)

    resolve_writer(api_key_from_request(request))

    if request.method == 'DELETE':
        themes.delete_theme(require_int_param(request, 'id'))
        return JsonResponse({'message': 'CidTheme deleted successfully'})

    payload = parse_json_body(request)
    if request.method == 'POST':
        theme = themes.add_theme(payload)
        return JsonResponse(
            themes.serialize_theme(theme),
            status=HTTPStatus.CREATED,
        )

    theme = themes.update_theme(payload)
    return JsonResponse(themes.serialize_theme(theme))
