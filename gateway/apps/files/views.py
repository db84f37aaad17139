"""HTTP endpoints for uploading, listing and serving files."""

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.http import content_disposition_header
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from gateway.apps.files.infrastructure.content_store import get_content_store
from gateway.apps.files.logic.ingestion import ingest_file
from gateway.apps.files.logic.listing import list_owned_files, list_public_files
from gateway.apps.files.logic.retrieval import (
    ANY_FILE,
    PRIVATE_IMAGE,
    PUBLIC_FILE,
    PUBLIC_IMAGE,
    PUBLIC_LOTTIE,
    AccessRule,
    RetrievedFile,
    retrieve_file,
)
from gateway.apps.files.logic.visibility import toggle_visibility
from gateway.apps.keys.logic.guard import resolve_api_key
from gateway.apps.search.index import get_search_index
from gateway.common.exceptions import ValidationFailed
from gateway.common.http import (
    api_key_from_request,
    parse_bool,
    parse_page_request,
    require_query_param,
)

_LOTTIE_CACHE_CONTROL = 'public, max-age=86400'


def _file_response(
    retrieved: RetrievedFile,
    *,
    inline: bool = True,
) -> HttpResponse:
    response = HttpResponse(retrieved.content, content_type=retrieved.mime_type)
    response['Content-Length'] = str(retrieved.size_bytes)
    if inline:
        response['Content-Disposition'] = content_disposition_header(
            as_attachment=False,
            filename=retrieved.file_name,
        )
    return response


def _retrieve(
    request: HttpRequest,
    rule: AccessRule,
    *,
    authenticated: bool,
) -> RetrievedFile:
    api_key_id = None
    if authenticated:
        api_key_id = resolve_api_key(api_key_from_request(request)).api_key_id
    cid = require_query_param(request, 'cid')
    return retrieve_file(cid, api_key_id, rule, get_content_store())


@csrf_exempt
@require_POST
def upload(request: HttpRequest) -> JsonResponse:
    """Store a multipart ``file`` upload for the calling key."""
    token = api_key_from_request(request)
    resolve_api_key(token)
    is_private = parse_bool(request.POST.get('is_private'), 'is_private')
    uploaded = request.FILES.get('file')
    if uploaded is None:
        raise ValidationFailed('No file uploaded')

    record = ingest_file(
        token=token,
        upload=uploaded,
        file_name=uploaded.name,
        mime_type=uploaded.content_type,
        is_private=is_private,
        content_store=get_content_store(),
        search_index=get_search_index(),
        scratch_dir=settings.UPLOAD_SCRATCH_DIR,
    )
    return JsonResponse({
        'cid': record.cid,
        'message': 'File uploaded successfully',
    })


@require_GET
def public_files(request: HttpRequest) -> JsonResponse:
    """List public files, one page at a time."""
    resolve_api_key(api_key_from_request(request))
    page = list_public_files(parse_page_request(request))
    return JsonResponse(page.as_dict())


@require_GET
def private_files(request: HttpRequest) -> JsonResponse:
    """List every file owned by the calling key."""
    identity = resolve_api_key(api_key_from_request(request))
    page = list_owned_files(identity, parse_page_request(request))
    return JsonResponse(page.as_dict())


@require_GET
def file_by_cid(request: HttpRequest) -> HttpResponse:
    """Serve any file the calling key may read."""
    return _file_response(_retrieve(request, ANY_FILE, authenticated=True))


@require_GET
def display_file(request: HttpRequest) -> HttpResponse:
    """Serve a public file inline, no key needed."""
    return _file_response(_retrieve(request, PUBLIC_FILE, authenticated=False))


@require_GET
def public_image(request: HttpRequest) -> HttpResponse:
    """Serve a public image, no key needed."""
    return _file_response(_retrieve(request, PUBLIC_IMAGE, authenticated=False))


@require_GET
def private_image(request: HttpRequest) -> HttpResponse:
    """Serve a private image to its owner."""
    return _file_response(_retrieve(request, PRIVATE_IMAGE, authenticated=True))


@require_GET
def lottie_file(request: HttpRequest) -> HttpResponse:
    """Serve a public Lottie animation (``application/json``)."""
    response = _file_response(
        _retrieve(request, PUBLIC_LOTTIE, authenticated=True),
        inline=False,
    )
    response['Cache-Control'] = _LOTTIE_CACHE_CONTROL
    return response


@csrf_exempt
@require_POST
def toggle_private(request: HttpRequest) -> JsonResponse:
    """Flip the privacy flag of a file owned by the calling key."""
    identity = resolve_api_key(api_key_from_request(request))
    cid = require_query_param(request, 'cid')
    record = toggle_visibility(cid, identity, get_search_index())
    return JsonResponse({
        'cid': record.cid,
        'is_private': record.is_private,
        'message': 'File privacy status updated successfully',
    })
