"""Gateway settings: retry policy, scratch staging, search index, server."""

from gateway.settings.components import BASE_DIR, config

# Object-store read policy (never more than 3 attempts)
CONTENT_STORE_RETRY_ATTEMPTS = config(
    'CONTENT_STORE_RETRY_ATTEMPTS',
    cast=int,
    default=3,
)
CONTENT_STORE_RETRY_BACKOFF = config(
    'CONTENT_STORE_RETRY_BACKOFF',
    cast=float,
    default=2.0,
)
CONTENT_STORE_RETRY_JITTER = config(
    'CONTENT_STORE_RETRY_JITTER',
    cast=float,
    default=0.0,
)

# Uploads are staged here before being pushed to the object store.
# ``None`` means the system temporary directory.
UPLOAD_SCRATCH_DIR = config('UPLOAD_SCRATCH_DIR', default=None)
FILE_UPLOAD_TEMP_DIR = UPLOAD_SCRATCH_DIR

# Full-text index over public file metadata
SEARCH_INDEX_PATH = config(
    'SEARCH_INDEX_PATH',
    default=str(BASE_DIR / 'files_index.sqlite3'),
)

# Backfill the search index from public records when the server starts
INIT_INDEX = config('INIT_INDEX', cast=bool, default=False)

# WSGI server
GATEWAY_HOST = config('GATEWAY_HOST', default='0.0.0.0')  # noqa: S104
GATEWAY_PORT = config('GATEWAY_PORT', cast=int, default=8085)
