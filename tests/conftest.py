"""Shared fixtures for gateway tests."""

from typing import BinaryIO

import pytest

from gateway.apps.files.infrastructure.content_store import (
    ContentStoreClient,
    get_content_store,
)
from gateway.apps.keys.models import ApiKey, Permission
from gateway.apps.search.index import SearchIndex, get_search_index

WRITE_TOKEN = 'w' * 64
READ_TOKEN = 'r' * 64
OTHER_WRITE_TOKEN = 'o' * 64


class InMemoryStorage:
    """Object storage double keeping bytes in a dict.

    ``available`` drives the liveness check and ``read_failures`` makes
    the next N reads raise.
    """

    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        self.available = True
        self.read_failures = 0
        self.fail_writes = False
        self.reads = 0
        self.saves = 0

    def has_object(self, name: str) -> bool:
        return name in self.objects

    def save(self, name: str, content: BinaryIO, max_length: int | None = None) -> str:
        if self.fail_writes:
            raise OSError('write rejected')
        self.saves += 1
        self.objects[name] = content.read()
        return name

    def read_bytes(self, name: str) -> bytes:
        self.reads += 1
        if self.read_failures:
            self.read_failures -= 1
            raise OSError('transient read failure')
        return self.objects[name]

    def is_available(self) -> bool:
        return self.available


@pytest.fixture(autouse=True)
def isolated_stores(settings, tmp_path):
    """Point the search index at a temporary file and reset cached clients.

    Yields:
        Path of the temporary search index.
    """
    settings.SEARCH_INDEX_PATH = str(tmp_path / 'files_index.sqlite3')
    get_search_index.cache_clear()
    get_content_store.cache_clear()
    yield settings.SEARCH_INDEX_PATH
    get_search_index.cache_clear()
    get_content_store.cache_clear()


@pytest.fixture
def search_index(isolated_stores) -> SearchIndex:
    """Search index shared with views and signals."""
    return get_search_index()


@pytest.fixture
def memory_storage() -> InMemoryStorage:
    """In-memory object storage."""
    return InMemoryStorage()


@pytest.fixture
def sleeps() -> list[float]:
    """Backoff delays recorded instead of slept."""
    return []


@pytest.fixture
def content_store(memory_storage, sleeps) -> ContentStoreClient:
    """Content store client over in-memory storage that never sleeps."""
    return ContentStoreClient(memory_storage, sleep=sleeps.append)


@pytest.fixture
def write_key(db) -> ApiKey:
    """API key with write permission."""
    return ApiKey.objects.create(
        token=WRITE_TOKEN,
        permission=Permission.WRITE,
        label='writer',
    )


@pytest.fixture
def read_key(db) -> ApiKey:
    """API key with read permission."""
    return ApiKey.objects.create(
        token=READ_TOKEN,
        permission=Permission.READ,
        label='reader',
    )


@pytest.fixture
def other_write_key(db) -> ApiKey:
    """Second write key, owner of nothing the other keys upload."""
    return ApiKey.objects.create(
        token=OTHER_WRITE_TOKEN,
        permission=Permission.WRITE,
        label='other writer',
    )
