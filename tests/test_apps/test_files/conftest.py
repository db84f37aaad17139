"""Shared fixtures for files app tests."""

import itertools

import boto3
import pytest
from moto import mock_aws

from gateway.apps.files.models import StoredFile

_BUCKET = 'gateway-content'


@pytest.fixture
def mock_s3():
    """Mock S3 service with the content bucket.

    Yields:
        boto3 S3 resource with the content bucket created.
    """
    with mock_aws():
        conn = boto3.resource('s3', region_name='us-east-1')
        conn.create_bucket(Bucket=_BUCKET)
        yield conn


@pytest.fixture
def make_file(db):
    """Factory creating file records without touching any store.

    Returns:
        Callable building a StoredFile owned by the given key.
    """
    counter = itertools.count(1)

    def factory(api_key, **overrides):
        number = next(counter)
        fields = {
            'cid': f'bafkreitest{number:04d}',
            'file_name': f'file-{number}.txt',
            'mime_type': 'text/plain',
            'size_bytes': 10,
            'is_private': False,
        }
        fields.update(overrides)
        return StoredFile.objects.create(api_key=api_key, **fields)

    return factory


@pytest.fixture
def stored_file(make_file, write_key, memory_storage):
    """Public text file whose bytes are in the in-memory store."""
    record = make_file(write_key, file_name='notes.txt', size_bytes=11)
    memory_storage.objects[record.cid] = b'hello notes'
    return record


@pytest.fixture
def memory_views(monkeypatch, content_store):
    """Make the file views use the in-memory content store.

    Returns:
        The content store client the views now use.
    """
    monkeypatch.setattr(
        'gateway.apps.files.views.get_content_store',
        lambda: content_store,
    )
    return content_store
