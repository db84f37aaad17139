"""Tests for GET /search-public-files."""

from http import HTTPStatus

import pytest

from gateway.apps.search.index import SearchDocument


@pytest.fixture
def indexed(search_index):
    """Index 25 photos and one document."""
    for number in range(25):
        search_index.index_document(SearchDocument(
            cid=f'bafkreiphoto{number}',
            file_name=f'photo {number}.jpg',
            mime_type='image/jpeg',
        ))
    search_index.index_document(SearchDocument(
        cid='bafkreidoc',
        file_name='hello.txt',
        mime_type='text/plain',
    ))
    return search_index


def test_search(client, indexed):
    """Results carry cid, name and type."""
    response = client.get('/search-public-files', {'query': 'hello.txt'})

    assert response.status_code == HTTPStatus.OK
    assert response.json() == {
        'results': [{
            'cid': 'bafkreidoc',
            'file_name': 'hello.txt',
            'mime_type': 'text/plain',
        }],
        'total': 1,
        'totalPages': 1,
    }


def test_search_paging(client, indexed):
    """Paging parameters slice the results."""
    body = client.get(
        '/search-public-files',
        {'query': 'photo', 'page': 3, 'limit': 10},
    ).json()

    assert body['total'] == 25
    assert body['totalPages'] == 3
    assert len(body['results']) == 5


def test_search_missing_query(client):
    """Query parameter is mandatory."""
    response = client.get('/search-public-files')

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.json() == {'error': 'Missing query parameter'}


def test_search_wrong_method(client):
    """Only GET is allowed."""
    response = client.post('/search-public-files?query=x')

    assert response.status_code == HTTPStatus.METHOD_NOT_ALLOWED
