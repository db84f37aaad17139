"""End-to-end tests for the files HTTP endpoints."""

from http import HTTPStatus

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from gateway.apps.files.models import StoredFile


def _upload(client, token, name='hello.txt', content=b'hello world', **form):
    data = {
        'file': SimpleUploadedFile(name, content, content_type='text/plain'),
        'is_private': 'false',
    }
    data.update(form)
    headers = {'X-API-Key': token} if token else {}
    return client.post('/upload', data, headers=headers)


@pytest.mark.django_db
@pytest.mark.usefixtures('memory_views')
class TestUpload:
    """Tests for POST /upload."""

    def test_upload(self, client, write_key, memory_storage):
        """Upload answers with the content id."""
        response = _upload(client, write_key.token)

        assert response.status_code == HTTPStatus.OK
        body = response.json()
        assert body['message'] == 'File uploaded successfully'
        assert body['cid'] in memory_storage.objects
        assert StoredFile.objects.get(cid=body['cid']).file_name == 'hello.txt'

    @pytest.mark.parametrize('flag', ['true', '1', 'T', 'TRUE'])
    def test_upload_private_spellings(self, client, write_key, flag):
        """Boolean spellings accepted by the form parser."""
        response = _upload(client, write_key.token, is_private=flag)

        assert response.status_code == HTTPStatus.OK
        assert StoredFile.objects.get().is_private

    def test_invalid_is_private(self, client, write_key):
        """Unparseable flag is a bad request."""
        response = _upload(client, write_key.token, is_private='maybe')

        assert response.status_code == HTTPStatus.BAD_REQUEST
        assert response.json() == {'error': 'Invalid is_private value'}

    def test_missing_file(self, client, write_key):
        """Form without a file is a bad request."""
        response = client.post(
            '/upload',
            {'is_private': 'false'},
            headers={'X-API-Key': write_key.token},
        )

        assert response.status_code == HTTPStatus.BAD_REQUEST

    def test_missing_key(self, client, write_key):
        """Upload without a key is unauthorized."""
        response = _upload(client, None)

        assert response.status_code == HTTPStatus.UNAUTHORIZED
        assert response.json() == {'error': 'Missing API Key'}

    def test_key_checked_before_form(self, client, db):
        """A keyless request with an empty form is unauthorized."""
        response = client.post('/upload', {})

        assert response.status_code == HTTPStatus.UNAUTHORIZED
        assert response.json() == {'error': 'Missing API Key'}

    def test_unknown_key_with_bad_flag(self, client, db):
        """An unknown key wins over a malformed is_private value."""
        response = _upload(client, 'unknown-token', is_private='maybe')

        assert response.status_code == HTTPStatus.UNAUTHORIZED

    def test_duplicate(self, client, write_key):
        """Uploading identical bytes twice conflicts."""
        _upload(client, write_key.token)
        response = _upload(client, write_key.token, name='again.txt')

        assert response.status_code == HTTPStatus.CONFLICT

    def test_store_down(self, client, write_key, memory_storage):
        """Object store failure is a server error."""
        memory_storage.available = False

        response = _upload(client, write_key.token)

        assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
        assert StoredFile.objects.count() == 0

    def test_wrong_method(self, client, write_key):
        """GET is not allowed on /upload."""
        response = client.get('/upload', headers={'X-API-Key': write_key.token})

        assert response.status_code == HTTPStatus.METHOD_NOT_ALLOWED


@pytest.mark.django_db
@pytest.mark.usefixtures('memory_views')
class TestServeFile:
    """Tests for the file serving endpoints."""

    def test_file_headers(self, client, stored_file, read_key):
        """Served files carry type, inline disposition and length."""
        response = client.get(
            '/file',
            {'cid': stored_file.cid},
            headers={'X-API-Key': read_key.token},
        )

        assert response.status_code == HTTPStatus.OK
        assert response.content == b'hello notes'
        assert response['Content-Type'] == 'text/plain'
        assert response['Content-Disposition'] == 'inline; filename="notes.txt"'
        assert response['Content-Length'] == '11'

    def test_file_requires_key(self, client, stored_file):
        """/file is keyed even for public files."""
        response = client.get('/file', {'cid': stored_file.cid})

        assert response.status_code == HTTPStatus.UNAUTHORIZED

    def test_file_missing_cid(self, client, read_key):
        """Missing cid is a bad request."""
        response = client.get('/file', headers={'X-API-Key': read_key.token})

        assert response.status_code == HTTPStatus.BAD_REQUEST
        assert response.json() == {'error': 'Missing cid parameter'}

    def test_unknown_and_foreign_look_the_same(
        self,
        client,
        make_file,
        write_key,
        other_write_key,
    ):
        """Unknown and foreign private ids give identical responses."""
        private = make_file(write_key, is_private=True)
        headers = {'X-API-Key': other_write_key.token}

        foreign = client.get('/file', {'cid': private.cid}, headers=headers)
        unknown = client.get('/file', {'cid': 'bafkreinothing'}, headers=headers)

        assert foreign.status_code == unknown.status_code == HTTPStatus.NOT_FOUND
        assert foreign.json() == unknown.json()

    def test_display_without_key(self, client, stored_file):
        """Public files display without a key."""
        response = client.get('/file/display', {'cid': stored_file.cid})

        assert response.status_code == HTTPStatus.OK
        assert response.content == b'hello notes'

    def test_display_hides_private(self, client, make_file, write_key):
        """Display never serves private files."""
        private = make_file(write_key, is_private=True)

        response = client.get('/file/display', {'cid': private.cid})

        assert response.status_code == HTTPStatus.NOT_FOUND

    def test_public_image_rejects_text(self, client, stored_file):
        """Image endpoint refuses non-images."""
        response = client.get('/file/img', {'cid': stored_file.cid})

        assert response.status_code == HTTPStatus.BAD_REQUEST

    def test_private_image_for_owner(
        self,
        client,
        make_file,
        write_key,
        memory_storage,
    ):
        """Owners fetch their private images."""
        image = make_file(write_key, mime_type='image/png', is_private=True)
        memory_storage.objects[image.cid] = b'\x89PNG'

        response = client.get(
            '/file/private/img',
            {'cid': image.cid},
            headers={'X-API-Key': write_key.token},
        )

        assert response.status_code == HTTPStatus.OK
        assert response['Content-Type'] == 'image/png'

    def test_lottie_cache_header(self, client, make_file, write_key, memory_storage):
        """Lottie files are cacheable for a day."""
        lottie = make_file(write_key, mime_type='application/json')
        memory_storage.objects[lottie.cid] = b'{"v": "5.7"}'

        response = client.get(
            '/file/lottie',
            {'cid': lottie.cid},
            headers={'X-API-Key': write_key.token},
        )

        assert response.status_code == HTTPStatus.OK
        assert response['Cache-Control'] == 'public, max-age=86400'

    def test_retrieval_failure(self, client, stored_file, memory_storage, sleeps):
        """Exhausted retries are a server error."""
        memory_storage.read_failures = 3

        response = client.get('/file/display', {'cid': stored_file.cid})

        assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
        assert sleeps == [2.0, 2.0]


@pytest.mark.django_db
class TestListings:
    """Tests for /public-files and /private-files."""

    def test_public_files(self, client, make_file, write_key, read_key):
        """Public listing pages through public files."""
        for _ in range(25):
            make_file(write_key)
        make_file(write_key, is_private=True)
        headers = {'X-API-Key': read_key.token}

        body = client.get('/public-files', {'limit': 10}, headers=headers).json()
        past_end = client.get(
            '/public-files',
            {'page': 4, 'limit': 10},
            headers=headers,
        ).json()

        assert body['total'] == 25
        assert body['totalPages'] == 3
        assert body['page'] == 1
        assert len(body['files']) == 10
        assert past_end['files'] == []

    @pytest.mark.parametrize(('query', 'page', 'limit'), [
        ({}, 1, 10),
        ({'page': 'abc', 'limit': 'xyz'}, 1, 10),
        ({'page': '0', 'limit': '-5'}, 1, 10),
        ({'page': '2', 'limit': '3'}, 2, 3),
    ])
    def test_page_parameters(self, client, read_key, query, page, limit):
        """Bad paging values fall back to defaults."""
        body = client.get(
            '/public-files',
            query,
            headers={'X-API-Key': read_key.token},
        ).json()

        assert (body['page'], body['limit']) == (page, limit)

    def test_public_files_requires_key(self, client, db):
        """Listing needs a key."""
        response = client.get('/public-files')

        assert response.status_code == HTTPStatus.UNAUTHORIZED

    def test_private_files(self, client, make_file, write_key, other_write_key):
        """Owner listing returns only the caller's files."""
        mine = make_file(write_key, is_private=True)
        make_file(other_write_key, is_private=True)

        body = client.get(
            '/private-files',
            headers={'X-API-Key': write_key.token},
        ).json()

        assert body['total'] == 1
        assert body['files'][0]['cid'] == mine.cid
        assert body['files'][0]['is_private'] is True


@pytest.mark.django_db
class TestTogglePrivate:
    """Tests for POST /file/toggle-private."""

    def test_toggle(self, client, make_file, write_key):
        """Owner with write key flips the flag."""
        record = make_file(write_key)

        response = client.post(
            f'/file/toggle-private?cid={record.cid}',
            headers={'X-API-Key': write_key.token},
        )

        assert response.status_code == HTTPStatus.OK
        assert response.json() == {
            'cid': record.cid,
            'is_private': True,
            'message': 'File privacy status updated successfully',
        }

    def test_toggle_read_key(self, client, make_file, read_key):
        """Read keys are forbidden."""
        record = make_file(read_key)

        response = client.post(
            f'/file/toggle-private?cid={record.cid}',
            headers={'X-API-Key': read_key.token},
        )

        assert response.status_code == HTTPStatus.FORBIDDEN

    def test_toggle_foreign(self, client, make_file, write_key, other_write_key):
        """Non-owners get not found."""
        record = make_file(write_key)

        response = client.post(
            f'/file/toggle-private?cid={record.cid}',
            headers={'X-API-Key': other_write_key.token},
        )

        assert response.status_code == HTTPStatus.NOT_FOUND


@pytest.mark.django_db
@pytest.mark.usefixtures('memory_views')
def test_upload_search_download_scenario(client, write_key):
    """Public uploads are searchable, private ones are not."""
    public_cid = _upload(client, write_key.token).json()['cid']
    private_cid = _upload(
        client,
        write_key.token,
        name='diary.txt',
        content=b'dear diary',
        is_private='true',
    ).json()['cid']

    found = client.get('/search-public-files', {'query': 'hello.txt'}).json()
    hidden = client.get('/search-public-files', {'query': 'diary'}).json()

    assert [hit['cid'] for hit in found['results']] == [public_cid]
    assert hidden == {'results': [], 'total': 0, 'totalPages': 0}
    assert client.get('/file', {'cid': private_cid}).status_code == HTTPStatus.UNAUTHORIZED


@pytest.mark.django_db
@pytest.mark.usefixtures('memory_views')
def test_private_reupload_of_public_bytes(client, write_key):
    """Same bytes uploaded again as private conflict and stay searchable."""
    public_cid = _upload(client, write_key.token).json()['cid']

    response = _upload(client, write_key.token, is_private='true')
    found = client.get('/search-public-files', {'query': 'hello.txt'}).json()

    assert response.status_code == HTTPStatus.CONFLICT
    assert StoredFile.objects.get(cid=public_cid).is_private is False
    assert [hit['cid'] for hit in found['results']] == [public_cid]
    assert found['total'] == 1
