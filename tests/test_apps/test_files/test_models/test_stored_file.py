"""Tests for StoredFile model."""

import pytest
from django.db import IntegrityError
from django.db.models import ProtectedError

from gateway.apps.files.models import StoredFile, Visibility
from gateway.apps.search.logic.sync import document_for


@pytest.mark.django_db
class TestStoredFile:
    """Tests for StoredFile."""

    def test_str(self, make_file, write_key):
        """String form shows name and content id."""
        record = make_file(write_key, cid='bafkreiabc', file_name='a.txt')

        assert str(record) == 'a.txt (bafkreiabc)'

    def test_visibility(self, make_file, write_key):
        """Visibility follows the privacy flag."""
        assert make_file(write_key).visibility == Visibility.PUBLIC
        assert make_file(write_key, is_private=True).visibility == Visibility.PRIVATE

    def test_cid_unique(self, make_file, write_key):
        """A content id is recorded once."""
        make_file(write_key, cid='bafkreisame')

        with pytest.raises(IntegrityError):
            make_file(write_key, cid='bafkreisame')

    def test_negative_size_rejected(self, make_file, write_key):
        """Sizes cannot be negative."""
        with pytest.raises(IntegrityError):
            make_file(write_key, size_bytes=-1)

    def test_owner_cannot_be_deleted(self, make_file, write_key):
        """Keys owning files are protected."""
        make_file(write_key)

        with pytest.raises(ProtectedError):
            write_key.delete()

    def test_newest_first(self, make_file, write_key):
        """Default ordering lists the newest record first."""
        older = make_file(write_key)
        newer = make_file(write_key)

        assert list(StoredFile.objects.all()) == [newer, older]

    def test_delete_removes_search_document(self, make_file, write_key, search_index):
        """Deleting a record drops its search document."""
        record = make_file(write_key, file_name='gone.txt')
        search_index.index_document(document_for(record))

        record.delete()

        assert search_index.search('gone', 1, 10).total == 0
