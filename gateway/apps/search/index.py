"""Full-text index over public file metadata.

The index lives in its own SQLite file as an FTS5 table, separate from the
relational store. Documents are keyed by content id and written one
transaction at a time.
"""

import functools
import logging
import math
import re
import sqlite3
from collections.abc import Iterator
from contextlib import closing, contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from django.conf import settings

from gateway.common.exceptions import IndexingFailed, SearchFailed

logger = logging.getLogger(__name__)

SEARCHABLE_FIELDS: Final = ('cid', 'file_name', 'mime_type')

_TABLE: Final = 'public_files'
_LOCK_TIMEOUT_SECONDS: Final = 5.0
_TERM_PATTERN: Final = re.compile(r'([+-]?)(?:(\w+):)?("[^"]*"?|\S+)')
_WORD_PATTERN: Final = re.compile(r'\w')


@dataclass(frozen=True, slots=True)
class SearchDocument:
    """Indexed projection of a public file record."""

    cid: str
    file_name: str
    mime_type: str
    is_private: bool = False


@dataclass(frozen=True, slots=True)
class SearchHit:
    """Single search result."""

    cid: str
    file_name: str
    mime_type: str

    def as_dict(self) -> dict[str, str]:
        """Serialize for the JSON response."""
        return {
            'cid': self.cid,
            'file_name': self.file_name,
            'mime_type': self.mime_type,
        }


@dataclass(frozen=True, slots=True)
class SearchResult:
    """One page of hits plus the total match count."""

    hits: list[SearchHit]
    total: int
    page_size: int

    @property
    def total_pages(self) -> int:
        """Number of pages needed to show every match."""
        return math.ceil(self.total / self.page_size)


def _quote(text: str) -> str:
    escaped = text.replace('"', '""')
    return f'"{escaped}"'


def build_match_expression(query: str) -> str | None:
    """Translate a query string into an FTS5 MATCH expression.

    Supported syntax: bare terms, ``"quoted phrases"``, ``field:term`` for
    the searchable fields, ``+term`` (required) and ``-term`` (excluded).
    Every positive term must match. Unknown field prefixes are searched
    as plain text.

    Args:
        query: User-supplied query string.

    Returns:
        MATCH expression, or None if the query has nothing to match on.
    """
    required: list[str] = []
    excluded: list[str] = []

    for sign, field, raw_value in _TERM_PATTERN.findall(query):
        value = raw_value.strip('"')
        if field and field not in SEARCHABLE_FIELDS:
            value = f'{field}:{value}'
            field = ''
        if not _WORD_PATTERN.search(value):
            continue

        term = f'{field} : {_quote(value)}' if field else _quote(value)
        if sign == '-':
            excluded.append(term)
        else:
            required.append(term)

    if not required:
        return None

    expression = ' AND '.join(required)
    for term in excluded:
        expression = f'({expression}) NOT {term}'
    return expression


class SearchIndex:
    """FTS5-backed search index stored at ``path``."""

    def __init__(self, path: str | Path) -> None:
        """Open the index, creating its table if needed.

        Args:
            path: SQLite file holding the index.
        """
        self._path = str(path)
        self._ensure_schema()

    @property
    def path(self) -> str:
        """Location of the index file."""
        return self._path

    def index_document(self, document: SearchDocument) -> None:
        """Insert or replace the document stored under its cid.

        Raises:
            IndexingFailed: If the index write fails.
        """
        try:
            with self._transaction() as connection:
                connection.execute(
                    f'DELETE FROM {_TABLE} WHERE cid = ?',  # noqa: S608
                    (document.cid,),
                )
                connection.execute(
                    f'INSERT INTO {_TABLE} '  # noqa: S608
                    '(cid, file_name, mime_type, is_private) '
                    'VALUES (?, ?, ?, ?)',
                    (
                        document.cid,
                        document.file_name,
                        document.mime_type,
                        int(document.is_private),
                    ),
                )
        except sqlite3.Error as error:
            logger.exception('Failed to index document: %s', document.cid)
            raise IndexingFailed() from error

        logger.info('Indexed document: %s', document.cid)

    def delete_document(self, cid: str) -> None:
        """Remove the document stored under ``cid``, if any.

        Raises:
            IndexingFailed: If the index write fails.
        """
        try:
            with self._transaction() as connection:
                connection.execute(
                    f'DELETE FROM {_TABLE} WHERE cid = ?',  # noqa: S608
                    (cid,),
                )
        except sqlite3.Error as error:
            logger.exception('Failed to remove document from index: %s', cid)
            raise IndexingFailed('Failed to update search index') from error

        logger.info('Removed document from index: %s', cid)

    def search(self, query: str, page: int, page_size: int) -> SearchResult:
        """Run a query-string search and return one page of hits.

        Args:
            query: Query string.
            page: 1-based page number.
            page_size: Hits per page.

        Returns:
            SearchResult ordered by relevance.

        Raises:
            SearchFailed: If the index query fails.
        """
        expression = build_match_expression(query)
        if expression is None:
            return SearchResult(hits=[], total=0, page_size=page_size)

        offset = (page - 1) * page_size
        try:
            with closing(self._connect()) as connection:
                (total,) = connection.execute(
                    f'SELECT count(*) FROM {_TABLE} '  # noqa: S608
                    f'WHERE {_TABLE} MATCH ?',
                    (expression,),
                ).fetchone()
                rows = connection.execute(
                    f'SELECT cid, file_name, mime_type FROM {_TABLE} '  # noqa: S608
                    f'WHERE {_TABLE} MATCH ? ORDER BY rank LIMIT ? OFFSET ?',
                    (expression, page_size, offset),
                ).fetchall()
        except sqlite3.Error as error:
            logger.exception('Search failed for query: %r', query)
            raise SearchFailed() from error

        return SearchResult(
            hits=[SearchHit(*row) for row in rows],
            total=total,
            page_size=page_size,
        )

    def clear(self) -> None:
        """Drop every document from the index."""
        with self._transaction() as connection:
            connection.execute(f'DELETE FROM {_TABLE}')  # noqa: S608
        logger.info('Cleared search index at %s', self._path)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self._path, timeout=_LOCK_TIMEOUT_SECONDS)

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        with closing(self._connect()) as connection:
            with connection:
                yield connection

    def _ensure_schema(self) -> None:
        Path(self._path).parent.mkdir(parents=True, exist_ok=True)
        with self._transaction() as connection:
            connection.execute(
                f'CREATE VIRTUAL TABLE IF NOT EXISTS {_TABLE} USING fts5('
                'cid, file_name, mime_type, is_private UNINDEXED)',
            )


@functools.cache
def get_search_index() -> SearchIndex:
    """Process-wide search index built from settings."""
    return SearchIndex(settings.SEARCH_INDEX_PATH)
