"""Scratch staging for uploads.

Uploads are copied chunk by chunk into a uniquely named temporary file
before being pushed to the object store, so arbitrarily large files never
sit in memory and simultaneous uploads of same-named files cannot collide.
"""

import logging
import tempfile
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import IO, Any, BinaryIO, Final

logger = logging.getLogger(__name__)

_CHUNK_SIZE: Final = 64 * 1024
_SCRATCH_PREFIX: Final = 'upload-'


@dataclass(frozen=True, slots=True)
class StagedUpload:
    """Upload copied to scratch space."""

    file: BinaryIO
    size_bytes: int


def _iter_chunks(source: Any) -> Iterable[bytes]:
    """Yield chunks from a Django UploadedFile or any binary stream."""
    if hasattr(source, 'chunks'):
        return source.chunks(_CHUNK_SIZE)
    return iter(lambda: source.read(_CHUNK_SIZE), b'')


@contextmanager
def staged_upload(
    source: IO[bytes] | Any,
    scratch_dir: str | None = None,
) -> Iterator[StagedUpload]:
    """Copy an upload stream into a scratch file.

    The scratch file is deleted when the block exits, whether it
    succeeds or raises.

    Args:
        source: Uploaded file or binary stream.
        scratch_dir: Directory for scratch files, system temp if None.

    Yields:
        StagedUpload positioned at the start of the staged bytes.
    """
    with tempfile.NamedTemporaryFile(
        mode='w+b',
        prefix=_SCRATCH_PREFIX,
        dir=scratch_dir,
    ) as scratch:
        size_bytes = 0
        for chunk in _iter_chunks(source):
            scratch.write(chunk)
            size_bytes += len(chunk)
        scratch.flush()
        scratch.seek(0)

        logger.debug('Staged %d bytes in %s', size_bytes, scratch.name)
        yield StagedUpload(file=scratch, size_bytes=size_bytes)  # type: ignore[arg-type]
