"""Metadata extraction utilities for files."""

import base64
import hashlib
import mimetypes
from typing import BinaryIO, Final

_CHUNK_SIZE: Final = 8192  # 8KB chunks for hashing

# CIDv1 header: version 1, raw codec (0x55), sha2-256 multihash (0x12, 32 bytes)
_CID_V1_RAW_SHA256_PREFIX: Final = bytes((0x01, 0x55, 0x12, 0x20))
_MULTIBASE_BASE32: Final = 'b'


def detect_mime_type(filename: str) -> str:
    """Detect MIME type from a file name.

    Used when the uploader did not declare a content type.

    Args:
        filename: Filename with extension.

    Returns:
        MIME type string (e.g., 'image/jpeg', 'application/pdf').
        Returns 'application/octet-stream' if type cannot be determined.
    """
    mime_type, _ = mimetypes.guess_type(filename)
    if mime_type is None:
        return 'application/octet-stream'
    return mime_type


def compute_cid(file_obj: BinaryIO) -> str:
    """Compute the content identifier of a file.

    The id is a CIDv1 (raw codec, sha2-256, base32 lower-case), the same
    shape IPFS uses for single-block raw content, so identical bytes always
    produce the same id.

    Reads file in chunks to handle large files efficiently.
    Resets file pointer to beginning after calculation.

    Args:
        file_obj: File-like object to hash.

    Returns:
        Content identifier string starting with 'b'.
    """
    sha256_hash = hashlib.sha256()

    file_obj.seek(0)
    for chunk in iter(lambda: file_obj.read(_CHUNK_SIZE), b''):
        sha256_hash.update(chunk)
    file_obj.seek(0)

    raw_cid = _CID_V1_RAW_SHA256_PREFIX + sha256_hash.digest()
    encoded = base64.b32encode(raw_cid).decode('ascii')
    return _MULTIBASE_BASE32 + encoded.rstrip('=').lower()
