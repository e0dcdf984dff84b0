"""Metadata extraction and validation utilities for uploads."""

import hashlib
import mimetypes
from pathlib import Path
from typing import BinaryIO, Final

from django.conf import settings

from server.apps.files.exceptions import InvalidInputError

_CHUNK_SIZE: Final = 8192  # 8KB chunks for checksum calculation
_CHECKSUM_PREFIX_LENGTH: Final = 2


def detect_mime_type(filename: str) -> str:
    """Detect MIME type from filename.

    Uses Python's built-in mimetypes module to guess MIME type
    from filename extension.

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


def calculate_checksum(file_obj: BinaryIO) -> str:
    """Calculate SHA256 checksum of file.

    Reads file in chunks to handle large files efficiently.
    Resets file pointer to beginning after calculation.

    Args:
        file_obj: File-like object to checksum.

    Returns:
        Hex-encoded SHA256 hash string.
    """
    sha256_hash = hashlib.sha256()

    file_obj.seek(0)
    for chunk in iter(lambda: file_obj.read(_CHUNK_SIZE), b''):
        sha256_hash.update(chunk)

    # Reset file pointer for the upload that follows
    file_obj.seek(0)

    return sha256_hash.hexdigest()


def get_file_extension(filename: str) -> str:
    """Get file extension from filename.

    Args:
        filename: Filename (e.g., 'document.pdf').

    Returns:
        Extension without dot, lowercase (e.g., 'pdf').
        Returns empty string if no extension.
    """
    extension = Path(filename).suffix
    return extension.lstrip('.').lower()


def build_object_key(user_id: int, checksum: str, filename: str) -> str:
    """Build the content-addressed storage key for an upload.

    Example: (7, 'ab12...', 'a.PNG') -> '7/ab/ab12....png'

    Args:
        user_id: Owner's user ID, keeps objects of users apart.
        checksum: SHA256 hex digest of the content.
        filename: Original filename, only its extension is used.

    Returns:
        Storage key.
    """
    extension = get_file_extension(filename)
    suffix = f'.{extension}' if extension else ''
    prefix = checksum[:_CHECKSUM_PREFIX_LENGTH]
    return f'{user_id}/{prefix}/{checksum}{suffix}'


def validate_upload(filename: str, size_bytes: int) -> None:
    """Check an upload against the configured type and size limits.

    Args:
        filename: Original filename.
        size_bytes: Upload size in bytes.

    Raises:
        InvalidInputError: If the file is empty, too large or of a
            type that is not allowed.
    """
    if not filename.strip():
        raise InvalidInputError('Please select a file to upload', field='file')

    if size_bytes <= 0:
        raise InvalidInputError('Uploaded file is empty', field='file')

    max_bytes = settings.FILE_UPLOAD_MAX_BYTES
    if size_bytes > max_bytes:
        raise InvalidInputError(
            f'File is too large (maximum {max_bytes // (1024 * 1024)} MB)',
            field='file',
        )

    extension = get_file_extension(filename)
    if extension not in settings.FILE_UPLOAD_ALLOWED_EXTENSIONS:
        raise InvalidInputError('File type not supported', field='file')
