"""Business logic for file operations."""

import logging
from typing import Any

from django.core.files.uploadedfile import UploadedFile
from django.db import transaction

from server.apps.files.infrastructure.metadata import (
    build_object_key,
    calculate_checksum,
    detect_mime_type,
    validate_upload,
)
from server.apps.files.infrastructure.storage import get_storage
from server.apps.files.logic.access import get_owned_file, get_owned_folder
from server.apps.files.models import File

# User type for Django's dynamic user model
_User = Any

logger = logging.getLogger(__name__)


def upload_file(
    user: _User,
    uploaded_file: UploadedFile,
    folder_id: object = None,
) -> File:
    """Validate, store and register an uploaded file.

    Transaction safety: Upload to storage first, then create DB record.
    If the DB write fails, the uploaded object is deleted from storage
    (rollback).

    Args:
        user: Owner of the file.
        uploaded_file: File from ``request.FILES``.
        folder_id: Optional target folder, None for the root level.

    Returns:
        Created File instance.

    Raises:
        NotFoundError: If folder is absent or owned by someone else.
        InvalidInputError: If the upload breaks type or size limits.
        ExternalStoreError: If the object store rejects the upload.
    """
    # Fail before touching storage if the target folder is not ours
    if folder_id not in {None, ''}:
        get_owned_folder(user, folder_id)

    filename = uploaded_file.name or ''
    validate_upload(filename, uploaded_file.size or 0)

    logger.info('Calculating metadata for file: %s', filename)
    checksum = calculate_checksum(uploaded_file)
    mime_type = detect_mime_type(filename)
    key = build_object_key(user.pk, checksum, filename)

    # Step 1: Upload to storage first
    storage = get_storage()
    saved_key = storage.store(key, uploaded_file)

    # Step 2: Create database record
    try:
        return place_file(
            user,
            folder_id,
            name=filename,
            key=saved_key,
            size_bytes=uploaded_file.size or 0,
            mime_type=mime_type,
            checksum=checksum,
        )
    except Exception:
        logger.exception(
            'Database write failed, rolling back storage upload: %s',
            saved_key,
        )
        storage.rollback_upload(saved_key)
        raise


def place_file(  # noqa: WPS211
    user: _User,
    folder_id: object,
    *,
    name: str,
    key: str,
    size_bytes: int,
    mime_type: str,
    checksum: str,
) -> File:
    """Register an already stored object as a file of user.

    Metadata comes from the upload layer and is trusted as validated.

    Args:
        user: Owner of the file.
        folder_id: Target folder, None (or '') for the root level.
        name: Display name.
        key: Storage key of the stored object.
        size_bytes: Size in bytes.
        mime_type: Content type.
        checksum: SHA256 hex digest of the content.

    Returns:
        Created File instance.

    Raises:
        NotFoundError: If folder is absent or owned by someone else.
    """
    with transaction.atomic():
        folder = None
        if folder_id not in {None, ''}:
            folder = get_owned_folder(user, folder_id, for_update=True)

        file_instance = File.objects.create(
            user=user,
            folder=folder,
            name=name,
            blob=key,
            size_bytes=size_bytes,
            mime_type=mime_type,
            checksum_sha256=checksum,
        )

    logger.info(
        'File record created in database: %s (ID: %d, folder: %s)',
        key,
        file_instance.id,
        file_instance.folder_id,
    )
    return file_instance


def get_file(user: _User, file_id: object) -> File:
    """Get a file owned by user.

    Raises:
        NotFoundError: If file is absent or owned by someone else.
    """
    return get_owned_file(user, file_id)


def get_download_url(user: _User, file_id: object) -> str:
    """Build a signed URL that downloads a file as an attachment.

    Args:
        user: Acting user.
        file_id: File to download.

    Returns:
        Signed storage URL.

    Raises:
        NotFoundError: If file is absent or owned by someone else.
    """
    file_instance = get_owned_file(user, file_id)
    return get_storage().retrieval_url(
        file_instance.blob.name,
        as_attachment=True,
        filename=file_instance.name,
    )


def delete_file(user: _User, file_id: object) -> File:
    """Delete a file record and its stored object.

    Transaction safety: Delete DB record first. The stored object is
    discarded after commit by the post_delete signal handler in
    signals.py; a storage failure there is logged and never undoes
    the deletion.

    Args:
        user: Acting user.
        file_id: File to delete.

    Returns:
        The deleted File instance (keeps folder_id for redirects).

    Raises:
        NotFoundError: If file is absent or owned by someone else.
    """
    with transaction.atomic():
        file_instance = get_owned_file(user, file_id)
        storage_key = file_instance.blob.name
        file_instance.delete()

    logger.info(
        'File record deleted from database: ID=%s, key=%s',
        file_id,
        storage_key,
    )
    return file_instance
