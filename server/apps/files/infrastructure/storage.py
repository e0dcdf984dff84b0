"""Custom storage backend for S3-compatible storage."""

import logging
from pathlib import Path
from typing import Any, final

from typing_extensions import override

from django.core.files.storage import default_storage
from storages.backends.s3 import S3Storage

from server.apps.files.exceptions import ExternalStoreError

logger = logging.getLogger(__name__)


@final
class FileStorage(S3Storage):
    """S3 storage backend for uploaded files.

    Extends django-storages S3Storage with:
    - ``store`` that maps upload failures to ExternalStoreError
    - best-effort ``discard`` used after metadata deletion
    - ``retrieval_url`` for inline or attachment downloads
    - rollback support for failed DB operations
    """

    @override
    def save(  # noqa: WPS211
        self,
        name: str,
        content: Any,
        max_length: int | None = None,
    ) -> str:
        """Save file to S3 with error handling and logging.

        Args:
            name: Storage key for the file.
            content: File content (file-like object).
            max_length: Optional maximum length for the key.

        Returns:
            Actual key used (may differ from name if it already exists).

        Raises:
            Exception: If S3 upload fails.
        """
        try:
            logger.info('Uploading file to storage: %s', name)
            saved_name = super().save(name, content, max_length)
            logger.info('Successfully uploaded file: %s', saved_name)
        except Exception:
            logger.exception('Failed to upload file to storage: %s', name)
            raise
        else:
            return saved_name

    @override
    def delete(self, name: str) -> None:
        """Delete file from S3 with error handling and logging.

        Args:
            name: Storage key of file to delete.

        Raises:
            Exception: If S3 delete fails.
        """
        try:
            logger.info('Deleting file from storage: %s', name)
            super().delete(name)
            logger.info('Successfully deleted file: %s', name)
        except Exception:
            logger.exception('Failed to delete file from storage: %s', name)
            raise

    def store(self, name: str, content: Any, max_length: int | None = None) -> str:
        """Store uploaded content, failing with a typed error.

        Args:
            name: Proposed storage key.
            content: File-like object.
            max_length: Optional maximum length for the key.

        Returns:
            Key the object was saved under.

        Raises:
            ExternalStoreError: If the object store rejects the upload.
        """
        try:
            return self.save(name, content, max_length)
        except Exception as error:
            raise ExternalStoreError(name) from error

    def discard(self, name: str) -> bool:
        """Delete an object without ever raising.

        Called after the owning metadata row is gone. A failure leaves
        an orphaned object behind, which is logged but must not turn
        a successful deletion into a failed one.

        Args:
            name: Storage key of file to delete.

        Returns:
            True if the object was deleted, False otherwise.
        """
        try:
            self.delete(name)
        except Exception:
            logger.exception(
                'Failed to discard file from storage (orphaned): %s',
                name,
            )
            return False
        return True

    def rollback_upload(self, name: str) -> None:
        """Delete uploaded file for DB transaction rollback.

        This method is called when a database transaction fails after
        a file has been successfully uploaded to S3.

        Args:
            name: Storage key of file to delete.
        """
        logger.warning('Rolling back upload, deleting file: %s', name)
        if self.discard(name):
            logger.info('Successfully rolled back file upload: %s', name)

    def retrieval_url(
        self,
        name: str,
        *,
        as_attachment: bool = False,
        filename: str | None = None,
    ) -> str:
        """Build a signed URL for an object.

        Args:
            name: Storage key.
            as_attachment: Ask the browser to download instead of display.
            filename: Download filename, defaults to the key's basename.

        Returns:
            Signed URL.
        """
        if not as_attachment:
            return self.url(name)

        download_name = (filename or Path(name).name).replace('"', '')
        return self.url(
            name,
            parameters={
                'ResponseContentDisposition': (
                    f'attachment; filename="{download_name}"'
                ),
            },
        )


def get_storage() -> FileStorage:
    """Get the configured default storage backend.

    Returns:
        FileStorage instance with proper S3 configuration.
    """
    return default_storage  # type: ignore[return-value]
