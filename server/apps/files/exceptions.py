"""Exceptions for files app.

Views map each kind to a user-facing message and status code, so the
messages here are safe to show to end users.
"""

from datetime import datetime


class FileUploaderError(Exception):
    """Base class for errors raised by folder, file and share operations."""


class NotFoundError(FileUploaderError):
    """Raised when a resource is absent or not owned by the caller.

    Both cases produce the same error so callers cannot probe for
    resources belonging to other users.
    """

    def __init__(self, resource: str, resource_id: object = None) -> None:
        """Initialize NotFoundError.

        Args:
            resource: Human-readable resource name (e.g. 'Folder').
            resource_id: Identifier that was looked up, for logging.
        """
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f'{resource} not found')


class ForbiddenError(FileUploaderError):
    """Raised when a resource exists but its ownership chain fails."""

    def __init__(self, message: str = 'Unauthorized') -> None:
        """Initialize ForbiddenError.

        Args:
            message: User-facing message.
        """
        super().__init__(message)


class ExpiredError(FileUploaderError):
    """Raised when a share link is resolved at or after its expiry."""

    def __init__(self, expires_at: datetime) -> None:
        """Initialize ExpiredError.

        Args:
            expires_at: When the link stopped being valid.
        """
        self.expires_at = expires_at
        super().__init__('This shared link has expired')


class InvalidInputError(FileUploaderError):
    """Raised for malformed names, durations or uploads."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize InvalidInputError.

        Args:
            message: User-facing validation message.
            field: Name of the offending input, if any.
        """
        self.field = field
        super().__init__(message)


class ExternalStoreError(FileUploaderError):
    """Raised when the object store fails during an upload.

    Deletion failures never raise this, they are logged and swallowed.
    """

    def __init__(self, key: str) -> None:
        """Initialize ExternalStoreError.

        Args:
            key: Object key that could not be stored.
        """
        self.key = key
        super().__init__('An error occurred while uploading file')


class FolderTreeCorruptedError(FileUploaderError):
    """Raised when a folder walk detects a cycle or a foreign parent.

    Parents are only ever set to existing folders of the same owner,
    so this indicates data changed outside the application.
    """

    def __init__(self, folder_id: int, message: str) -> None:
        """Initialize FolderTreeCorruptedError.

        Args:
            folder_id: Folder where the walk started.
            message: Description of the detected problem.
        """
        self.folder_id = folder_id
        super().__init__(f'Folder tree corrupted at folder {folder_id}: {message}')
