"""Database models for files app."""

import enum
from datetime import datetime
from typing import Final, final

from typing_extensions import override

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

# Constants for field max lengths
_NAME_MAX_LENGTH: Final = 255
_BLOB_MAX_LENGTH: Final = 512
_MIME_TYPE_MAX_LENGTH: Final = 255
_CHECKSUM_MAX_LENGTH: Final = 64  # SHA256 hex length
_TOKEN_MAX_LENGTH: Final = 64  # 32 random bytes as hex


@final
class Folder(models.Model):
    """Folder in a user's tree.

    Root folders have no parent. A parent always belongs to the same
    user and is only set at creation time, so the tree stays acyclic.
    Deleting a folder cascades to subfolders, files and share links.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='folders',
        db_index=True,
    )

    parent = models.ForeignKey(
        'self',
        on_delete=models.CASCADE,
        related_name='subfolders',
        null=True,
        blank=True,
    )

    name = models.CharField(
        max_length=_NAME_MAX_LENGTH,
    )

    created_at = models.DateTimeField(
        default=timezone.now,
        editable=False,
    )

    class Meta:
        """Model metadata."""

        verbose_name = 'Folder'  # type: ignore[mutable-override]
        verbose_name_plural = 'Folders'  # type: ignore[mutable-override]
        ordering = ['-created_at', '-id']

        indexes = [
            # Optimize directory listing queries
            models.Index(
                fields=['user', 'parent', '-created_at'],
                name='folders_user_parent_idx',
            ),
        ]

        constraints = [
            models.CheckConstraint(
                condition=~models.Q(name=''),
                name='folders_name_not_empty',
            ),
            models.CheckConstraint(
                condition=~models.Q(parent=models.F('id')),
                name='folders_not_own_parent',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.user.username}:{self.name}'

    @override
    def clean(self) -> None:
        """Reject parents owned by a different user.

        Raises:
            ValidationError: If parent belongs to someone else.
        """
        super().clean()
        if self.parent is not None and self.parent.user_id != self.user_id:
            raise ValidationError(
                {'parent': 'Parent folder must belong to the same user'},
            )


@final
class File(models.Model):
    """Uploaded file stored in S3-compatible storage.

    ``blob`` holds the object key, ``name`` the original filename shown
    to users. Files without a folder live at the user's root level.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='files',
        db_index=True,
    )

    folder = models.ForeignKey(
        Folder,
        on_delete=models.CASCADE,
        related_name='files',
        null=True,
        blank=True,
    )

    name = models.CharField(
        max_length=_NAME_MAX_LENGTH,
    )

    # upload_to='' means we control the full key
    blob = models.FileField(
        upload_to='',
        max_length=_BLOB_MAX_LENGTH,
        help_text='Object key: {user_id}/{checksum[:2]}/{checksum}.ext',
    )

    size_bytes = models.BigIntegerField(
        help_text='File size in bytes',
    )

    mime_type = models.CharField(
        max_length=_MIME_TYPE_MAX_LENGTH,
    )

    checksum_sha256 = models.CharField(
        max_length=_CHECKSUM_MAX_LENGTH,
        help_text='SHA256 hash for integrity verification',
        db_index=True,
    )

    created_at = models.DateTimeField(
        default=timezone.now,
        editable=False,
    )

    class Meta:
        """Model metadata."""

        verbose_name = 'File'  # type: ignore[mutable-override]
        verbose_name_plural = 'Files'  # type: ignore[mutable-override]
        ordering = ['-created_at', '-id']

        indexes = [
            models.Index(
                fields=['user', 'folder', '-created_at'],
                name='files_user_folder_idx',
            ),
        ]

        constraints = [
            models.CheckConstraint(
                condition=models.Q(size_bytes__gte=0),
                name='files_size_non_negative',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.user.username}:{self.name}'

    @override
    def clean(self) -> None:
        """Reject folders owned by a different user.

        Raises:
            ValidationError: If folder belongs to someone else.
        """
        super().clean()
        if self.folder is not None and self.folder.user_id != self.user_id:
            raise ValidationError(
                {'folder': 'Folder must belong to the same user'},
            )

    def get_url(self) -> str:
        """Get signed inline URL for the stored object.

        Returns:
            URL to access the file via storage backend.
        """
        return self.blob.url


class LinkState(enum.Enum):
    """Lifecycle of a share link. Expired is terminal."""

    ACTIVE = 'active'
    EXPIRED = 'expired'


@final
class SharedLink(models.Model):
    """Time-limited public link exposing a folder subtree.

    The owner is the owner of ``folder``. Links are never extended;
    a new one has to be issued instead.
    """

    folder = models.ForeignKey(
        Folder,
        on_delete=models.CASCADE,
        related_name='shared_links',
    )

    token = models.CharField(
        max_length=_TOKEN_MAX_LENGTH,
        unique=True,
        editable=False,
    )

    expires_at = models.DateTimeField()

    created_at = models.DateTimeField(
        default=timezone.now,
        editable=False,
    )

    class Meta:
        """Model metadata."""

        verbose_name = 'Shared Link'  # type: ignore[mutable-override]
        verbose_name_plural = 'Shared Links'  # type: ignore[mutable-override]
        ordering = ['-created_at', '-id']

        indexes = [
            models.Index(
                fields=['folder', '-created_at'],
                name='links_folder_recent_idx',
            ),
            models.Index(
                fields=['expires_at'],
                name='links_expires_idx',
            ),
        ]

        constraints = [
            models.CheckConstraint(
                condition=models.Q(expires_at__gt=models.F('created_at')),
                name='links_expire_after_creation',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.folder.name} ({self.token[:8]})'

    def state(self, now: datetime | None = None) -> LinkState:
        """Compute the link state at a point in time.

        Args:
            now: Reference time, defaults to current time.

        Returns:
            ACTIVE before expires_at, EXPIRED from expires_at on.
        """
        now = now or timezone.now()
        if now >= self.expires_at:
            return LinkState.EXPIRED
        return LinkState.ACTIVE

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check whether the link has expired.

        Args:
            now: Reference time, defaults to current time.

        Returns:
            True once expires_at has been reached.
        """
        return self.state(now) is LinkState.EXPIRED
