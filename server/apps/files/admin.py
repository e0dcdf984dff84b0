"""Django admin configuration for files app."""

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest
from django.utils.html import format_html

from server.apps.files.models import File, Folder, SharedLink


def _format_bytes(size_bytes: int) -> str:
    """Format bytes in human-readable format.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Formatted size string (e.g., '1.5 MB', '234 KB').
    """
    if size_bytes < 1024:
        return f'{size_bytes} B'
    if size_bytes < 1024 * 1024:  # noqa: WPS531
        return f'{size_bytes / 1024:.1f} KB'
    if size_bytes < 1024 * 1024 * 1024:  # noqa: WPS531
        return f'{size_bytes / (1024 * 1024):.1f} MB'
    return f'{size_bytes / (1024 * 1024 * 1024):.1f} GB'


@admin.register(Folder)
class FolderAdmin(admin.ModelAdmin):
    """Admin interface for Folder model."""

    list_display = [
        'name',
        'user',
        'parent',
        'created_at',
    ]

    list_filter = [
        'user',
        'created_at',
    ]

    search_fields = [
        'name',
        'user__username',
    ]

    readonly_fields = [
        'user',
        'parent',
        'created_at',
    ]

    def get_queryset(self, request: HttpRequest) -> QuerySet[Folder]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('user', 'parent')


@admin.register(File)
class FileAdmin(admin.ModelAdmin):
    """Admin interface for File model."""

    list_display = [
        'name',
        'user',
        'folder',
        'size_display',
        'mime_type',
        'created_at',
    ]

    list_filter = [
        'mime_type',
        'created_at',
        'user',
    ]

    search_fields = [
        'name',
        'blob',  # Searches the storage key
        'checksum_sha256',
    ]

    readonly_fields = [
        'user',
        'folder',
        'blob',
        'size_bytes',
        'mime_type',
        'checksum_sha256',
        'created_at',
    ]

    fieldsets = (
        ('File Information', {
            'fields': ('name', 'blob', 'user', 'folder'),
        }),
        ('Metadata', {
            'fields': (
                'size_bytes',
                'mime_type',
                'checksum_sha256',
            ),
        }),
        ('Timestamps', {
            'fields': ('created_at',),
        }),
    )

    def size_display(self, obj: File) -> str:
        """Display file size in human-readable format.

        Args:
            obj: File instance.

        Returns:
            Formatted size string.
        """
        return _format_bytes(obj.size_bytes)
    size_display.short_description = 'Size'  # type: ignore[attr-defined]

    def get_queryset(self, request: HttpRequest) -> QuerySet[File]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('user', 'folder')


@admin.register(SharedLink)
class SharedLinkAdmin(admin.ModelAdmin):
    """Admin interface for SharedLink model.

    Links are immutable after creation, so every field is read-only.
    """

    list_display = [
        'folder',
        'owner_display',
        'token_display',
        'created_at',
        'expires_at',
        'status_display',
    ]

    list_filter = [
        'created_at',
        'expires_at',
    ]

    search_fields = [
        'folder__name',
        'folder__user__username',
    ]

    readonly_fields = [
        'folder',
        'token',
        'created_at',
        'expires_at',
    ]

    def has_add_permission(self, request: HttpRequest) -> bool:
        """Links are issued by their owners only."""
        return False

    def owner_display(self, obj: SharedLink) -> str:
        """Display the owner of the shared folder.

        Args:
            obj: SharedLink instance.

        Returns:
            Owner's username.
        """
        return obj.folder.user.username
    owner_display.short_description = 'Owner'  # type: ignore[attr-defined]

    def token_display(self, obj: SharedLink) -> str:
        """Display a token prefix, never the full capability.

        Args:
            obj: SharedLink instance.

        Returns:
            First 8 characters of the token.
        """
        return f'{obj.token[:8]}...'
    token_display.short_description = 'Token'  # type: ignore[attr-defined]

    def status_display(self, obj: SharedLink) -> str:
        """Display active/expired indicator.

        Args:
            obj: SharedLink instance.

        Returns:
            HTML formatted status indicator.
        """
        if obj.is_expired():
            color = '#dc3545'  # Red - expired
            status = 'Expired'
        else:
            color = '#28a745'  # Green - active
            status = 'Active'

        return format_html(
            '<span style="color: {color}; font-weight: bold;">'
            '{status}</span>',
            color=color,
            status=status,
        )
    status_display.short_description = 'Status'  # type: ignore[attr-defined]

    def get_queryset(self, request: HttpRequest) -> QuerySet[SharedLink]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('folder__user')
