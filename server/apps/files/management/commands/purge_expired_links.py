"""Management command to remove long-expired share links."""

from typing import Any

from django.conf import settings
from django.core.management.base import BaseCommand

from server.apps.files.logic.share_operations import (
    purge_expired_links,
    retention_cutoff,
)
from server.apps.files.models import SharedLink


class Command(BaseCommand):
    """Delete share links that expired more than the retention period ago."""

    help = 'Delete share links expired longer than the retention period'

    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be deleted without deleting',
        )
        parser.add_argument(
            '--retention-days',
            type=int,
            default=None,
            help=(
                'Days to keep expired links '
                '(default: SHARE_LINK_RETENTION_DAYS setting)'
            ),
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the purge command.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        retention_days = options['retention_days']
        if retention_days is None:
            retention_days = settings.SHARE_LINK_RETENTION_DAYS

        cutoff = retention_cutoff(retention_days)
        self.stdout.write(
            f'Looking for share links expired before {cutoff} '
            f'(older than {retention_days} days)',
        )

        if options['dry_run']:
            stale_links = SharedLink.objects.filter(
                expires_at__lte=cutoff,
            ).select_related('folder__user').order_by('expires_at')
            for link in stale_links:
                self.stdout.write(
                    f'Would delete: link {link.id} '
                    f'(folder: {link.folder.name}, '
                    f'user: {link.folder.user.username}, '
                    f'expired: {link.expires_at})',
                )
            self.stdout.write(
                self.style.SUCCESS(
                    f'Would purge {len(stale_links)} share links',
                ),
            )
            return

        count = purge_expired_links(cutoff)
        self.stdout.write(
            self.style.SUCCESS(f'Purged {count} share links'),
        )
