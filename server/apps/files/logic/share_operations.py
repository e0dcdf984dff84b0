"""Business logic for public share links.

A link gives anyone holding its token read access to a folder and
everything below it until the link expires. Links are never renewed;
an expired link stays expired until its owner issues a new one.
"""

import logging
import re
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Final

from django.conf import settings
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from server.apps.files.exceptions import (
    ExpiredError,
    InvalidInputError,
    NotFoundError,
)
from server.apps.files.logic.access import (
    ensure_link_owner,
    get_owned_folder,
    parse_id,
)
from server.apps.files.logic.folder_operations import collect_subtree
from server.apps.files.models import File, Folder, SharedLink

# User type for Django's dynamic user model
_User = Any

# Token length in bytes (generates 64 hex chars, 256 bits)
_TOKEN_BYTES: Final = 32

_DURATION_PATTERN: Final = re.compile(r'([0-9]+)d')

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SharedFolder:
    """What an anonymous viewer sees through a share link."""

    link: SharedLink
    folder: Folder
    files: list[File]


def generate_token() -> str:
    """Generate an unguessable share token.

    Returns:
        64 hex characters from the OS random source.
    """
    return secrets.token_hex(_TOKEN_BYTES)


def _duration_bounds() -> tuple[int, int]:
    return settings.SHARE_LINK_MIN_DAYS, settings.SHARE_LINK_MAX_DAYS


def _check_duration_days(duration_days: object) -> int:
    min_days, max_days = _duration_bounds()
    if isinstance(duration_days, bool) or not isinstance(duration_days, int):
        raise InvalidInputError(
            'Duration must be a whole number of days',
            field='duration',
        )
    if not min_days <= duration_days <= max_days:
        raise InvalidInputError(
            f'Duration must be between {min_days} and {max_days} days',
            field='duration',
        )
    return duration_days


def parse_duration(duration: str | None) -> int:
    """Parse a duration like '7d' into a number of days.

    Args:
        duration: Raw duration from user input.

    Returns:
        Number of days, within the configured bounds.

    Raises:
        InvalidInputError: If the format is not '<digits>d' or the
            value is out of range.
    """
    match = _DURATION_PATTERN.fullmatch(duration or '')
    if match is None:
        raise InvalidInputError(
            'Invalid duration format. Use format like "1d", "7d", etc.',
            field='duration',
        )
    return _check_duration_days(int(match.group(1)))


def issue_link(user: _User, folder_id: object, duration_days: int) -> SharedLink:
    """Create a share link for a folder owned by user.

    Args:
        user: Acting user.
        folder_id: Folder to share.
        duration_days: Lifetime of the link in days.

    Returns:
        Created SharedLink, expiring exactly duration_days after
        its creation time.

    Raises:
        NotFoundError: If folder is absent or owned by someone else.
        InvalidInputError: If duration is not an int within bounds.
    """
    days = _check_duration_days(duration_days)

    with transaction.atomic():
        folder = get_owned_folder(user, folder_id, for_update=True)
        now = timezone.now()
        link = SharedLink.objects.create(
            folder=folder,
            token=generate_token(),
            created_at=now,
            expires_at=now + timedelta(days=days),
        )

    logger.info(
        'Share link created: ID=%d, folder %d, expires %s',
        link.id,
        folder.id,
        link.expires_at.isoformat(),
    )
    return link


def resolve_link(token: str) -> SharedFolder:
    """Resolve a token into the shared folder and all files below it.

    Anyone may call this, no user is involved.

    Args:
        token: Token from the share URL.

    Returns:
        SharedFolder with the link, its folder and every file in the
        folder's subtree, ordered by traversal position then id.

    Raises:
        NotFoundError: If no link has this token.
        ExpiredError: If the link exists but has expired.
    """
    link = SharedLink.objects.select_related('folder').filter(
        token=token or '',
    ).first()
    if link is None:
        raise NotFoundError('Shared link')

    if link.is_expired():
        logger.info('Expired share link resolved: ID=%d', link.id)
        raise ExpiredError(link.expires_at)

    return SharedFolder(
        link=link,
        folder=link.folder,
        files=collect_shared_files(link.folder),
    )


def collect_shared_files(folder: Folder) -> list[File]:
    """Collect every file in a folder and its descendants.

    Args:
        folder: Share root.

    Returns:
        Files ordered by their folder's traversal position, then id.
    """
    subtree_ids = collect_subtree(folder)
    position = {folder_id: index for index, folder_id in enumerate(subtree_ids)}
    files = File.objects.filter(
        folder_id__in=subtree_ids,
        user_id=folder.user_id,
    )
    return sorted(
        files,
        key=lambda file_instance: (
            position[file_instance.folder_id],
            file_instance.id,
        ),
    )


def revoke_link(user: _User, link_id: object) -> SharedLink:
    """Delete a share link owned (through its folder) by user.

    Args:
        user: Acting user.
        link_id: Link to delete.

    Returns:
        The deleted SharedLink (keeps folder_id for redirects).

    Raises:
        NotFoundError: If link does not exist.
        ForbiddenError: If the link's folder belongs to someone else.
    """
    parsed_id = parse_id(link_id)
    if parsed_id is None:
        raise NotFoundError('Share link', link_id)

    with transaction.atomic():
        link = SharedLink.objects.select_related('folder').filter(
            pk=parsed_id,
        ).first()
        if link is None:
            raise NotFoundError('Share link', parsed_id)

        ensure_link_owner(user, link)
        link.delete()

    logger.info('Share link deleted: ID=%d, folder %d', parsed_id, link.folder_id)
    return link


def list_links(
    user: _User,
    folder_id: object,
) -> tuple[Folder, QuerySet[SharedLink]]:
    """List share links of a folder, newest first.

    Args:
        user: Acting user.
        folder_id: Folder whose links to list.

    Returns:
        Tuple of (folder, links).

    Raises:
        NotFoundError: If folder is absent or owned by someone else.
    """
    folder = get_owned_folder(user, folder_id)
    links = SharedLink.objects.filter(folder=folder).order_by(
        '-created_at',
        '-id',
    )
    return folder, links


def retention_cutoff(retention_days: int) -> datetime:
    """Compute the expiry before which links are purged.

    Args:
        retention_days: How long expired links are kept.

    Returns:
        Cutoff time, retention_days before now.
    """
    return timezone.now() - timedelta(days=retention_days)


def purge_expired_links(cutoff: datetime) -> int:
    """Delete links that expired at or before cutoff.

    Args:
        cutoff: Result of ``retention_cutoff``.

    Returns:
        Number of deleted links.
    """
    deleted, _ = SharedLink.objects.filter(expires_at__lte=cutoff).delete()
    logger.info(
        'Purged %d share links expired before %s',
        deleted,
        cutoff.isoformat(),
    )
    return deleted
