"""Ownership checks shared by folder, file and share operations.

Every lookup of a user-owned resource goes through this module. Absent
resources and resources owned by someone else raise the same
NotFoundError, so one user can never learn what ids another one has.
"""

import logging
from typing import Any

from django.http import HttpRequest

from server.apps.files.exceptions import ForbiddenError, NotFoundError
from server.apps.files.models import File, Folder, SharedLink

# User type for Django's dynamic user model
_User = Any

logger = logging.getLogger(__name__)


def belongs_to(resource_owner_id: int | None, principal_id: int | None) -> bool:
    """Check whether a principal owns a resource.

    Args:
        resource_owner_id: Owner id stored on the resource.
        principal_id: Acting user id, None for anonymous callers.

    Returns:
        True only for an authenticated principal matching the owner.
    """
    if principal_id is None or resource_owner_id is None:
        return False
    return resource_owner_id == principal_id


def resolve_principal(request: HttpRequest) -> int | None:
    """Get the acting user id for a request.

    Args:
        request: Incoming request.

    Returns:
        User id when authenticated, None for anonymous requests.
    """
    user = getattr(request, 'user', None)
    if user is None or not user.is_authenticated:
        return None
    return user.pk


def parse_id(raw_id: object) -> int | None:
    """Coerce an id from a URL or form into an int.

    Args:
        raw_id: Raw value (int, numeric string, None).

    Returns:
        Positive int id, or None if the value is not a valid id.
    """
    if isinstance(raw_id, bool):
        return None
    try:
        parsed = int(raw_id)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return None
    if parsed <= 0:
        return None
    return parsed


def get_owned_folder(
    user: _User,
    folder_id: object,
    *,
    for_update: bool = False,
) -> Folder:
    """Fetch a folder owned by user.

    Args:
        user: Acting user.
        folder_id: Folder id (int or numeric string).
        for_update: Lock the row until the surrounding transaction ends.

    Returns:
        Folder instance.

    Raises:
        NotFoundError: If folder is absent, malformed or not owned.
    """
    parsed_id = parse_id(folder_id)
    if parsed_id is None:
        raise NotFoundError('Folder', folder_id)

    queryset = Folder.objects.all()
    if for_update:
        queryset = queryset.select_for_update()

    folder = queryset.filter(pk=parsed_id).first()
    if folder is None:
        raise NotFoundError('Folder', parsed_id)

    if not belongs_to(folder.user_id, user.pk):
        logger.warning(
            'Denied folder access: folder %d, user %s',
            parsed_id,
            user.pk,
        )
        raise NotFoundError('Folder', parsed_id)

    return folder


def get_owned_file(user: _User, file_id: object) -> File:
    """Fetch a file owned by user.

    Args:
        user: Acting user.
        file_id: File id (int or numeric string).

    Returns:
        File instance with its folder preloaded.

    Raises:
        NotFoundError: If file is absent, malformed or not owned.
    """
    parsed_id = parse_id(file_id)
    if parsed_id is None:
        raise NotFoundError('File', file_id)

    file_instance = File.objects.select_related('folder').filter(
        pk=parsed_id,
    ).first()
    if file_instance is None:
        raise NotFoundError('File', parsed_id)

    if not belongs_to(file_instance.user_id, user.pk):
        logger.warning(
            'Denied file access: file %d, user %s',
            parsed_id,
            user.pk,
        )
        raise NotFoundError('File', parsed_id)

    return file_instance


def ensure_link_owner(user: _User, link: SharedLink) -> None:
    """Check that user owns the folder a link points at.

    Links carry no owner of their own, ownership is derived from the
    share root folder.

    Args:
        user: Acting user.
        link: Share link with its folder.

    Raises:
        ForbiddenError: If the folder belongs to someone else.
    """
    if not belongs_to(link.folder.user_id, user.pk):
        logger.warning(
            'Denied share link access: link %d, user %s',
            link.pk,
            user.pk,
        )
        raise ForbiddenError()
