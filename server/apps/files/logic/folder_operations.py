"""Business logic for the folder tree.

Folders form a parent-pointer tree per user. All walks over it are
iterative with an explicit bound, so a deep tree cannot exhaust the
stack and a corrupted parent chain cannot loop forever.
"""

import logging
from dataclasses import dataclass
from typing import Any, Final, NamedTuple

from django.db import transaction
from django.db.models import QuerySet

from server.apps.files.exceptions import (
    FolderTreeCorruptedError,
    InvalidInputError,
)
from server.apps.files.logic.access import get_owned_folder
from server.apps.files.models import File, Folder, SharedLink

# User type for Django's dynamic user model
_User = Any

_NAME_MAX_LENGTH: Final = 255

logger = logging.getLogger(__name__)


class Breadcrumb(NamedTuple):
    """One step of the path from a root folder down to a folder."""

    id: int
    name: str


@dataclass(frozen=True)
class FolderListing:
    """Contents of a folder (or the root level) for one user."""

    folder: Folder | None
    breadcrumbs: list[Breadcrumb]
    folders: list[Folder]
    files: list[File]


@dataclass(frozen=True)
class FolderDeletion:
    """Number of rows removed by a recursive folder delete."""

    folders: int
    files: int
    links: int


def normalize_folder_name(name: str | None) -> str:
    """Trim a folder name and validate it.

    Args:
        name: Raw name from user input.

    Returns:
        Trimmed name.

    Raises:
        InvalidInputError: If name is empty or too long.
    """
    cleaned = (name or '').strip()
    if not cleaned:
        raise InvalidInputError('Folder name is required', field='name')
    if len(cleaned) > _NAME_MAX_LENGTH:
        raise InvalidInputError(
            f'Folder name must be at most {_NAME_MAX_LENGTH} characters',
            field='name',
        )
    return cleaned


def create_folder(
    user: _User,
    name: str,
    parent_id: object = None,
) -> Folder:
    """Create a folder at root level or inside a parent folder.

    Args:
        user: Owner of the new folder.
        name: Folder name, trimmed before saving.
        parent_id: Optional parent folder id, must be owned by user.

    Returns:
        Created Folder instance.

    Raises:
        InvalidInputError: If name is empty.
        NotFoundError: If parent is absent or owned by someone else.
    """
    cleaned_name = normalize_folder_name(name)

    with transaction.atomic():
        parent = None
        if parent_id not in {None, ''}:
            parent = get_owned_folder(user, parent_id, for_update=True)

        folder = Folder.objects.create(
            user=user,
            parent=parent,
            name=cleaned_name,
        )

    logger.info(
        'Folder created: %s (ID: %d, parent: %s, user: %s)',
        folder.name,
        folder.id,
        folder.parent_id,
        user.pk,
    )
    return folder


def rename_folder(user: _User, folder_id: object, new_name: str) -> Folder:
    """Rename a folder. The parent never changes.

    Args:
        user: Acting user.
        folder_id: Folder to rename.
        new_name: New name, trimmed before saving.

    Returns:
        Updated Folder instance.

    Raises:
        InvalidInputError: If name is empty.
        NotFoundError: If folder is absent or owned by someone else.
    """
    cleaned_name = normalize_folder_name(new_name)

    with transaction.atomic():
        folder = get_owned_folder(user, folder_id, for_update=True)
        folder.name = cleaned_name
        folder.save(update_fields=['name'])

    logger.info('Folder renamed: ID=%d -> %s', folder.id, folder.name)
    return folder


def list_children(
    user: _User,
    folder: Folder | None,
) -> tuple[QuerySet[Folder], QuerySet[File]]:
    """Query direct subfolders and files of a folder, newest first.

    Args:
        user: Owner of the listed entries.
        folder: Parent folder, None for the root level.

    Returns:
        Tuple of (folders, files) querysets.
    """
    folders = Folder.objects.filter(user=user, parent=folder).order_by(
        '-created_at',
        '-id',
    )
    files = File.objects.filter(user=user, folder=folder).order_by(
        '-created_at',
        '-id',
    )
    return folders, files


def list_folder(user: _User, folder_id: object = None) -> FolderListing:
    """List a folder's contents together with its breadcrumbs.

    Args:
        user: Acting user.
        folder_id: Folder to list, None (or '') for the root level.

    Returns:
        FolderListing with the folder, breadcrumbs and children.

    Raises:
        NotFoundError: If folder is absent or owned by someone else.
    """
    folder = None
    breadcrumbs: list[Breadcrumb] = []
    if folder_id not in {None, ''}:
        folder = get_owned_folder(user, folder_id)
        breadcrumbs = get_breadcrumbs(user, folder.id)

    folders, files = list_children(user, folder)
    logger.debug(
        'Listing folder %s for user %s',
        folder.id if folder else 'root',
        user.pk,
    )
    return FolderListing(
        folder=folder,
        breadcrumbs=breadcrumbs,
        folders=list(folders),
        files=list(files),
    )


def get_breadcrumbs(user: _User, folder_id: object) -> list[Breadcrumb]:
    """Resolve the path from the tree root down to a folder.

    Walks parent links upward, one row at a time, then reverses.
    The walk may take at most as many steps as the user has folders;
    more than that means the chain loops.

    Args:
        user: Acting user.
        folder_id: Folder at the end of the path.

    Returns:
        Breadcrumbs, root first, ending with the folder itself.

    Raises:
        NotFoundError: If folder is absent or owned by someone else.
        FolderTreeCorruptedError: If the parent chain loops or leaves
            the user's folders.
    """
    folder = get_owned_folder(user, folder_id)
    max_steps = Folder.objects.filter(user=user).count()

    chain = [Breadcrumb(folder.id, folder.name)]
    parent_id = folder.parent_id
    while parent_id is not None:
        if len(chain) >= max_steps:
            logger.error('Parent chain of folder %d loops', folder.id)
            raise FolderTreeCorruptedError(folder.id, 'parent chain loops')

        parent = Folder.objects.filter(pk=parent_id, user=user).values(
            'id',
            'name',
            'parent_id',
        ).first()
        if parent is None:
            logger.error(
                'Folder %d has a parent outside its owner tree: %d',
                folder.id,
                parent_id,
            )
            raise FolderTreeCorruptedError(
                folder.id,
                f'parent {parent_id} is missing or foreign',
            )

        chain.append(Breadcrumb(parent['id'], parent['name']))
        parent_id = parent['parent_id']

    chain.reverse()
    return chain


def collect_subtree(folder: Folder) -> list[int]:
    """Collect a folder and all its descendants.

    Breadth-first, one query per depth level. Parents always come
    before their children, and each level is ordered by parent id then
    id, so the same tree always yields the same sequence.

    Args:
        folder: Root of the subtree.

    Returns:
        Folder ids, starting with folder.id.

    Raises:
        FolderTreeCorruptedError: If a folder is reached twice.
    """
    ordered = [folder.id]
    visited = {folder.id}
    frontier = [folder.id]

    while frontier:
        children = list(
            Folder.objects.filter(
                parent_id__in=frontier,
                user_id=folder.user_id,
            ).order_by('parent_id', 'id').values_list('id', flat=True),
        )
        next_frontier = []
        for child_id in children:
            if child_id in visited:
                logger.error(
                    'Folder %d reached twice below folder %d',
                    child_id,
                    folder.id,
                )
                raise FolderTreeCorruptedError(
                    folder.id,
                    f'folder {child_id} reached twice',
                )
            visited.add(child_id)
            ordered.append(child_id)
            next_frontier.append(child_id)
        frontier = next_frontier

    return ordered


def delete_folder(user: _User, folder_id: object) -> FolderDeletion:
    """Delete a folder with all its subfolders, files and share links.

    Everything happens in one transaction: either the whole subtree
    is gone or nothing changed. Stored objects of the deleted files
    are discarded after commit by the post_delete signal handler,
    best effort and outside the transaction.

    Args:
        user: Acting user.
        folder_id: Root of the subtree to delete.

    Returns:
        FolderDeletion with the number of removed rows.

    Raises:
        NotFoundError: If folder is absent, owned by someone else, or
            was deleted concurrently.
        FolderTreeCorruptedError: If the subtree contains a cycle.
    """
    with transaction.atomic():
        folder = get_owned_folder(user, folder_id, for_update=True)
        subtree_ids = collect_subtree(folder)

        links_deleted, _ = SharedLink.objects.filter(
            folder_id__in=subtree_ids,
        ).delete()
        files_deleted, _ = File.objects.filter(
            folder_id__in=subtree_ids,
        ).delete()
        folders_deleted, _ = Folder.objects.filter(
            pk__in=subtree_ids,
        ).delete()

    logger.info(
        'Folder deleted: ID=%d (%d folders, %d files, %d links)',
        folder.id,
        folders_deleted,
        files_deleted,
        links_deleted,
    )
    return FolderDeletion(
        folders=folders_deleted,
        files=files_deleted,
        links=links_deleted,
    )
