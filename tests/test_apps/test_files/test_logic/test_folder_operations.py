"""Tests for folder tree business logic."""

from datetime import timedelta

import pytest
from django.utils import timezone

from server.apps.files.exceptions import (
    FolderTreeCorruptedError,
    InvalidInputError,
    NotFoundError,
)
from server.apps.files.logic.file_operations import get_file
from server.apps.files.logic.folder_operations import (
    Breadcrumb,
    collect_subtree,
    create_folder,
    delete_folder,
    get_breadcrumbs,
    list_folder,
    normalize_folder_name,
    rename_folder,
)
from server.apps.files.logic.share_operations import list_links
from server.apps.files.models import File, Folder, SharedLink


def _share(folder):
    now = timezone.now()
    return SharedLink.objects.create(
        folder=folder,
        token=f'{folder.id:064x}',
        created_at=now,
        expires_at=now + timedelta(days=1),
    )


def test_normalize_folder_name():
    """Test names are trimmed and validated."""
    assert normalize_folder_name('  Photos ') == 'Photos'

    with pytest.raises(InvalidInputError, match='Folder name is required'):
        normalize_folder_name('   ')
    with pytest.raises(InvalidInputError, match='at most 255'):
        normalize_folder_name('x' * 256)


@pytest.mark.django_db
class TestCreateFolder:
    """Tests for create_folder."""

    def test_create_root_folder(self, user):
        """Test creating a folder at the root level."""
        folder = create_folder(user, ' Photos ')

        assert folder.name == 'Photos'
        assert folder.parent is None
        assert folder.user == user

    def test_create_nested_folder(self, user):
        """Test creating a folder inside a parent given as string id."""
        photos = create_folder(user, 'Photos')

        year = create_folder(user, '2024', str(photos.id))

        assert year.parent == photos

    def test_create_empty_name(self, user):
        """Test empty names create nothing."""
        with pytest.raises(InvalidInputError):
            create_folder(user, '')

        assert not Folder.objects.exists()

    def test_create_in_foreign_parent(self, user, other_user, make_folder):
        """Test a foreign parent is reported as not found."""
        foreign = make_folder(other_user, 'Theirs')

        with pytest.raises(NotFoundError):
            create_folder(user, 'Mine', foreign.id)

        assert not Folder.objects.filter(user=user).exists()

    def test_create_in_missing_parent(self, user):
        """Test a missing parent is reported as not found."""
        with pytest.raises(NotFoundError):
            create_folder(user, 'Orphan', 9999)


@pytest.mark.django_db
class TestRenameFolder:
    """Tests for rename_folder."""

    def test_rename_keeps_parent(self, user, make_folder):
        """Test renaming changes only the name."""
        parent = make_folder(user, 'Parent')
        folder = make_folder(user, 'Old', parent=parent)

        renamed = rename_folder(user, folder.id, ' New ')

        folder.refresh_from_db()
        assert renamed.name == 'New'
        assert folder.name == 'New'
        assert folder.parent == parent

    def test_rename_empty_name(self, user, make_folder):
        """Test empty names leave the folder untouched."""
        folder = make_folder(user, 'Old')

        with pytest.raises(InvalidInputError):
            rename_folder(user, folder.id, '')

        folder.refresh_from_db()
        assert folder.name == 'Old'

    def test_rename_foreign_folder(self, user, other_user, make_folder):
        """Test users cannot rename folders of others."""
        foreign = make_folder(other_user, 'Theirs')

        with pytest.raises(NotFoundError):
            rename_folder(user, foreign.id, 'Mine now')

        foreign.refresh_from_db()
        assert foreign.name == 'Theirs'


@pytest.mark.django_db
class TestListFolder:
    """Tests for list_folder and get_breadcrumbs."""

    def test_photos_scenario(self, user):
        """Test root shows Photos, Photos shows 2024 with breadcrumbs."""
        photos = create_folder(user, 'Photos')
        year = create_folder(user, '2024', photos.id)

        root = list_folder(user)
        assert root.folder is None
        assert root.breadcrumbs == []
        assert root.folders == [photos]

        inside = list_folder(user, photos.id)
        assert inside.folder == photos
        assert inside.folders == [year]
        assert inside.breadcrumbs == [Breadcrumb(photos.id, 'Photos')]

        assert get_breadcrumbs(user, year.id) == [
            Breadcrumb(photos.id, 'Photos'),
            Breadcrumb(year.id, '2024'),
        ]

    def test_list_newest_first(self, user, make_folder, make_file):
        """Test children are listed newest first, ties by id."""
        older = make_folder(user, 'Older')
        newer = make_folder(user, 'Newer')
        Folder.objects.filter(pk=older.pk).update(
            created_at=timezone.now() - timedelta(days=1),
        )
        first_file = make_file(user, name='a.txt')
        second_file = make_file(user, name='b.txt')
        File.objects.update(created_at=first_file.created_at)

        listing = list_folder(user)

        assert listing.folders == [newer, older]
        assert listing.files == [second_file, first_file]

    def test_list_is_isolated(self, user, other_user, make_folder, make_file):
        """Test users only see their own entries."""
        make_folder(other_user, 'Theirs')
        make_file(other_user)
        mine = make_folder(user, 'Mine')

        listing = list_folder(user)

        assert listing.folders == [mine]
        assert listing.files == []

    def test_list_foreign_folder(self, user, other_user, make_folder):
        """Test listing a foreign folder is reported as not found."""
        foreign = make_folder(other_user, 'Theirs')

        with pytest.raises(NotFoundError):
            list_folder(user, foreign.id)

    def test_breadcrumbs_detect_cycle(self, user, make_folder):
        """Test a looping parent chain is reported instead of followed."""
        first = make_folder(user, 'First')
        second = make_folder(user, 'Second', parent=first)
        Folder.objects.filter(pk=first.pk).update(parent=second)

        with pytest.raises(FolderTreeCorruptedError):
            get_breadcrumbs(user, second.id)

    def test_breadcrumbs_detect_foreign_parent(
        self,
        user,
        other_user,
        make_folder,
    ):
        """Test a parent outside the owner's tree is reported."""
        folder = make_folder(user, 'Mine')
        foreign = make_folder(other_user, 'Theirs')
        Folder.objects.filter(pk=folder.pk).update(parent=foreign)

        with pytest.raises(FolderTreeCorruptedError):
            get_breadcrumbs(user, folder.id)


@pytest.mark.django_db
class TestCollectSubtree:
    """Tests for collect_subtree."""

    def test_parents_before_children(self, user, make_folder):
        """Test breadth-first order with the root first."""
        root = make_folder(user, 'Root')
        left = make_folder(user, 'Left', parent=root)
        right = make_folder(user, 'Right', parent=root)
        leaf = make_folder(user, 'Leaf', parent=left)
        make_folder(user, 'Elsewhere')

        assert collect_subtree(root) == [root.id, left.id, right.id, leaf.id]

    def test_deep_tree(self, user, make_folder):
        """Test deep trees are walked without recursion."""
        root = make_folder(user, 'Level 0')
        parent = root
        for level in range(1, 200):
            parent = make_folder(user, f'Level {level}', parent=parent)

        assert len(collect_subtree(root)) == 200

    def test_detect_cycle(self, user, make_folder):
        """Test a cycle below the root is reported."""
        root = make_folder(user, 'Root')
        child = make_folder(user, 'Child', parent=root)
        Folder.objects.filter(pk=root.pk).update(parent=child)

        with pytest.raises(FolderTreeCorruptedError):
            collect_subtree(root)


@pytest.mark.django_db
class TestDeleteFolder:
    """Tests for delete_folder."""

    def test_delete_subtree(self, user, make_folder, make_file):
        """Test subfolders, files and links go with the folder."""
        root = make_folder(user, 'Root')
        child = make_folder(user, 'Child', parent=root)
        make_file(user, folder=root)
        child_file = make_file(user, folder=child)
        _share(root)
        _share(child)
        kept_folder = make_folder(user, 'Kept')
        kept_file = make_file(user)

        deletion = delete_folder(user, root.id)

        assert (deletion.folders, deletion.files, deletion.links) == (2, 2, 2)
        assert list(Folder.objects.all()) == [kept_folder]
        assert list(File.objects.all()) == [kept_file]
        assert not SharedLink.objects.exists()

        with pytest.raises(NotFoundError):
            list_folder(user, child.id)
        with pytest.raises(NotFoundError):
            get_file(user, child_file.id)
        with pytest.raises(NotFoundError):
            list_links(user, child.id)

    def test_delete_discards_objects_after_commit(
        self,
        user,
        make_folder,
        make_file,
        django_capture_on_commit_callbacks,
    ):
        """Test each deleted file schedules its object for cleanup."""
        root = make_folder(user, 'Root')
        make_file(user, folder=root)
        make_file(user, folder=make_folder(user, 'Child', parent=root))

        with django_capture_on_commit_callbacks() as callbacks:
            delete_folder(user, root.id)

        assert len(callbacks) == 2

    def test_delete_foreign_folder(
        self,
        user,
        other_user,
        make_folder,
        make_file,
    ):
        """Test users cannot delete folders of others."""
        foreign = make_folder(other_user, 'Theirs')
        make_file(other_user, folder=foreign)

        with pytest.raises(NotFoundError):
            delete_folder(user, foreign.id)

        assert Folder.objects.filter(pk=foreign.pk).exists()
        assert File.objects.filter(folder=foreign).exists()

    def test_delete_corrupted_tree_changes_nothing(self, user, make_folder):
        """Test a cycle aborts the delete before anything is removed."""
        root = make_folder(user, 'Root')
        child = make_folder(user, 'Child', parent=root)
        Folder.objects.filter(pk=root.pk).update(parent=child)

        with pytest.raises(FolderTreeCorruptedError):
            delete_folder(user, root.id)

        assert Folder.objects.count() == 2


@pytest.mark.django_db
def test_same_name_for_two_users(user, other_user):
    """Test two users may both own a root folder named Docs."""
    mine = create_folder(user, 'Docs')
    theirs = create_folder(other_user, 'Docs')

    assert mine.id != theirs.id
    assert list_folder(user).folders == [mine]
    assert list_folder(other_user).folders == [theirs]
