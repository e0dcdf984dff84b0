"""Tests for Folder model."""

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError

from server.apps.files.models import Folder


@pytest.mark.django_db
def test_folder_model_str(user, make_folder):
    """Test Folder __str__ method."""
    folder = make_folder(user, 'Photos')

    assert str(folder) == f'{user.username}:Photos'


@pytest.mark.django_db
def test_folder_empty_name_rejected(user):
    """Test database refuses empty folder names."""
    with pytest.raises(IntegrityError):
        Folder.objects.create(user=user, name='')


@pytest.mark.django_db
def test_folder_cannot_be_own_parent(user, make_folder):
    """Test database refuses a folder pointing at itself."""
    folder = make_folder(user, 'Loop')

    with pytest.raises(IntegrityError):
        Folder.objects.filter(pk=folder.pk).update(parent=folder)


@pytest.mark.django_db
def test_folder_clean_rejects_foreign_parent(user, other_user, make_folder):
    """Test a folder cannot be nested in another user's folder."""
    foreign = make_folder(other_user, 'Theirs')
    folder = Folder(user=user, name='Mine', parent=foreign)

    with pytest.raises(ValidationError):
        folder.clean()


@pytest.mark.django_db
def test_folder_delete_cascades(user, make_folder, make_file):
    """Test deleting a folder removes children through the database."""
    parent = make_folder(user, 'Parent')
    child = make_folder(user, 'Child', parent=parent)
    make_file(user, folder=child)

    parent.delete()

    assert not Folder.objects.filter(user=user).exists()
    assert not user.files.exists()
