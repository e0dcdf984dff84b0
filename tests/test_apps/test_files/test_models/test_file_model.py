"""Tests for File model."""

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError

from server.apps.files.models import File


@pytest.mark.django_db
def test_file_model_str(user, make_file):
    """Test File __str__ method."""
    file_instance = make_file(user, name='report.pdf')

    assert str(file_instance) == f'{user.username}:report.pdf'


@pytest.mark.django_db
def test_file_at_root_level(user, make_file):
    """Test files may live outside any folder."""
    file_instance = make_file(user)

    assert file_instance.folder is None
    assert list(File.objects.filter(user=user, folder=None)) == [file_instance]


@pytest.mark.django_db
def test_file_clean_rejects_foreign_folder(user, other_user, make_folder):
    """Test a file cannot be placed in another user's folder."""
    foreign = make_folder(other_user, 'Theirs')
    file_instance = File(
        user=user,
        folder=foreign,
        name='a.txt',
        blob='1/ab/abc.txt',
        size_bytes=1,
        mime_type='text/plain',
        checksum_sha256='a' * 64,
    )

    with pytest.raises(ValidationError):
        file_instance.clean()


@pytest.mark.django_db
def test_file_negative_size_rejected(user):
    """Test database refuses negative sizes."""
    with pytest.raises(IntegrityError):
        File.objects.create(
            user=user,
            name='a.txt',
            blob='1/ab/abc.txt',
            size_bytes=-1,
            mime_type='text/plain',
            checksum_sha256='a' * 64,
        )


@pytest.mark.django_db
def test_files_ordered_newest_first(user, make_file):
    """Test default ordering is newest first, ties by id."""
    first = make_file(user, name='first.txt')
    second = make_file(user, name='second.txt')
    File.objects.update(created_at=first.created_at)

    assert list(File.objects.all()) == [second, first]
