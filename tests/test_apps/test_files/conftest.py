"""Shared fixtures for files app tests."""

import boto3
import pytest
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from moto import mock_aws

from server.apps.files.models import File, Folder

User = get_user_model()


@pytest.fixture
def user(db):
    """Create test user.

    Returns:
        User instance for testing.
    """
    return User.objects.create_user(
        username='testuser',
        password='testpass123',
        email='test@example.com',
    )


@pytest.fixture
def other_user(db):
    """Create second test user for isolation tests.

    Returns:
        Second user instance.
    """
    return User.objects.create_user(
        username='otheruser',
        password='testpass123',
        email='other@example.com',
    )


@pytest.fixture
def mock_s3():
    """Mock S3 service with file-uploader bucket.

    Yields:
        boto3 S3 resource with file-uploader bucket created.
    """
    with mock_aws():
        conn = boto3.resource('s3', region_name='us-east-1')
        conn.create_bucket(Bucket='file-uploader')
        yield conn


@pytest.fixture
def sample_upload():
    """Small text upload as it arrives in ``request.FILES``.

    Returns:
        SimpleUploadedFile with test data.
    """
    return SimpleUploadedFile(
        'notes.txt',
        b'test file content',
        content_type='text/plain',
    )


@pytest.fixture
def make_folder(db):
    """Factory for folders without going through the logic layer.

    Returns:
        Callable creating a Folder.
    """
    def factory(owner, name='Folder', parent=None):
        return Folder.objects.create(user=owner, name=name, parent=parent)
    return factory


@pytest.fixture
def make_file(db):
    """Factory for file records pointing at a made-up object key.

    Returns:
        Callable creating a File.
    """
    def factory(owner, name='file.txt', folder=None, size_bytes=100):
        checksum = f'{File.objects.count():064x}'
        return File.objects.create(
            user=owner,
            folder=folder,
            name=name,
            blob=f'{owner.id}/{checksum[:2]}/{checksum}.txt',
            size_bytes=size_bytes,
            mime_type='text/plain',
            checksum_sha256=checksum,
        )
    return factory
