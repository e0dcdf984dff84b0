"""Tests for SharedLink model."""

from datetime import timedelta

import pytest
from django.db import IntegrityError
from django.utils import timezone

from server.apps.files.models import LinkState, SharedLink


@pytest.fixture
def folder(user, make_folder):
    """Folder to share."""
    return make_folder(user, 'Shared')


def _make_link(folder, token='a' * 64, lifetime=timedelta(days=1)):
    now = timezone.now()
    return SharedLink.objects.create(
        folder=folder,
        token=token,
        created_at=now,
        expires_at=now + lifetime,
    )


@pytest.mark.django_db
def test_link_state_boundaries(folder):
    """Test a link is active before expiry and expired from expiry on."""
    link = _make_link(folder)

    assert link.state(link.expires_at - timedelta(microseconds=1)) is (
        LinkState.ACTIVE
    )
    assert link.state(link.expires_at) is LinkState.EXPIRED
    assert link.is_expired(link.expires_at + timedelta(days=1))
    assert not link.is_expired()


@pytest.mark.django_db
def test_link_token_unique(folder):
    """Test two links cannot share a token."""
    _make_link(folder)

    with pytest.raises(IntegrityError):
        _make_link(folder)


@pytest.mark.django_db
def test_link_must_expire_after_creation(folder):
    """Test database refuses links that expire before being created."""
    with pytest.raises(IntegrityError):
        _make_link(folder, lifetime=timedelta(0))


@pytest.mark.django_db
def test_link_str(folder):
    """Test SharedLink __str__ shows only a token prefix."""
    link = _make_link(folder, token='abcdef12' + '0' * 56)

    assert str(link) == 'Shared (abcdef12)'
