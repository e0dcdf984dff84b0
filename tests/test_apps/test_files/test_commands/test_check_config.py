"""Tests for check_config management command."""

from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError


@pytest.fixture
def configured(settings):
    """Settings with every checked value present."""
    settings.SECRET_KEY = 'x' * 50
    settings.STORAGES = {
        **settings.STORAGES,
        'default': {
            **settings.STORAGES['default'],
            'OPTIONS': {
                **settings.STORAGES['default']['OPTIONS'],
                'access_key': 'access',
                'secret_key': 'secret',
            },
        },
    }
    return settings


def test_check_config_all_configured(configured):
    """Test a complete configuration passes."""
    out = StringIO()
    call_command('check_config', stdout=out)

    output = out.getvalue()
    assert 'DJANGO_SECRET_KEY is configured' in output
    assert 'AWS_ACCESS_KEY_ID is configured' in output
    assert 'All settings are configured' in output


def test_check_config_insecure_secret_key(configured):
    """Test the development secret key is reported."""
    configured.SECRET_KEY = 'django-insecure-' + 'x' * 40

    out = StringIO()
    with pytest.raises(CommandError, match='1 setting'):
        call_command('check_config', stdout=out)

    assert 'DJANGO_SECRET_KEY is not configured' in out.getvalue()


def test_check_config_missing_credentials(configured):
    """Test missing storage credentials are reported."""
    configured.STORAGES = {
        **configured.STORAGES,
        'default': {
            **configured.STORAGES['default'],
            'OPTIONS': {
                **configured.STORAGES['default']['OPTIONS'],
                'access_key': None,
                'secret_key': '',
            },
        },
    }

    out = StringIO()
    with pytest.raises(CommandError, match='2 setting'):
        call_command('check_config', stdout=out)

    output = out.getvalue()
    assert 'AWS_ACCESS_KEY_ID is not configured' in output
    assert 'AWS_SECRET_ACCESS_KEY is not configured' in output
