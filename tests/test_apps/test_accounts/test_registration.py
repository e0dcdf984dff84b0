"""Tests for registration and login."""

import pytest
from django.contrib.auth import get_user_model
from django.contrib.messages import get_messages
from django.urls import reverse

from server.apps.accounts.forms import RegistrationForm

User = get_user_model()


def _form_data(**overrides):
    data = {
        'username': 'newuser',
        'email': 'New.User@Example.com',
        'password1': 'secret-pass-123',
        'password2': 'secret-pass-123',
    }
    data.update(overrides)
    return data


@pytest.mark.django_db
def test_register(client):
    """Test registration creates a user and redirects to login."""
    response = client.post(reverse('accounts:register'), _form_data())

    assert response.status_code == 302
    assert response.url == reverse('accounts:login')
    user = User.objects.get(username='newuser')
    assert user.email == 'new.user@example.com'
    assert user.check_password('secret-pass-123')
    assert [str(message) for message in get_messages(response.wsgi_request)] == [
        'You are now registered and can log in',
    ]


@pytest.mark.django_db
def test_register_page(client):
    """Test the registration form renders."""
    response = client.get(reverse('accounts:register'))

    assert response.status_code == 200
    assert isinstance(response.context['form'], RegistrationForm)


@pytest.mark.django_db
def test_register_duplicate_email_any_case(client):
    """Test emails are unique regardless of case."""
    User.objects.create_user(
        username='existing',
        email='new.user@example.com',
        password='secret-pass-123',
    )

    response = client.post(reverse('accounts:register'), _form_data())

    assert response.status_code == 200
    assert response.context['form'].errors['email'] == [
        'Email or username already exists',
    ]
    assert User.objects.count() == 1


@pytest.mark.django_db
def test_register_short_username():
    """Test usernames need at least three characters."""
    form = RegistrationForm(data=_form_data(username='ab'))

    assert not form.is_valid()
    assert 'username' in form.errors


@pytest.mark.django_db
def test_register_short_password():
    """Test passwords need at least six characters."""
    form = RegistrationForm(data=_form_data(password1='abc', password2='abc'))

    assert not form.is_valid()
    assert 'password2' in form.errors


@pytest.mark.django_db
def test_register_redirects_logged_in(client):
    """Test logged-in users are not shown the registration form."""
    user = User.objects.create_user(
        username='existing',
        email='existing@example.com',
        password='secret-pass-123',
    )
    client.force_login(user)

    response = client.get(reverse('accounts:register'))

    assert response.status_code == 302
    assert response.url == reverse('files:folder_list')


@pytest.mark.django_db
def test_login(client):
    """Test logging in with username and password."""
    User.objects.create_user(
        username='existing',
        email='existing@example.com',
        password='secret-pass-123',
    )

    response = client.post(reverse('accounts:login'), {
        'username': 'existing',
        'password': 'secret-pass-123',
    })

    assert response.status_code == 302
    assert response.url == reverse('files:folder_list')


@pytest.mark.django_db
def test_logout(client):
    """Test logging out ends the session."""
    user = User.objects.create_user(
        username='existing',
        email='existing@example.com',
        password='secret-pass-123',
    )
    client.force_login(user)

    response = client.post(reverse('accounts:logout'))

    assert response.status_code == 302
    assert response.url == reverse('accounts:login')
    assert '_auth_user_id' not in client.session
