"""Forms for accounts app."""

from typing import Final

from django import forms
from django.contrib.auth.forms import UserCreationForm

from server.apps.accounts.models import User, normalize_email_address

_USERNAME_MIN_LENGTH: Final = 3


class RegistrationForm(UserCreationForm):
    """Sign-up form with a required, case-insensitively unique email."""

    email = forms.EmailField(required=True)

    class Meta(UserCreationForm.Meta):
        """Form metadata."""

        model = User
        fields = ('username', 'email')

    def clean_username(self) -> str:
        """Strip the username and enforce a minimum length.

        Returns:
            Cleaned username.

        Raises:
            ValidationError: If username is too short.
        """
        username = super().clean_username().strip()
        if len(username) < _USERNAME_MIN_LENGTH:
            raise forms.ValidationError(
                f'Username must be at least {_USERNAME_MIN_LENGTH} characters',
            )
        return username

    def clean_email(self) -> str:
        """Normalize email and reject addresses already registered.

        Returns:
            Lowercased email.

        Raises:
            ValidationError: If email is already in use.
        """
        email = normalize_email_address(self.cleaned_data['email'])
        if User.objects.filter(email=email).exists():
            raise forms.ValidationError('Email or username already exists')
        return email
