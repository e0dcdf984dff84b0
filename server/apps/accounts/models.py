"""Database models for accounts app."""

from typing import ClassVar, final

from typing_extensions import override

from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models


def normalize_email_address(email: str | None) -> str:
    """Normalize email for storage and lookups.

    Django only lowercases the domain part, here the whole address
    is lowercased so uniqueness is case-insensitive.

    Args:
        email: Raw email address.

    Returns:
        Stripped, lowercased address ('' for None).
    """
    return (email or '').strip().lower()


class AccountManager(UserManager):
    """User manager that stores emails lowercased."""

    @classmethod
    @override
    def normalize_email(cls, email: str | None) -> str:
        return normalize_email_address(email)


@final
class User(AbstractUser):
    """Account owning folders, files and share links.

    Username and email are both unique. Email is normalized to
    lowercase on every save, so two addresses differing only in case
    cannot both register.
    """

    email = models.EmailField(
        'email address',
        unique=True,
    )

    objects: ClassVar[AccountManager] = AccountManager()  # type: ignore[assignment]

    class Meta:
        """Model metadata."""

        verbose_name = 'User'  # type: ignore[mutable-override]
        verbose_name_plural = 'Users'  # type: ignore[mutable-override]

    @override
    def __str__(self) -> str:
        """String representation."""
        return self.username

    @override
    def clean(self) -> None:
        super().clean()
        self.email = normalize_email_address(self.email)

    @override
    def save(self, *args, **kwargs) -> None:
        self.email = normalize_email_address(self.email)
        super().save(*args, **kwargs)
