"""Management command to check that required settings are configured."""

from typing import Any, Final

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

_SECRET_KEY_MIN_LENGTH: Final = 32
_INSECURE_KEY_PREFIX: Final = 'django-insecure'


class Command(BaseCommand):
    """Report missing or default values of required settings."""

    help = 'Check that database, secret key and object storage are configured'

    def handle(self, *args: Any, **options: Any) -> None:
        """Run every check and fail if any of them does not pass.

        Args:
            args: Positional arguments (unused).
            options: Command options (unused).

        Raises:
            CommandError: If at least one check fails.
        """
        checks = (
            ('DJANGO_SECRET_KEY', self._secret_key_ok()),
            ('Database', self._database_ok()),
            ('AWS_STORAGE_BUCKET_NAME', self._storage_option_ok('bucket_name')),
            ('AWS_ACCESS_KEY_ID', self._storage_option_ok('access_key')),
            ('AWS_SECRET_ACCESS_KEY', self._storage_option_ok('secret_key')),
        )

        failed = 0
        for name, passed in checks:
            if passed:
                self.stdout.write(self.style.SUCCESS(f'{name} is configured'))
            else:
                self.stdout.write(
                    self.style.ERROR(f'{name} is not configured'),
                )
                failed += 1

        if failed:
            raise CommandError(
                f'{failed} setting(s) need attention, see config/.env.template',
            )
        self.stdout.write(self.style.SUCCESS('All settings are configured'))

    def _secret_key_ok(self) -> bool:
        secret_key = settings.SECRET_KEY
        return (
            len(secret_key) >= _SECRET_KEY_MIN_LENGTH and
            not secret_key.startswith(_INSECURE_KEY_PREFIX)
        )

    def _database_ok(self) -> bool:
        database = settings.DATABASES.get('default', {})
        return bool(database.get('ENGINE') and database.get('NAME'))

    def _storage_option_ok(self, option: str) -> bool:
        storage_options = settings.STORAGES['default'].get('OPTIONS', {})
        return bool(storage_options.get(option))
