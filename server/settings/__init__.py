"""Settings entry point.

Components are loaded in order, then the environment file selected by
``DJANGO_ENV`` (``development`` by default) overrides them.
"""

from os import environ

from split_settings.tools import include, optional

_ENV = environ.get('DJANGO_ENV') or 'development'

_base_settings = (
    'components/common.py',
    'components/logging.py',
    'components/storages.py',
    'components/files.py',
    # Select the right env:
    f'environments/{_ENV}.py',
    # Optionally override some settings:
    optional('environments/local.py'),
)

include(*_base_settings)
