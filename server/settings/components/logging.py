"""Logging configuration.

Every logger propagates to the root console handler, ``server`` and
``django`` loggers only adjust their levels.

See https://docs.djangoproject.com/en/5.1/topics/logging/
"""

from server.settings.components import config

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'console': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'console',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'django': {
            'level': config('DJANGO_LOG_LEVEL', default='INFO'),
        },
        'django.request': {
            'level': 'ERROR',
        },
        'server': {
            'level': config('SERVER_LOG_LEVEL', default='INFO'),
        },
    },
}
