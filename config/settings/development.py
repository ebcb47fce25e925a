"""
Alpha Inventory — Development Settings

Local overrides. Activated by:
  DJANGO_SETTINGS_MODULE=config.settings.development

Celery tasks run inline unless CELERY_TASK_ALWAYS_EAGER=false, so the
reorder and reconciliation checks can be exercised without a worker.
Row locks wait longer than in production so a stepped debugger does not
trip LOCK_TIMEOUT on a concurrent request.

@file config/settings/development.py
"""

from .base import *  # noqa: F401, F403

DEBUG = True

ALLOWED_HOSTS = ['*']

INSTALLED_APPS += [  # noqa: F405
    'django_extensions',
]

CORS_ALLOW_ALL_ORIGINS = True

REST_FRAMEWORK['DEFAULT_THROTTLE_RATES'].update({  # noqa: F405
    'anon': '1000/minute',
    'user': '5000/minute',
    'stock_write': '1000/minute',
})

CELERY_TASK_ALWAYS_EAGER = env.bool('CELERY_TASK_ALWAYS_EAGER', default=True)  # noqa: F405

STOCK_LOCK_TIMEOUT_MS = env.int('STOCK_LOCK_TIMEOUT_MS', default=30000)  # noqa: F405

LOGGING['loggers']['alphapack']['level'] = 'DEBUG'  # noqa: F405
