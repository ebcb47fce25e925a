"""
Alpha Inventory — Test Settings

Used by pytest (see pyproject.toml). Runs against PostgreSQL when
DATABASE_URL is set, otherwise against a throwaway SQLite file; the
threaded locking tests only run on PostgreSQL.

@file config/settings/test.py
"""

from .base import *  # noqa: F401, F403

DEBUG = False

DATABASES = {  # noqa: F405
    'default': env.db('DATABASE_URL', default=f'sqlite:///{BASE_DIR / "test.sqlite3"}'),  # noqa: F405
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    }
}

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True

REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = []  # noqa: F405
REST_FRAMEWORK['DEFAULT_RENDERER_CLASSES'] = (  # noqa: F405
    'core.renderers.StandardJSONRenderer',
)

STOCK_LOCK_TIMEOUT_MS = env.int('STOCK_LOCK_TIMEOUT_MS', default=1000)  # noqa: F405

LOGGING['loggers']['alphapack']['level'] = 'WARNING'  # noqa: F405
