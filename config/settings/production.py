"""
Alpha Inventory — Production Settings

Deployment configuration. Activated by:
  DJANGO_SETTINGS_MODULE=config.settings.production

Stock writes serialise on PostgreSQL row locks with a bounded wait, so
any other database engine is refused at startup.

@file config/settings/production.py
"""

from django.core.exceptions import ImproperlyConfigured

from .base import *  # noqa: F401, F403

DEBUG = False

if DATABASES['default']['ENGINE'] != 'django.db.backends.postgresql':  # noqa: F405
    raise ImproperlyConfigured('Alpha Inventory requires PostgreSQL in production.')

DATABASES['default']['CONN_MAX_AGE'] = 600  # noqa: F405
DATABASES['default']['CONN_HEALTH_CHECKS'] = True  # noqa: F405

SECURE_SSL_REDIRECT = True
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

# Floor terminals and the back office talk JSON only.
REST_FRAMEWORK['DEFAULT_RENDERER_CLASSES'] = (  # noqa: F405
    'core.renderers.StandardJSONRenderer',
)

CELERY_TASK_ACKS_LATE = True
CELERY_WORKER_PREFETCH_MULTIPLIER = 1

LOGGING['loggers']['alphapack']['level'] = env('ALPHAPACK_LOG_LEVEL', default='INFO')  # noqa: F405
