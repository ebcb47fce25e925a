"""
Users — Application Configuration

Connects the account audit signals on startup.

@file users/apps.py
"""

from django.apps import AppConfig


class UsersConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'users'
    verbose_name = 'Plant staff & roles'

    def ready(self):
        from users import signals  # noqa: F401
