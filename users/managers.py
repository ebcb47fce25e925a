"""
Users — Managers

Email is the login identifier. Every account carries exactly one plant
role; an unknown role is refused at creation time.

@file users/managers.py
"""

from django.contrib.auth.models import BaseUserManager
from django.db import models
from django.utils.translation import gettext_lazy as _

PLANT_ROLES = ('ADMIN', 'SUPERVISOR', 'OPERATOR', 'MAINTENANCE')


class UserQuerySet(models.QuerySet):

    def active(self):
        return self.filter(is_active=True)

    def with_role(self, *roles: str):
        return self.filter(role__in=roles)


class UserManager(BaseUserManager.from_queryset(UserQuerySet)):

    def _create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError(_('Email is required.'))
        role = extra_fields.setdefault('role', 'OPERATOR')
        if role not in PLANT_ROLES:
            raise ValueError(_('Unknown plant role: %(role)s.') % {'role': role})
        user = self.model(email=self.normalize_email(email), **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        """Django admin access; always an ADMIN on the plant floor too."""
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields['role'] = 'ADMIN'

        if extra_fields.get('is_staff') is not True:
            raise ValueError(_('Superuser must have is_staff=True.'))
        if extra_fields.get('is_superuser') is not True:
            raise ValueError(_('Superuser must have is_superuser=True.'))

        return self._create_user(email, password, **extra_fields)
