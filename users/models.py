"""
Users — Models

Custom User model with UUID PK, email-based login and a single plant role
(ADMIN, SUPERVISOR, OPERATOR, MAINTENANCE). The role is read from the
database on every permission check; it is never taken from request data.

@file users/models.py
"""

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.models import BaseModel
from users.managers import UserManager

# Roles allowed to post manual stock adjustments and production runs.
STOCK_ADJUST_ROLES = ('ADMIN', 'SUPERVISOR')
RUN_RECORD_ROLES = ('ADMIN', 'SUPERVISOR', 'OPERATOR')


class User(AbstractBaseUser, PermissionsMixin, BaseModel):
    """A plant employee who can act on inventory through the API."""

    class RoleChoices(models.TextChoices):
        ADMIN = 'ADMIN', _('Administrator')
        SUPERVISOR = 'SUPERVISOR', _('Supervisor')
        OPERATOR = 'OPERATOR', _('Operator')
        MAINTENANCE = 'MAINTENANCE', _('Maintenance')

    email = models.EmailField(_('email'), unique=True)
    first_name = models.CharField(_('first name'), max_length=100, blank=True)
    last_name = models.CharField(_('last name'), max_length=100, blank=True)
    role = models.CharField(
        _('role'), max_length=12,
        choices=RoleChoices.choices, default=RoleChoices.OPERATOR,
        db_index=True,
    )

    is_staff = models.BooleanField(_('staff status'), default=False)
    is_active = models.BooleanField(_('active'), default=True)
    date_joined = models.DateTimeField(_('date joined'), default=timezone.now)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        verbose_name = _('user')
        verbose_name_plural = _('users')
        ordering = ['-created_at']

    def __str__(self):
        return self.get_full_name()

    def delete(self, *args, **kwargs):
        raise NotImplementedError(
            'Plant accounts are never deleted; set is_active=False to deactivate.',
        )

    def get_full_name(self):
        full = f'{self.first_name} {self.last_name}'.strip()
        return full or self.email

    def get_short_name(self):
        return self.first_name or self.email

    def has_role(self, *role_names: str) -> bool:
        return self.role in role_names

    @property
    def is_plant_admin(self) -> bool:
        return self.is_superuser or self.role == self.RoleChoices.ADMIN

    @property
    def can_adjust_stock(self) -> bool:
        return self.is_superuser or self.has_role(*STOCK_ADJUST_ROLES)

    @property
    def can_record_runs(self) -> bool:
        return self.is_superuser or self.has_role(*RUN_RECORD_ROLES)
