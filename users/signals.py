"""
Users — Signals

Every account change lands in the audit log. A change of role or of
is_active is logged as STATUS_CHANGE, since it widens or narrows what the
account may do to stock; other edits are plain UPDATEs. Password hashes
and login timestamps never enter the snapshot.

@file users/signals.py
"""

import logging

from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver

from core.constants import AUDIT_ACTION_CREATE, AUDIT_ACTION_STATUS_CHANGE, AUDIT_ACTION_UPDATE
from core.services import AuditService
from users.models import User

logger = logging.getLogger('alphapack')

AUDITED_FIELDS = ['email', 'first_name', 'last_name', 'role', 'is_active', 'is_staff']
ACCESS_FIELDS = ('role', 'is_active')


@receiver(pre_save, sender=User)
def remember_previous_state(sender, instance, raw=False, **kwargs):
    if raw or instance._state.adding:
        return
    previous = User.objects.filter(pk=instance.pk).first()
    if previous is not None:
        instance._audit_before = AuditService.snapshot(previous, fields=AUDITED_FIELDS)


@receiver(post_save, sender=User)
def audit_user_change(sender, instance, created, raw=False, **kwargs):
    if raw:
        return
    old_values = instance.__dict__.pop('_audit_before', None)
    new_values = AuditService.snapshot(instance, fields=AUDITED_FIELDS)

    if created:
        action = AUDIT_ACTION_CREATE
    elif old_values == new_values:
        return
    elif old_values and any(old_values[f] != new_values[f] for f in ACCESS_FIELDS):
        action = AUDIT_ACTION_STATUS_CHANGE
        logger.info(
            'Access for %s changed: role %s -> %s, active %s -> %s.',
            instance.email,
            old_values['role'], new_values['role'],
            old_values['is_active'], new_values['is_active'],
        )
    else:
        action = AUDIT_ACTION_UPDATE

    AuditService.log(
        actor=getattr(instance, '_current_user', None),
        action=action,
        model_name='User',
        object_id=str(instance.pk),
        old_values=old_values,
        new_values=new_values,
    )
