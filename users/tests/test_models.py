"""
Users — Model Tests

Tests for User creation, roles and the email-based manager.

@file users/tests/test_models.py
"""

import pytest
from django.contrib import admin
from django.db.models import ProtectedError

from core.models import AuditLog
from stock.models import LedgerEntry
from tests.factories import (
    AdminUserFactory,
    RawMaterialFactory,
    SupervisorFactory,
    SuperuserFactory,
    UserFactory,
    stock_up,
)
from users.admin import UserAdmin
from users.models import User


@pytest.mark.django_db
class TestUserModel:
    def test_create_user(self):
        user = UserFactory(email='kofi@alphapack.test')
        assert user.pk is not None
        assert user.email == 'kofi@alphapack.test'
        assert user.role == User.RoleChoices.OPERATOR

    def test_create_user_normalises_email(self):
        user = User.objects.create_user(email='Ama@AlphaPack.TEST', password='Test2026!!')
        assert user.email == 'Ama@alphapack.test'
        assert user.check_password('Test2026!!')

    def test_create_user_requires_email(self):
        with pytest.raises(ValueError):
            User.objects.create_user(email='', password='Test2026!!')

    def test_superuser_creation(self):
        user = User.objects.create_superuser(email='root@alphapack.test', password='Super2026!!')
        assert user.is_staff is True
        assert user.is_superuser is True
        assert user.role == User.RoleChoices.ADMIN

    def test_full_name(self):
        user = UserFactory(first_name='Kwame', last_name='Mensah')
        assert user.get_full_name() == 'Kwame Mensah'

    def test_full_name_fallback_to_email(self):
        user = UserFactory(first_name='', last_name='')
        assert user.get_full_name() == user.email

    def test_uuid_pk(self):
        user = UserFactory()
        assert len(str(user.pk)) == 36


@pytest.mark.django_db
class TestRoles:
    def test_has_role(self):
        user = UserFactory(role=User.RoleChoices.SUPERVISOR)
        assert user.has_role('ADMIN', 'SUPERVISOR')
        assert not user.has_role('ADMIN')

    def test_admin_role_is_plant_admin(self):
        assert AdminUserFactory().is_plant_admin is True

    def test_superuser_is_plant_admin(self):
        user = SuperuserFactory(role=User.RoleChoices.OPERATOR)
        assert user.is_plant_admin is True

    def test_operator_is_not_plant_admin(self):
        assert UserFactory().is_plant_admin is False

    def test_active_manager(self):
        UserFactory(is_active=False)
        active = UserFactory()
        assert list(User.objects.active()) == [active]

    def test_with_role(self):
        UserFactory()
        supervisor = SupervisorFactory()
        assert list(User.objects.with_role('SUPERVISOR', 'ADMIN')) == [supervisor]

    def test_unknown_role_refused(self):
        with pytest.raises(ValueError):
            User.objects.create_user(email='x@alphapack.test', password='Test2026!!', role='CHEF')

    def test_superuser_always_admin_role(self):
        user = User.objects.create_superuser(
            email='boss@alphapack.test', password='Super2026!!', role='OPERATOR',
        )
        assert user.role == User.RoleChoices.ADMIN


@pytest.mark.django_db
class TestCapabilities:
    def test_operator_records_runs_only(self):
        user = UserFactory()
        assert user.can_record_runs is True
        assert user.can_adjust_stock is False

    def test_supervisor_adjusts_stock(self):
        user = SupervisorFactory()
        assert user.can_adjust_stock is True
        assert user.can_record_runs is True

    def test_maintenance_has_neither(self):
        user = UserFactory(role=User.RoleChoices.MAINTENANCE)
        assert user.can_adjust_stock is False
        assert user.can_record_runs is False


@pytest.mark.django_db
class TestUserAudit:
    def _logs(self, user):
        return AuditLog.objects.filter(model_name='User', object_id=str(user.pk))

    def test_role_change_is_status_change(self):
        user = UserFactory()
        user.role = User.RoleChoices.SUPERVISOR
        user.save()
        log = self._logs(user).get(action=AuditLog.ActionChoices.STATUS_CHANGE)
        assert log.old_values['role'] == 'OPERATOR'
        assert log.new_values['role'] == 'SUPERVISOR'

    def test_name_change_is_update(self):
        user = UserFactory(first_name='Ama')
        user.first_name = 'Akosua'
        user.save()
        assert self._logs(user).filter(action=AuditLog.ActionChoices.UPDATE).count() == 1

    def test_password_change_not_logged(self):
        user = UserFactory()
        before = self._logs(user).count()
        user.set_password('Another2026!!')
        user.save()
        assert self._logs(user).count() == before


@pytest.mark.django_db
class TestNoHardDelete:
    def test_instance_delete_refused(self):
        user = UserFactory()
        with pytest.raises(NotImplementedError):
            user.delete()
        assert User.objects.filter(pk=user.pk).exists()

    def test_queryset_delete_blocked_by_history(self):
        supervisor = SupervisorFactory()
        product = RawMaterialFactory()
        ledger_id = stock_up(product, 10, actor=supervisor)
        with pytest.raises(ProtectedError):
            User.objects.filter(pk=supervisor.pk).delete()
        entry = LedgerEntry.objects.get(pk=ledger_id)
        assert entry.created_by_id == supervisor.pk
        assert AuditLog.objects.filter(actor=supervisor).exists()

    def test_admin_cannot_delete(self):
        model_admin = UserAdmin(User, admin.site)
        assert model_admin.has_delete_permission(None) is False
        assert model_admin.has_delete_permission(None, UserFactory()) is False
