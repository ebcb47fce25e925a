"""
Core — Model Tests

Tests for AuditLog and AuditService.snapshot.

@file core/tests/test_models.py
"""

from decimal import Decimal

import pytest

from core.models import AuditLog
from core.services import AuditService
from tests.factories import AuditLogFactory, FinishedGoodFactory, UserFactory


@pytest.mark.django_db
class TestAuditLog:
    def test_create_audit_log(self):
        user = UserFactory()
        log = AuditService.log(
            actor=user,
            action=AuditLog.ActionChoices.STOCK_ADJUSTMENT,
            model_name='StockBalance',
            object_id='balance-123',
            old_values={'quantity': '10.000'},
            new_values={'quantity': '15.000'},
        )
        assert log.pk is not None
        assert log.action == 'STOCK_ADJUSTMENT'
        assert log.actor == user
        assert log.new_values == {'quantity': '15.000'}

    def test_audit_log_is_insert_only(self):
        log = AuditLogFactory()
        log.object_id = 'tampered'
        with pytest.raises(NotImplementedError):
            log.save()
        with pytest.raises(NotImplementedError):
            AuditLog.objects.filter(pk=log.pk).update(object_id='tampered')
        with pytest.raises(NotImplementedError):
            log.delete()

    def test_factory_builds_log(self):
        log = AuditLogFactory()
        assert log.pk is not None
        assert str(log).startswith('CREATE Product:')

    def test_user_create_triggers_audit(self):
        """User creation via signal should produce an audit log."""
        before = AuditLog.objects.filter(model_name='User').count()
        UserFactory()
        assert AuditLog.objects.filter(model_name='User').count() > before


@pytest.mark.django_db
class TestSnapshot:
    def test_snapshot_stringifies_decimals_and_uuids(self):
        product = FinishedGoodFactory(reorder_level=Decimal('12.500'))
        snapshot = AuditService.snapshot(product)
        assert snapshot['reorder_level'] == '12.500'
        assert snapshot['parent_master_batch'] is None
        assert snapshot['sku'] == product.sku

    def test_snapshot_limits_fields(self):
        user = UserFactory()
        snapshot = AuditService.snapshot(user, fields=['email', 'role'])
        assert snapshot == {'email': user.email, 'role': 'OPERATOR'}

    def test_snapshot_never_copies_password(self):
        user = UserFactory()
        assert 'password' not in AuditService.snapshot(user)

    def test_snapshot_stores_foreign_keys_by_pk(self):
        product = FinishedGoodFactory()
        snapshot = AuditService.snapshot(product, fields=['id', 'created_by'])
        assert snapshot == {'id': str(product.pk), 'created_by': None}
