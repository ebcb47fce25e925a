"""
Core — Audit Service

Writes AuditLog rows for catalog edits, user changes, production runs and
every stock movement. Callers invoke it inside their own transaction so an
audit row never outlives a rolled-back write.

@file core/services.py
"""

import json
import logging
from typing import Any

from django.core.serializers.json import DjangoJSONEncoder

from core.constants import AUDIT_ACTION_STOCK_ADJUSTMENT
from core.models import AuditLog

logger = logging.getLogger('alphapack')

# Never copied into an audit snapshot.
SNAPSHOT_EXCLUDED_FIELDS = frozenset({'password'})


class AuditService:
    """Centralised audit logging for every write operation."""

    @staticmethod
    def log(
        *,
        actor,
        action: str,
        model_name: str,
        object_id: str,
        old_values: dict[str, Any] | None = None,
        new_values: dict[str, Any] | None = None,
    ) -> AuditLog:
        return AuditLog.objects.create(
            actor=actor,
            action=action,
            model_name=model_name,
            object_id=str(object_id),
            old_values=old_values,
            new_values=new_values,
        )

    @staticmethod
    def log_stock_movement(*, actor, balance, previous, entry) -> AuditLog:
        """Record one balance change together with the ledger entry that explains it."""
        return AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_STOCK_ADJUSTMENT,
            model_name='StockBalance',
            object_id=str(balance.pk),
            old_values={'quantity': str(previous)},
            new_values={
                'quantity': str(balance.quantity),
                'ledger_entry': str(entry.pk),
                'source_table': entry.source_table,
                'source_transaction_id': (
                    str(entry.source_transaction_id) if entry.source_transaction_id else None
                ),
            },
        )

    @staticmethod
    def snapshot(instance, fields=None) -> dict[str, Any]:
        """
        Plain-JSON copy of a model instance's concrete fields.

        Foreign keys are stored by primary key. Decimals, UUIDs and
        datetimes go through DjangoJSONEncoder, so quantities keep their
        exact scale ('12.500').
        """
        data = {}
        for field in instance._meta.concrete_fields:
            if field.name in SNAPSHOT_EXCLUDED_FIELDS:
                continue
            if fields is not None and field.name not in fields:
                continue
            data[field.name] = field.value_from_object(instance)
        return json.loads(json.dumps(data, cls=DjangoJSONEncoder))
