"""
Catalog — Service Layer

Provisioning and editing of products and machines. Every update runs
against a fixed allow-list of fields that is checked before any write;
unknown fields are rejected, never silently copied.

Creating a product also provisions its StockBalance at quantity 0 in the
same transaction. After that, only stock.services.AdjustmentService may
change the balance.

@file catalog/services.py
"""

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from core.constants import AUDIT_ACTION_CREATE, AUDIT_ACTION_UPDATE
from core.exceptions import BusinessRuleViolation, DuplicateResourceError, ResourceNotFoundError
from core.services import AuditService
from stock.models import StockBalance

from .models import Machine, Product

logger = logging.getLogger('alphapack')

PRODUCT_UPDATABLE_FIELDS = frozenset({
    'sku',
    'name',
    'product_type',
    'description',
    'uom',
    'color',
    'size',
    'parent_raw_material',
    'parent_master_batch',
    'target_production_per_shift',
    'machine_type',
    'reorder_level',
})
PRODUCT_NULLABLE_TEXT_FIELDS = ('description', 'color', 'size', 'machine_type')

MACHINE_UPDATABLE_FIELDS = frozenset({'name', 'serial_number', 'process_type', 'status'})


def _reject_unknown_fields(fields: dict, allowed: frozenset) -> None:
    unknown = sorted(set(fields) - allowed)
    if unknown:
        raise BusinessRuleViolation(detail=f'Fields not allowed: {", ".join(unknown)}.')
    if not fields:
        raise BusinessRuleViolation(detail='No valid fields to update.')


def _full_clean(instance) -> None:
    """Run model validation and re-raise as the API validation error."""
    try:
        instance.full_clean()
    except DjangoValidationError as exc:
        raise BusinessRuleViolation(detail=exc.message_dict)


class ProductService:
    """Product provisioning and allow-listed updates."""

    @staticmethod
    @transaction.atomic
    def create_product(*, actor=None, **fields) -> Product:
        _reject_unknown_fields(fields, PRODUCT_UPDATABLE_FIELDS)
        if Product.objects.filter(sku=fields.get('sku')).exists():
            raise DuplicateResourceError(detail='A product with this SKU already exists.')

        for field in PRODUCT_NULLABLE_TEXT_FIELDS:
            if fields.get(field) == '':
                fields[field] = None
        if not fields.get('uom') and fields.get('product_type'):
            fields['uom'] = Product.expected_uom(fields['product_type'])

        product = Product(**fields)
        product.created_by = actor
        _full_clean(product)
        product.save()

        balance = StockBalance.objects.create(product=product, uom=product.uom)

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_CREATE,
            model_name='Product',
            object_id=str(product.pk),
            new_values=AuditService.snapshot(product),
        )
        logger.info('Product %s provisioned with balance %s.', product.sku, balance.pk)
        return product

    @staticmethod
    @transaction.atomic
    def update_product(*, product_id, actor=None, **fields) -> Product:
        _reject_unknown_fields(fields, PRODUCT_UPDATABLE_FIELDS)
        try:
            product = Product.objects.select_for_update().get(pk=product_id)
        except Product.DoesNotExist:
            raise ResourceNotFoundError(detail='Product not found.')

        old_snapshot = AuditService.snapshot(product)

        for field in PRODUCT_NULLABLE_TEXT_FIELDS:
            if fields.get(field) == '':
                fields[field] = None
        if 'sku' in fields and Product.objects.filter(sku=fields['sku']).exclude(pk=product.pk).exists():
            raise DuplicateResourceError(detail='A product with this SKU already exists.')

        for field, value in fields.items():
            setattr(product, field, value)
        product.updated_by = actor
        _full_clean(product)

        balance = StockBalance.objects.select_for_update().get(product=product)
        if balance.uom != product.uom:
            if balance.quantity != 0:
                raise BusinessRuleViolation(
                    detail='Unit of measure cannot change while the product holds stock.',
                )
            balance.uom = product.uom
            balance.save(update_fields=['uom', 'updated_at'])

        product.save()

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_UPDATE,
            model_name='Product',
            object_id=str(product.pk),
            old_values=old_snapshot,
            new_values=AuditService.snapshot(product),
        )
        return product


class MachineService:
    """Machine registration and allow-listed updates."""

    @staticmethod
    def _normalise(fields: dict) -> dict:
        for key in ('name', 'serial_number'):
            if key in fields:
                value = (fields[key] or '').strip()
                if not value:
                    raise BusinessRuleViolation(detail=f'{key.replace("_", " ").capitalize()} is required.')
                fields[key] = value
        return fields

    @staticmethod
    @transaction.atomic
    def create_machine(*, actor=None, **fields) -> Machine:
        _reject_unknown_fields(fields, MACHINE_UPDATABLE_FIELDS)
        fields = MachineService._normalise(fields)
        if Machine.objects.filter(serial_number=fields.get('serial_number')).exists():
            raise DuplicateResourceError(detail='A machine with this serial number already exists.')

        machine = Machine(**fields)
        machine.created_by = actor
        _full_clean(machine)
        machine.save()

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_CREATE,
            model_name='Machine',
            object_id=str(machine.pk),
            new_values=AuditService.snapshot(machine),
        )
        return machine

    @staticmethod
    @transaction.atomic
    def update_machine(*, machine_id, actor=None, **fields) -> Machine:
        _reject_unknown_fields(fields, MACHINE_UPDATABLE_FIELDS)
        fields = MachineService._normalise(fields)
        try:
            machine = Machine.objects.select_for_update().get(pk=machine_id)
        except Machine.DoesNotExist:
            raise ResourceNotFoundError(detail='Machine not found.')

        if 'serial_number' in fields and Machine.objects.filter(
            serial_number=fields['serial_number'],
        ).exclude(pk=machine.pk).exists():
            raise DuplicateResourceError(detail='A machine with this serial number already exists.')

        old_snapshot = AuditService.snapshot(machine)
        for field, value in fields.items():
            setattr(machine, field, value)
        machine.updated_by = actor
        _full_clean(machine)
        machine.save()

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_UPDATE,
            model_name='Machine',
            object_id=str(machine.pk),
            old_values=old_snapshot,
            new_values=AuditService.snapshot(machine),
        )
        logger.info('Machine %s updated by %s.', machine.serial_number, actor)
        return machine
