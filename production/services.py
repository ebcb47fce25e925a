"""
Production — Service Layer

ProductionRunCoordinator turns one production run into up to three stock
legs that succeed or fail together:

  1. finished good   +actual_pieces_produced  (pcs)
  2. raw material    -raw_material_bags_used  (bags)
  3. master batch    -master_batch_bags_used  (bags, only when the finished
                                               good declares a master batch)

Everything is validated read-only first. The run row and every leg are then
written inside one transaction, legs applied in the order above, so a
failing leg rolls back the run and all earlier legs.

@file production/services.py
"""

import logging
from decimal import Decimal
from typing import NamedTuple
from uuid import UUID

from django.db import DatabaseError, transaction

from catalog.models import Machine, Product, UnitOfMeasure
from core.constants import AUDIT_ACTION_CREATE, PIECES_MAX, SOURCE_TABLE_PRODUCTION
from core.exceptions import (
    BusinessRuleViolation,
    InsufficientStockError,
    PersistenceFailure,
    ResourceNotFoundError,
)
from core.services import AuditService
from stock.models import StockBalance
from stock.services import AdjustmentService, as_quantity, as_uuid

from .models import ProductionRun

logger = logging.getLogger('alphapack')

LEG_FINISHED_GOOD = 'FINISHED_GOOD'
LEG_RAW_MATERIAL = 'RAW_MATERIAL'
LEG_MASTER_BATCH = 'MASTER_BATCH'

RAW_MATERIAL_TYPES = (
    Product.TypeChoices.RAW_MATERIAL,
    Product.TypeChoices.REGRIND_MATERIAL,
)


class RunLeg(NamedTuple):
    name: str
    product_id: UUID
    delta: Decimal
    unit: str
    note: str


def _plain(quantity) -> str:
    """Render 40.000 as 40 and 2.500 as 2.5."""
    return format(Decimal(quantity).normalize(), 'f')


def _count(value, field: str) -> int:
    quantity = as_quantity(value, field)
    if quantity < 0:
        raise BusinessRuleViolation(detail=f'{field} must be a non-negative number.')
    if quantity != quantity.to_integral_value():
        raise BusinessRuleViolation(detail=f'{field} must be a whole number.')
    if quantity > PIECES_MAX:
        raise BusinessRuleViolation(detail=f'{field} must not exceed {PIECES_MAX}.')
    return int(quantity)


def _bags(value, field: str) -> Decimal:
    quantity = as_quantity(value, field)
    if quantity < 0:
        raise BusinessRuleViolation(detail=f'{field} must be a non-negative number.')
    return quantity


def _get_product(product_id, field: str, label: str) -> Product:
    try:
        return Product.objects.get(pk=as_uuid(product_id, field))
    except Product.DoesNotExist:
        raise ResourceNotFoundError(detail=f'{label} not found.')


def _require_stock(product: Product, required: Decimal, label: str) -> None:
    available = StockBalance.objects.filter(product=product).values_list(
        'quantity', flat=True,
    ).first()
    if available is None:
        raise ResourceNotFoundError(detail=f'{label} stock record not found.')
    if available < required:
        raise InsufficientStockError(
            detail=f'Insufficient {label.lower()} stock. '
                   f'Available: {_plain(available)} bags, required: {_plain(required)} bags.',
        )


class ProductionRunCoordinator:
    """Validates and records production runs with their stock legs."""

    @staticmethod
    def expected_legs(run: ProductionRun) -> list[RunLeg]:
        """The legs a run mints, in application order. Zero or unreferenced legs are skipped."""
        legs = []
        if run.actual_pieces_produced > 0:
            legs.append(RunLeg(
                name=LEG_FINISHED_GOOD,
                product_id=run.product_id,
                delta=Decimal(run.actual_pieces_produced),
                unit=UnitOfMeasure.PCS,
                note=f'Production run: +{run.actual_pieces_produced} pcs produced',
            ))
        if run.raw_material_id and run.raw_material_bags_used > 0:
            legs.append(RunLeg(
                name=LEG_RAW_MATERIAL,
                product_id=run.raw_material_id,
                delta=-run.raw_material_bags_used,
                unit=UnitOfMeasure.BAGS,
                note=f'Production run: -{_plain(run.raw_material_bags_used)} bags consumed',
            ))
        if run.master_batch_id and run.master_batch_bags_used > 0:
            legs.append(RunLeg(
                name=LEG_MASTER_BATCH,
                product_id=run.master_batch_id,
                delta=-run.master_batch_bags_used,
                unit=UnitOfMeasure.BAGS,
                note=f'Production run: -{_plain(run.master_batch_bags_used)} bags consumed',
            ))
        return legs

    @staticmethod
    def record_run(
        *,
        product_id,
        machine_id,
        shift: str,
        actual_pieces_produced,
        raw_material_bags_used=0,
        master_batch_bags_used=0,
        target_quantity=0,
        waste_quantity=0,
        raw_material_id=None,
        master_batch_id=None,
        started_at=None,
        completed_at=None,
        actor,
    ) -> ProductionRun:
        """
        Validate a run, then persist it and apply its legs atomically.

        Raises BusinessRuleViolation, ResourceNotFoundError or
        InsufficientStockError with nothing written, or the first failing
        leg's error after everything has been rolled back.
        """
        fields = ProductionRunCoordinator._preflight(
            product_id=product_id,
            machine_id=machine_id,
            shift=shift,
            actual_pieces_produced=actual_pieces_produced,
            raw_material_bags_used=raw_material_bags_used,
            master_batch_bags_used=master_batch_bags_used,
            target_quantity=target_quantity,
            waste_quantity=waste_quantity,
            raw_material_id=raw_material_id,
            master_batch_id=master_batch_id,
            started_at=started_at,
            completed_at=completed_at,
        )

        try:
            with transaction.atomic():
                run = ProductionRun.objects.create(created_by=actor, **fields)
                legs = ProductionRunCoordinator.expected_legs(run)
                for leg in legs:
                    AdjustmentService.adjust(
                        product_id=leg.product_id,
                        delta=leg.delta,
                        unit=leg.unit,
                        note=leg.note,
                        actor=actor,
                        source_table=SOURCE_TABLE_PRODUCTION,
                        source_transaction_id=run.pk,
                    )
                AuditService.log(
                    actor=actor,
                    action=AUDIT_ACTION_CREATE,
                    model_name='ProductionRun',
                    object_id=str(run.pk),
                    new_values=AuditService.snapshot(run),
                )
        except DatabaseError as exc:
            logger.exception('Production run for product %s could not be saved.', product_id)
            raise PersistenceFailure() from exc

        logger.info(
            'Production run %s recorded: %s pcs on machine %s, legs %s.',
            run.pk, run.actual_pieces_produced, run.machine_id,
            ', '.join(leg.name for leg in legs) or 'none',
        )
        return run

    @staticmethod
    def _preflight(
        *,
        product_id,
        machine_id,
        shift,
        actual_pieces_produced,
        raw_material_bags_used,
        master_batch_bags_used,
        target_quantity,
        waste_quantity,
        raw_material_id,
        master_batch_id,
        started_at,
        completed_at,
    ) -> dict:
        """Read-only checks. Returns the ProductionRun field values."""
        if not product_id or not machine_id or not shift:
            raise BusinessRuleViolation(detail='product_id, machine_id and shift are required.')
        if shift not in ProductionRun.ShiftChoices.values:
            raise BusinessRuleViolation(detail='shift must be DAY or NIGHT.')

        pieces = _count(actual_pieces_produced, 'actual_pieces_produced')
        target = _count(target_quantity or 0, 'target_quantity')
        waste = _count(waste_quantity or 0, 'waste_quantity')
        rm_bags = _bags(raw_material_bags_used or 0, 'raw_material_bags_used')

        if started_at and completed_at and completed_at < started_at:
            raise BusinessRuleViolation(detail='completed_at must not be before started_at.')

        product = _get_product(product_id, 'product_id', 'Product')
        if not product.is_finished_good:
            raise BusinessRuleViolation(detail='Production runs must record a finished good.')

        try:
            machine = Machine.objects.get(pk=as_uuid(machine_id, 'machine_id'))
        except Machine.DoesNotExist:
            raise ResourceNotFoundError(detail='Machine not found.')
        if not machine.is_operable:
            raise BusinessRuleViolation(detail='Machine must be in ACTIVE status.')

        raw_material = None
        if raw_material_id:
            raw_material = _get_product(raw_material_id, 'raw_material_id', 'Raw material')
            if raw_material.product_type not in RAW_MATERIAL_TYPES:
                raise BusinessRuleViolation(
                    detail='raw_material_id must reference a raw or regrind material.',
                )

        # A finished good without a master batch ignores any master-batch input.
        master_batch = None
        mb_bags = Decimal('0')
        if product.uses_master_batch:
            mb_bags = _bags(master_batch_bags_used or 0, 'master_batch_bags_used')
            if master_batch_id:
                master_batch = _get_product(master_batch_id, 'master_batch_id', 'Master batch')
                if master_batch.product_type != Product.TypeChoices.MASTER_BATCH:
                    raise BusinessRuleViolation(
                        detail='master_batch_id must reference a master batch.',
                    )

        if raw_material is not None and rm_bags > 0:
            _require_stock(raw_material, rm_bags, 'Raw material')
        if master_batch is not None and mb_bags > 0:
            _require_stock(master_batch, mb_bags, 'Master batch')

        return {
            'product': product,
            'machine': machine,
            'shift': shift,
            'target_quantity': target,
            'actual_pieces_produced': pieces,
            'waste_quantity': waste,
            'raw_material': raw_material,
            'raw_material_bags_used': rm_bags,
            'master_batch': master_batch,
            'master_batch_bags_used': mb_bags,
            'started_at': started_at,
            'completed_at': completed_at,
        }
