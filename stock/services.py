"""
Stock — Service Layer

Balance-plus-journal stock: adjust, level queries, reconciliation.
AdjustmentService is the only writer of StockBalance and LedgerEntry;
every balance change pairs with exactly one ledger entry in the same
transaction. INSERT ONLY — never update or delete LedgerEntry.

@file stock/services.py
"""

import logging
import uuid
from decimal import Decimal, InvalidOperation
from typing import Any
from uuid import UUID

from django.conf import settings
from django.db import DatabaseError, OperationalError, connection, transaction
from django.db.models import BooleanField, Case, F, Q, Sum, Value, When

from catalog.models import Product
from core.constants import (
    QUANTITY_DECIMAL_PLACES,
    QUANTITY_MAX,
    SOURCE_TABLE_MANUAL,
    SOURCE_TABLE_PRODUCTION,
)
from core.exceptions import (
    BusinessRuleViolation,
    InsufficientStockError,
    LockTimeoutError,
    PartialFailureError,
    PersistenceFailure,
    ResourceNotFoundError,
)
from core.services import AuditService

from .models import LedgerEntry, StockBalance

logger = logging.getLogger('alphapack')

# SQLSTATE raised by PostgreSQL when lock_timeout expires.
LOCK_NOT_AVAILABLE = '55P03'

QUANTITY_STEP = Decimal(1).scaleb(-QUANTITY_DECIMAL_PLACES)

REORDER_ALERT_TYPES = (
    Product.TypeChoices.RAW_MATERIAL,
    Product.TypeChoices.MASTER_BATCH,
)


def as_uuid(value, field: str) -> UUID:
    """Coerce an identifier to UUID or reject it as a validation error."""
    if isinstance(value, UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        raise BusinessRuleViolation(detail=f'{field} must be a valid UUID.')


def as_quantity(value, field: str) -> Decimal:
    """Coerce a quantity to Decimal with at most three decimal places."""
    if isinstance(value, bool) or value is None:
        raise BusinessRuleViolation(detail=f'{field} must be a number.')
    try:
        quantity = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise BusinessRuleViolation(detail=f'{field} must be a number.')
    if not quantity.is_finite():
        raise BusinessRuleViolation(detail=f'{field} must be a finite number.')
    if abs(quantity) > QUANTITY_MAX:
        raise BusinessRuleViolation(detail=f'{field} must not exceed {QUANTITY_MAX} in magnitude.')
    if quantity != quantity.quantize(QUANTITY_STEP):
        raise BusinessRuleViolation(
            detail=f'{field} supports at most {QUANTITY_DECIMAL_PLACES} decimal places.',
        )
    return quantity


def _bound_lock_wait() -> None:
    """Fail fast instead of queueing forever behind another balance lock."""
    if connection.vendor != 'postgresql':
        return
    timeout_ms = int(getattr(settings, 'STOCK_LOCK_TIMEOUT_MS', 5000))
    with connection.cursor() as cursor:
        cursor.execute("SELECT set_config('lock_timeout', %s, true)", [f'{timeout_ms}ms'])


def _is_lock_timeout(exc: OperationalError) -> bool:
    cause = exc.__cause__
    sqlstate = getattr(cause, 'sqlstate', None) or getattr(cause, 'pgcode', None)
    if sqlstate == LOCK_NOT_AVAILABLE:
        return True
    return 'database is locked' in str(exc).lower()


class AdjustmentService:
    """Atomic, lock-protected single-product stock adjustment."""

    @staticmethod
    def adjust(
        *,
        product_id,
        delta,
        unit: str,
        note: str,
        actor,
        balance_id=None,
        source_table: str = SOURCE_TABLE_MANUAL,
        source_transaction_id=None,
    ) -> UUID:
        """
        Apply a signed quantity change to one product's balance and append
        the matching ledger entry. Returns the ledger entry id.

        Not idempotent: calling twice applies the delta twice.

        Raises ResourceNotFoundError, BusinessRuleViolation,
        InsufficientStockError, LockTimeoutError or PersistenceFailure.
        Nothing is written unless the whole adjustment succeeds.
        """
        product_id = as_uuid(product_id, 'product_id')
        if balance_id is not None:
            balance_id = as_uuid(balance_id, 'balance_id')
        if source_transaction_id is not None:
            source_transaction_id = as_uuid(source_transaction_id, 'source_transaction_id')
        delta = as_quantity(delta, 'delta')
        if delta == 0:
            raise BusinessRuleViolation(detail='delta must be non-zero.')
        if not source_table:
            raise BusinessRuleViolation(detail='source_table is required.')

        try:
            with transaction.atomic():
                entry = AdjustmentService._apply(
                    product_id=product_id,
                    balance_id=balance_id,
                    delta=delta,
                    unit=unit,
                    note=note,
                    actor=actor,
                    source_table=source_table,
                    source_transaction_id=source_transaction_id,
                )
        except OperationalError as exc:
            if _is_lock_timeout(exc):
                logger.warning('Lock wait exceeded on balance for product %s.', product_id)
                raise LockTimeoutError() from exc
            logger.exception('Stock adjustment failed for product %s.', product_id)
            raise PersistenceFailure() from exc
        except DatabaseError as exc:
            logger.exception('Stock adjustment failed for product %s.', product_id)
            raise PersistenceFailure() from exc

        logger.info(
            'Adjusted product %s by %s %s (%s:%s).',
            product_id, delta, entry.unit_of_measure,
            entry.source_table, entry.source_transaction_id,
        )
        return entry.pk

    @staticmethod
    def _apply(
        *,
        product_id: UUID,
        balance_id: UUID | None,
        delta: Decimal,
        unit: str,
        note: str,
        actor,
        source_table: str,
        source_transaction_id: UUID | None,
    ) -> LedgerEntry:
        _bound_lock_wait()

        lookup = {'product_id': product_id}
        if balance_id is not None:
            lookup['pk'] = balance_id
        try:
            balance = StockBalance.objects.select_for_update().get(**lookup)
        except StockBalance.DoesNotExist:
            raise ResourceNotFoundError(detail='Stock record not found for this product.')

        if unit != balance.uom:
            raise BusinessRuleViolation(
                detail=f'Unit mismatch: this product is counted in {balance.uom}.',
            )

        previous = balance.quantity
        candidate = previous + delta
        if candidate > QUANTITY_MAX:
            raise BusinessRuleViolation(
                detail=f'Adjustment would take the balance above {QUANTITY_MAX} {balance.uom}.',
            )
        if candidate < 0:
            logger.info(
                'Rejected adjustment of %s on product %s: only %s available.',
                delta, product_id, previous,
            )
            raise InsufficientStockError(
                detail=f'Insufficient stock. Available: {previous} {balance.uom}, '
                       f'required: {-delta} {balance.uom}.',
            )

        if source_transaction_id is None and source_table == SOURCE_TABLE_MANUAL:
            source_transaction_id = balance.pk

        balance.quantity = candidate
        balance.save(update_fields=['quantity', 'updated_at'])

        entry = LedgerEntry.objects.create(
            product_id=balance.product_id,
            quantity_change=delta,
            unit_of_measure=balance.uom,
            source_table=source_table,
            source_transaction_id=source_transaction_id,
            notes=note or '',
            created_by=actor,
        )

        AuditService.log_stock_movement(
            actor=actor, balance=balance, previous=previous, entry=entry,
        )
        return entry


# ---------------------------------------------------------------------------
# Read side
# ---------------------------------------------------------------------------

def _levels_queryset():
    return StockBalance.objects.select_related('product').annotate(
        below_reorder=Case(
            When(quantity__lte=F('product__reorder_level'), then=Value(True)),
            default=Value(False),
            output_field=BooleanField(),
        ),
    )


def _level_row(balance) -> dict[str, Any]:
    product = balance.product
    return {
        'product_id': product.pk,
        'balance_id': balance.pk,
        'sku': product.sku,
        'name': product.name,
        'product_type': product.product_type,
        'quantity': balance.quantity,
        'unit_of_measure': balance.uom,
        'reorder_level': product.reorder_level,
        'below_reorder': balance.below_reorder,
        'updated_at': balance.updated_at,
    }


class StockQueryService:
    """Lock-free reads. A row may lag at most one in-flight adjustment."""

    @staticmethod
    def list_levels(*, product_type: str | None = None, search: str | None = None) -> list[dict]:
        qs = _levels_queryset()
        if product_type:
            if product_type not in Product.TypeChoices.values:
                raise BusinessRuleViolation(detail=f'Unknown product_type: {product_type}.')
            qs = qs.filter(product__product_type=product_type)
        if search:
            qs = qs.filter(Q(product__name__icontains=search) | Q(product__sku__icontains=search))
        return [_level_row(b) for b in qs.order_by('product__name', 'product__sku')]

    @staticmethod
    def get_level(product_id) -> dict:
        product_id = as_uuid(product_id, 'product_id')
        try:
            balance = _levels_queryset().get(product_id=product_id)
        except StockBalance.DoesNotExist:
            raise ResourceNotFoundError(detail='Stock record not found for this product.')
        return _level_row(balance)

    @staticmethod
    def reorder_alerts() -> list[dict]:
        """Raw materials and master batches at or below their reorder level."""
        qs = _levels_queryset().filter(
            product__product_type__in=REORDER_ALERT_TYPES,
            below_reorder=True,
        ).order_by('quantity', 'product__name')
        return [_level_row(b) for b in qs]

    @staticmethod
    def ledger_for(*, product_id=None, source_table=None, source_transaction_id=None):
        qs = LedgerEntry.objects.select_related('product', 'created_by')
        if product_id is not None:
            qs = qs.filter(product_id=as_uuid(product_id, 'product_id'))
        if source_table:
            qs = qs.filter(source_table=source_table)
        if source_transaction_id is not None:
            qs = qs.filter(
                source_transaction_id=as_uuid(source_transaction_id, 'source_transaction_id'),
            )
        return qs.order_by('-created_at', '-id')


# ---------------------------------------------------------------------------
# Reconciliation
# ---------------------------------------------------------------------------

class ReconciliationService:
    """
    Cross-checks balances against the journal and production runs against
    their legs. Read-only: drift is reported, never auto-corrected.
    """

    @staticmethod
    def verify_balance(product_id) -> dict:
        product_id = as_uuid(product_id, 'product_id')
        try:
            balance = StockBalance.objects.get(product_id=product_id)
        except StockBalance.DoesNotExist:
            raise ResourceNotFoundError(detail='Stock record not found for this product.')

        total = LedgerEntry.objects.filter(product_id=product_id).aggregate(
            total=Sum('quantity_change'),
        )['total'] or Decimal('0')
        drift = balance.quantity - total
        return {
            'product_id': product_id,
            'quantity': balance.quantity,
            'ledger_total': total,
            'drift': drift,
            'consistent': drift == 0,
        }

    @staticmethod
    def find_drift() -> list[dict]:
        totals = dict(
            LedgerEntry.objects.order_by()
            .values('product_id')
            .annotate(total=Sum('quantity_change'))
            .values_list('product_id', 'total'),
        )
        drifted = []
        for balance in StockBalance.objects.order_by('product_id'):
            total = totals.get(balance.product_id) or Decimal('0')
            if balance.quantity != total:
                drifted.append({
                    'product_id': balance.product_id,
                    'quantity': balance.quantity,
                    'ledger_total': total,
                    'drift': balance.quantity - total,
                    'consistent': False,
                })
        if drifted:
            logger.warning('Stock drift detected on %d product(s).', len(drifted))
        return drifted

    @staticmethod
    def verify_production_run(run_id) -> list[dict]:
        """
        Return the applied legs of a run. Raises PartialFailureError when
        any expected leg has no ledger entry.
        """
        from production.models import ProductionRun
        from production.services import ProductionRunCoordinator

        run_id = as_uuid(run_id, 'run_id')
        try:
            run = ProductionRun.objects.get(pk=run_id)
        except ProductionRun.DoesNotExist:
            raise ResourceNotFoundError(detail='Production run not found.')

        entries = {
            entry.product_id: entry
            for entry in LedgerEntry.objects.filter(
                source_table=SOURCE_TABLE_PRODUCTION,
                source_transaction_id=run.pk,
            )
        }

        applied, missing = [], []
        for leg in ProductionRunCoordinator.expected_legs(run):
            entry = entries.get(leg.product_id)
            if entry is None:
                missing.append(leg.name)
                continue
            applied.append({
                'leg': leg.name,
                'product_id': leg.product_id,
                'quantity_change': entry.quantity_change,
                'ledger_id': entry.pk,
            })

        if missing:
            logger.error(
                'Production run %s is partially applied: missing %s.',
                run.pk, ', '.join(missing),
            )
            raise PartialFailureError(
                applied=[leg['leg'] for leg in applied],
                missing=missing,
            )
        return applied
