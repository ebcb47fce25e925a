"""
Stock — Models

Balance-plus-journal stock tracking. StockBalance caches the on-hand
quantity of one product and is the unit of row locking; LedgerEntry is the
append-only journal whose sum must always equal the balance.

Both tables are written only by stock.services.AdjustmentService.
LedgerEntry rows are INSERT ONLY — never update or delete. StockBalance
rows are saved one at a time under a row lock; queryset update and delete
are refused.

@file stock/models.py
"""

import uuid

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from catalog.models import UnitOfMeasure
from core.constants import QUANTITY_DECIMAL_PLACES, QUANTITY_MAX_DIGITS
from core.models import InsertOnlyModel


class StockBalanceQuerySet(models.QuerySet):
    """Bulk writes would move a balance without a matching ledger entry."""

    def update(self, **kwargs):
        raise NotImplementedError(
            'StockBalance quantities change only through AdjustmentService.',
        )

    def delete(self):
        raise NotImplementedError('StockBalance records cannot be deleted.')


class StockBalance(models.Model):
    """
    Current on-hand quantity for one product.

    Provisioned with quantity 0 together with its product; never deleted.
    """

    id = models.UUIDField(
        primary_key=True, default=uuid.uuid4, editable=False,
    )
    product = models.OneToOneField(
        'catalog.Product',
        on_delete=models.PROTECT,
        related_name='stock_balance',
        verbose_name=_('product'),
    )
    quantity = models.DecimalField(
        _('quantity'),
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
        default=0,
    )
    uom = models.CharField(
        _('unit of measure'), max_length=8,
        choices=UnitOfMeasure.choices,
    )
    created_at = models.DateTimeField(_('created at'), auto_now_add=True)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    objects = StockBalanceQuerySet.as_manager()

    class Meta:
        verbose_name = _('stock balance')
        verbose_name_plural = _('stock balances')
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=0),
                name='stock_balance_non_negative',
            ),
        ]

    def __str__(self):
        return f'{self.product_id}: {self.quantity} {self.uom}'

    def delete(self, *args, **kwargs):
        raise NotImplementedError('StockBalance records cannot be deleted.')


class LedgerEntry(InsertOnlyModel):
    """
    A single immutable signed quantity change against one product.

    source_table + source_transaction_id identify the business event:
    a manual adjustment (products_stock, balance id) or a production run
    (production_runs, run id). All legs of one run share that identity.
    """

    id = models.UUIDField(
        primary_key=True, default=uuid.uuid4, editable=False,
    )
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.PROTECT,
        related_name='ledger_entries',
        verbose_name=_('product'),
    )
    quantity_change = models.DecimalField(
        _('quantity change'),
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
    )
    unit_of_measure = models.CharField(
        _('unit of measure'), max_length=8,
        choices=UnitOfMeasure.choices,
    )
    source_table = models.CharField(
        _('source table'), max_length=64,
        help_text=_('Name of the table that initiated this change'),
    )
    source_transaction_id = models.UUIDField(
        _('source transaction ID'), null=True, blank=True,
        help_text=_('ID of the record in source_table'),
    )
    notes = models.TextField(_('notes'), blank=True, default='')
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('created by'),
    )
    created_at = models.DateTimeField(
        _('created at'), auto_now_add=True, db_index=True,
    )
    # No updated_at: immutable record.

    class Meta:
        verbose_name = _('ledger entry')
        verbose_name_plural = _('ledger entries')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['product', 'created_at'], name='ledger_product_created_idx'),
            models.Index(fields=['source_table', 'source_transaction_id'], name='ledger_source_idx'),
        ]

    def __str__(self):
        return f'{self.quantity_change:+} {self.unit_of_measure} product={self.product_id}'
