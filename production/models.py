"""
Production — Models

A ProductionRun records one shift's output on one machine. Its id is the
source transaction of the one to three ledger entries it mints (finished
good credited, raw material and master batch debited). Runs are created
once by ProductionRunCoordinator and never edited.

@file production/models.py
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.constants import QUANTITY_DECIMAL_PLACES, QUANTITY_MAX_DIGITS
from core.models import InsertOnlyModel


class ProductionRun(InsertOnlyModel):

    class ShiftChoices(models.TextChoices):
        DAY = 'DAY', _('Day')
        NIGHT = 'NIGHT', _('Night')

    id = models.UUIDField(
        primary_key=True, default=uuid.uuid4, editable=False,
    )
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.PROTECT,
        related_name='production_runs',
        verbose_name=_('finished good'),
    )
    machine = models.ForeignKey(
        'catalog.Machine',
        on_delete=models.PROTECT,
        related_name='production_runs',
        verbose_name=_('machine'),
    )
    shift = models.CharField(
        _('shift'), max_length=5,
        choices=ShiftChoices.choices,
    )
    target_quantity = models.PositiveIntegerField(_('target quantity'), default=0)
    actual_pieces_produced = models.PositiveIntegerField(_('actual pieces produced'), default=0)
    waste_quantity = models.PositiveIntegerField(_('waste quantity'), default=0)

    raw_material = models.ForeignKey(
        'catalog.Product',
        null=True, blank=True,
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('raw material'),
    )
    raw_material_bags_used = models.DecimalField(
        _('raw material bags used'),
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
        default=Decimal('0'),
    )
    master_batch = models.ForeignKey(
        'catalog.Product',
        null=True, blank=True,
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('master batch'),
    )
    master_batch_bags_used = models.DecimalField(
        _('master batch bags used'),
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
        default=Decimal('0'),
    )

    started_at = models.DateTimeField(_('started at'), null=True, blank=True)
    completed_at = models.DateTimeField(_('completed at'), null=True, blank=True)
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

    class Meta:
        verbose_name = _('production run')
        verbose_name_plural = _('production runs')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['machine', 'created_at'], name='run_machine_created_idx'),
            models.Index(fields=['product', 'created_at'], name='run_product_created_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(raw_material_bags_used__gte=0)
                & models.Q(master_batch_bags_used__gte=0),
                name='production_run_bags_non_negative',
            ),
            models.CheckConstraint(
                condition=models.Q(started_at__isnull=True)
                | models.Q(completed_at__isnull=True)
                | models.Q(completed_at__gte=models.F('started_at')),
                name='production_run_completed_after_start',
            ),
        ]

    def __str__(self):
        return f'Run {self.pk} — {self.actual_pieces_produced} pcs ({self.shift})'
