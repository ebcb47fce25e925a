"""
Catalog — Models

Reference data the inventory ledger validates against: every stocked
Product (raw material, finished good, master batch, regrind) and every
production Machine on the floor.

@file catalog/models.py
"""

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.constants import QUANTITY_DECIMAL_PLACES, QUANTITY_MAX_DIGITS
from core.models import BaseModel


class UnitOfMeasure(models.TextChoices):
    PCS = 'pcs', _('Pieces')
    BAGS = 'bags', _('Bags')


class Product(BaseModel):
    """
    A stocked item. Finished goods are counted in pieces, everything else
    in bags.

    A finished good may declare a default raw material and a master batch
    it consumes; a finished good without a master batch ignores any
    master-batch quantity reported on its production runs.
    """

    class TypeChoices(models.TextChoices):
        RAW_MATERIAL = 'RAW_MATERIAL', _('Raw material')
        FINISHED_GOOD = 'FINISHED_GOOD', _('Finished good')
        MASTER_BATCH = 'MASTER_BATCH', _('Master batch')
        REGRIND_MATERIAL = 'REGRIND_MATERIAL', _('Regrind material')

    sku = models.CharField(_('SKU'), max_length=64, unique=True)
    name = models.CharField(_('name'), max_length=255)
    product_type = models.CharField(
        _('type'), max_length=20,
        choices=TypeChoices.choices, db_index=True,
    )
    description = models.TextField(_('description'), null=True, blank=True)
    uom = models.CharField(
        _('unit of measure'), max_length=8,
        choices=UnitOfMeasure.choices,
    )
    color = models.CharField(_('color'), max_length=64, null=True, blank=True)
    size = models.CharField(_('size'), max_length=64, null=True, blank=True)
    parent_raw_material = models.ForeignKey(
        'self',
        null=True, blank=True,
        on_delete=models.PROTECT,
        related_name='finished_goods_using_raw_material',
        verbose_name=_('default raw material'),
    )
    parent_master_batch = models.ForeignKey(
        'self',
        null=True, blank=True,
        on_delete=models.PROTECT,
        related_name='finished_goods_using_master_batch',
        verbose_name=_('master batch'),
    )
    target_production_per_shift = models.PositiveIntegerField(
        _('target production per shift'), null=True, blank=True,
    )
    machine_type = models.CharField(_('machine type'), max_length=64, null=True, blank=True)
    reorder_level = models.DecimalField(
        _('reorder level'),
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
        default=Decimal('0'),
        validators=[MinValueValidator(Decimal('0'))],
        help_text=_('Stock at or below this level raises a reorder alert'),
    )

    class Meta:
        verbose_name = _('product')
        verbose_name_plural = _('products')
        ordering = ['name']
        indexes = [
            models.Index(fields=['product_type', 'name'], name='product_type_name_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(product_type='FINISHED_GOOD', uom='pcs')
                    | models.Q(
                        product_type__in=['RAW_MATERIAL', 'MASTER_BATCH', 'REGRIND_MATERIAL'],
                        uom='bags',
                    )
                ),
                name='product_uom_matches_type',
            ),
            models.CheckConstraint(
                condition=models.Q(reorder_level__gte=0),
                name='product_reorder_level_non_negative',
            ),
        ]

    def __str__(self):
        return f'{self.sku} — {self.name}'

    @staticmethod
    def expected_uom(product_type: str) -> str:
        if product_type == Product.TypeChoices.FINISHED_GOOD:
            return UnitOfMeasure.PCS
        return UnitOfMeasure.BAGS

    @property
    def is_finished_good(self) -> bool:
        return self.product_type == self.TypeChoices.FINISHED_GOOD

    @property
    def uses_master_batch(self) -> bool:
        return self.parent_master_batch_id is not None

    def clean(self):
        super().clean()
        if self.product_type and self.uom and self.uom != self.expected_uom(self.product_type):
            raise ValidationError({
                'uom': _('Finished goods are counted in pcs; all other products in bags.'),
            })
        if self.parent_raw_material_id or self.parent_master_batch_id:
            if not self.is_finished_good:
                raise ValidationError({
                    'product_type': _('Only finished goods may declare material dependencies.'),
                })
        if self.parent_raw_material is not None and self.parent_raw_material.product_type not in (
            self.TypeChoices.RAW_MATERIAL, self.TypeChoices.REGRIND_MATERIAL,
        ):
            raise ValidationError({
                'parent_raw_material': _('Must reference a raw or regrind material.'),
            })
        if self.parent_master_batch is not None and (
            self.parent_master_batch.product_type != self.TypeChoices.MASTER_BATCH
        ):
            raise ValidationError({
                'parent_master_batch': _('Must reference a master batch.'),
            })


class Machine(BaseModel):
    """A production machine. Only ACTIVE machines may log production runs."""

    class ProcessTypeChoices(models.TextChoices):
        BLOW_MOULDING = 'BLOW_MOULDING', _('Blow moulding')
        INJECTION_MOULDING = 'INJECTION_MOULDING', _('Injection moulding')
        EXTRUSION = 'EXTRUSION', _('Extrusion')
        THERMOFORMING = 'THERMOFORMING', _('Thermoforming')

    class StatusChoices(models.TextChoices):
        ACTIVE = 'ACTIVE', _('Active')
        MAINTENANCE = 'MAINTENANCE', _('Maintenance')
        RETIRED = 'RETIRED', _('Retired')

    name = models.CharField(_('name'), max_length=255)
    serial_number = models.CharField(_('serial number'), max_length=100, unique=True)
    process_type = models.CharField(
        _('process type'), max_length=20,
        choices=ProcessTypeChoices.choices,
    )
    status = models.CharField(
        _('status'), max_length=12,
        choices=StatusChoices.choices,
        default=StatusChoices.ACTIVE,
        db_index=True,
    )

    class Meta:
        verbose_name = _('machine')
        verbose_name_plural = _('machines')
        ordering = ['name']

    def __str__(self):
        return f'{self.name} ({self.serial_number})'

    @property
    def is_operable(self) -> bool:
        return self.status == self.StatusChoices.ACTIVE
