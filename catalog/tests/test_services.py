"""
Tests — ProductService and MachineService: provisioning, allow-lists,
unit-of-measure guard.

@file catalog/tests/test_services.py
"""

from decimal import Decimal

import pytest

from catalog.models import Machine, Product
from catalog.services import MachineService, ProductService
from core.exceptions import BusinessRuleViolation, DuplicateResourceError, ResourceNotFoundError
from core.models import AuditLog
from stock.models import LedgerEntry, StockBalance
from tests.factories import (
    AdminUserFactory,
    FinishedGoodFactory,
    MachineFactory,
    MasterBatchFactory,
    RawMaterialFactory,
    stock_up,
)


pytestmark = pytest.mark.django_db


class TestCreateProduct:

    def test_provisions_balance_at_zero(self):
        admin = AdminUserFactory()
        product = ProductService.create_product(
            actor=admin,
            sku='RM-HDPE',
            name='HDPE Resin',
            product_type=Product.TypeChoices.RAW_MATERIAL,
        )
        balance = StockBalance.objects.get(product=product)
        assert balance.quantity == 0
        assert balance.uom == 'bags'
        assert product.uom == 'bags'
        assert not LedgerEntry.objects.filter(product=product).exists()
        assert AuditLog.objects.filter(model_name='Product', object_id=str(product.pk)).exists()

    def test_finished_good_with_dependencies(self):
        raw = RawMaterialFactory()
        mb = MasterBatchFactory()
        product = ProductService.create_product(
            sku='FG-CAN', name='5L Can',
            product_type=Product.TypeChoices.FINISHED_GOOD,
            parent_raw_material=raw, parent_master_batch=mb,
        )
        assert product.uom == 'pcs'
        assert product.uses_master_batch

    def test_wrong_uom_rejected(self):
        with pytest.raises(BusinessRuleViolation):
            ProductService.create_product(
                sku='FG-BAD', name='Bad', product_type=Product.TypeChoices.FINISHED_GOOD, uom='bags',
            )
        assert not Product.objects.filter(sku='FG-BAD').exists()

    def test_duplicate_sku(self):
        RawMaterialFactory(sku='RM-1')
        with pytest.raises(DuplicateResourceError):
            ProductService.create_product(
                sku='RM-1', name='Again', product_type=Product.TypeChoices.RAW_MATERIAL,
            )

    def test_unknown_field_rejected(self):
        with pytest.raises(BusinessRuleViolation):
            ProductService.create_product(
                sku='RM-2', name='Resin', product_type=Product.TypeChoices.RAW_MATERIAL,
                quantity=Decimal('50'),
            )
        assert not Product.objects.filter(sku='RM-2').exists()


class TestUpdateProduct:

    def test_updates_allowed_fields(self):
        product = RawMaterialFactory()
        updated = ProductService.update_product(
            product_id=product.pk, name='Renamed', reorder_level=Decimal('20'),
        )
        assert updated.name == 'Renamed'
        assert updated.reorder_level == Decimal('20')

    def test_unknown_field_rejected_before_write(self):
        product = RawMaterialFactory(name='Original')
        with pytest.raises(BusinessRuleViolation):
            ProductService.update_product(product_id=product.pk, name='Changed', id='x')
        product.refresh_from_db()
        assert product.name == 'Original'

    def test_empty_update_rejected(self):
        product = RawMaterialFactory()
        with pytest.raises(BusinessRuleViolation):
            ProductService.update_product(product_id=product.pk)

    def test_empty_text_normalised_to_null(self):
        product = RawMaterialFactory(color='Blue')
        updated = ProductService.update_product(product_id=product.pk, color='')
        assert updated.color is None

    def test_not_found(self):
        with pytest.raises(ResourceNotFoundError):
            ProductService.update_product(
                product_id='00000000-0000-0000-0000-000000000000', name='x',
            )

    def test_type_change_syncs_empty_balance(self):
        product = RawMaterialFactory()
        ProductService.update_product(
            product_id=product.pk,
            product_type=Product.TypeChoices.FINISHED_GOOD,
            uom='pcs',
        )
        assert StockBalance.objects.get(product=product).uom == 'pcs'

    def test_uom_change_blocked_while_holding_stock(self):
        product = RawMaterialFactory()
        stock_up(product, 10)
        with pytest.raises(BusinessRuleViolation):
            ProductService.update_product(
                product_id=product.pk,
                product_type=Product.TypeChoices.FINISHED_GOOD,
                uom='pcs',
            )
        product.refresh_from_db()
        assert product.product_type == Product.TypeChoices.RAW_MATERIAL

    def test_duplicate_sku_on_update(self):
        RawMaterialFactory(sku='RM-TAKEN')
        product = FinishedGoodFactory()
        with pytest.raises(DuplicateResourceError):
            ProductService.update_product(product_id=product.pk, sku='RM-TAKEN')


class TestMachineService:

    def test_create_trims_name(self):
        machine = MachineService.create_machine(
            name='  Extruder 1 ', serial_number=' EX-001 ',
            process_type=Machine.ProcessTypeChoices.EXTRUSION,
        )
        assert machine.name == 'Extruder 1'
        assert machine.serial_number == 'EX-001'
        assert machine.status == Machine.StatusChoices.ACTIVE

    def test_blank_name_rejected(self):
        with pytest.raises(BusinessRuleViolation):
            MachineService.create_machine(
                name='   ', serial_number='EX-002',
                process_type=Machine.ProcessTypeChoices.EXTRUSION,
            )

    def test_duplicate_serial(self):
        MachineFactory(serial_number='EX-003')
        with pytest.raises(DuplicateResourceError):
            MachineService.create_machine(
                name='Other', serial_number='EX-003',
                process_type=Machine.ProcessTypeChoices.EXTRUSION,
            )

    def test_status_change(self):
        machine = MachineFactory()
        updated = MachineService.update_machine(
            machine_id=machine.pk, status=Machine.StatusChoices.MAINTENANCE,
        )
        assert updated.is_operable is False

    def test_unknown_field_rejected(self):
        machine = MachineFactory()
        with pytest.raises(BusinessRuleViolation):
            MachineService.update_machine(machine_id=machine.pk, hours_run=10)

    def test_invalid_status_rejected(self):
        machine = MachineFactory()
        with pytest.raises(BusinessRuleViolation):
            MachineService.update_machine(machine_id=machine.pk, status='BROKEN')
