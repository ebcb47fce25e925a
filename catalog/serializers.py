"""
Catalog — Serializers

Read and write serializers for Product and Machine.
Explicit field lists; no __all__.

@file catalog/serializers.py
"""

from decimal import Decimal

from rest_framework import serializers

from .models import Machine, Product


# ---------------------------------------------------------------------------
# Product
# ---------------------------------------------------------------------------

class ProductReadSerializer(serializers.ModelSerializer):
    product_type_display = serializers.CharField(source='get_product_type_display', read_only=True)
    quantity_on_hand = serializers.DecimalField(
        source='stock_balance.quantity', max_digits=14, decimal_places=3,
        read_only=True,
    )

    class Meta:
        model = Product
        fields = [
            'id', 'sku', 'name', 'product_type', 'product_type_display',
            'description', 'uom', 'color', 'size',
            'parent_raw_material', 'parent_master_batch',
            'target_production_per_shift', 'machine_type', 'reorder_level',
            'quantity_on_hand', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class ProductWriteSerializer(serializers.ModelSerializer):
    uom = serializers.ChoiceField(choices=Product._meta.get_field('uom').choices, required=False)
    reorder_level = serializers.DecimalField(
        max_digits=14, decimal_places=3, min_value=Decimal('0'), required=False,
    )

    class Meta:
        model = Product
        fields = [
            'sku', 'name', 'product_type', 'description', 'uom',
            'color', 'size', 'parent_raw_material', 'parent_master_batch',
            'target_production_per_shift', 'machine_type', 'reorder_level',
        ]
        extra_kwargs = {
            # Uniqueness is enforced by ProductService as a 409.
            'sku': {'validators': []},
        }


# ---------------------------------------------------------------------------
# Machine
# ---------------------------------------------------------------------------

class MachineReadSerializer(serializers.ModelSerializer):
    process_type_display = serializers.CharField(source='get_process_type_display', read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = Machine
        fields = [
            'id', 'name', 'serial_number',
            'process_type', 'process_type_display',
            'status', 'status_display',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class MachineWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Machine
        fields = ['name', 'serial_number', 'process_type', 'status']
        extra_kwargs = {
            'serial_number': {'validators': []},
        }
