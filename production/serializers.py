"""
Production — Serializers

@file production/serializers.py
"""

from decimal import Decimal

from rest_framework import serializers

from core.constants import PIECES_MAX, QUANTITY_DECIMAL_PLACES, QUANTITY_MAX_DIGITS

from .models import ProductionRun


class ProductionRunCreateSerializer(serializers.Serializer):
    """Body of POST /production/runs/. Business rules live in the coordinator."""

    product_id = serializers.UUIDField()
    machine_id = serializers.UUIDField()
    shift = serializers.ChoiceField(choices=ProductionRun.ShiftChoices.choices)
    target_quantity = serializers.IntegerField(
        min_value=0, max_value=PIECES_MAX, required=False, default=0,
    )
    actual_pieces_produced = serializers.IntegerField(min_value=0, max_value=PIECES_MAX)
    waste_quantity = serializers.IntegerField(
        min_value=0, max_value=PIECES_MAX, required=False, default=0,
    )
    raw_material_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    raw_material_bags_used = serializers.DecimalField(
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
        min_value=Decimal('0'), required=False, default=Decimal('0'),
    )
    master_batch_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    # Validated by the coordinator only when the product uses a master batch.
    master_batch_bags_used = serializers.DecimalField(
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
        required=False, default=Decimal('0'),
    )
    started_at = serializers.DateTimeField(required=False, allow_null=True, default=None)
    completed_at = serializers.DateTimeField(required=False, allow_null=True, default=None)


class ProductionRunReadSerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(read_only=True)
    product_sku = serializers.CharField(source='product.sku', read_only=True)
    product_name = serializers.CharField(source='product.name', read_only=True)
    machine_id = serializers.UUIDField(read_only=True)
    machine_name = serializers.CharField(source='machine.name', read_only=True)
    raw_material_id = serializers.UUIDField(read_only=True)
    master_batch_id = serializers.UUIDField(read_only=True)
    created_by = serializers.UUIDField(source='created_by_id', read_only=True)

    class Meta:
        model = ProductionRun
        fields = [
            'id', 'product_id', 'product_sku', 'product_name',
            'machine_id', 'machine_name', 'shift',
            'target_quantity', 'actual_pieces_produced', 'waste_quantity',
            'raw_material_id', 'raw_material_bags_used',
            'master_batch_id', 'master_batch_bags_used',
            'started_at', 'completed_at', 'created_by', 'created_at',
        ]
        read_only_fields = fields
