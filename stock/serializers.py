"""
Stock — Serializers

Request shape for manual adjustments and read shapes for stock levels and
the ledger. Nothing here writes a balance or a ledger entry directly.

@file stock/serializers.py
"""

from rest_framework import serializers

from catalog.models import Product, UnitOfMeasure
from core.constants import QUANTITY_DECIMAL_PLACES, QUANTITY_MAX_DIGITS

from .models import LedgerEntry


class StockAdjustSerializer(serializers.Serializer):
    """Body of POST /stock/adjust/."""

    balance_id = serializers.UUIDField(required=False, allow_null=True)
    product_id = serializers.UUIDField()
    delta = serializers.DecimalField(
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
    )
    unit = serializers.ChoiceField(choices=UnitOfMeasure.choices)
    note = serializers.CharField(max_length=1000)

    def validate_delta(self, value):
        if value == 0:
            raise serializers.ValidationError('delta must be non-zero.')
        return value


class StockLevelSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    balance_id = serializers.UUIDField()
    sku = serializers.CharField()
    name = serializers.CharField()
    product_type = serializers.ChoiceField(choices=Product.TypeChoices.choices)
    quantity = serializers.DecimalField(
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
    )
    unit_of_measure = serializers.CharField()
    reorder_level = serializers.DecimalField(
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
    )
    below_reorder = serializers.BooleanField()
    updated_at = serializers.DateTimeField()


class LedgerEntrySerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(read_only=True)
    product_sku = serializers.CharField(source='product.sku', read_only=True)
    created_by = serializers.UUIDField(source='created_by_id', read_only=True)

    class Meta:
        model = LedgerEntry
        fields = [
            'id', 'product_id', 'product_sku', 'quantity_change', 'unit_of_measure',
            'source_table', 'source_transaction_id', 'notes',
            'created_by', 'created_at',
        ]
        read_only_fields = fields


class ReconciliationSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.DecimalField(
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
    )
    ledger_total = serializers.DecimalField(
        max_digits=QUANTITY_MAX_DIGITS + 4, decimal_places=QUANTITY_DECIMAL_PLACES,
    )
    drift = serializers.DecimalField(
        max_digits=QUANTITY_MAX_DIGITS + 4, decimal_places=QUANTITY_DECIMAL_PLACES,
    )
    consistent = serializers.BooleanField()
