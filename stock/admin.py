"""
Stock — Django Admin Configuration

Read-only views of balances and the ledger. Stock only changes through
AdjustmentService, so nothing here can add, edit or delete.

@file stock/admin.py
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from core.admin import ReadOnlyAdmin

from .models import LedgerEntry, StockBalance


@admin.register(StockBalance)
class StockBalanceAdmin(ReadOnlyAdmin):
    list_display = ('product', 'quantity', 'uom', 'updated_at')
    list_filter = ('uom', 'product__product_type')
    search_fields = ('product__sku', 'product__name')
    readonly_fields = ('id', 'product', 'quantity', 'uom', 'created_at', 'updated_at')
    list_select_related = ('product',)
    ordering = ('product__name',)


@admin.register(LedgerEntry)
class LedgerEntryAdmin(ReadOnlyAdmin):
    list_display = (
        'created_at', 'product', 'quantity_change', 'unit_of_measure',
        'source_table', 'source_transaction_id', 'created_by',
    )
    list_filter = ('source_table', 'unit_of_measure', 'created_at')
    search_fields = ('product__sku', 'notes')
    readonly_fields = (
        'id', 'product', 'quantity_change', 'unit_of_measure',
        'source_table', 'source_transaction_id', 'notes',
        'created_by', 'created_at',
    )
    list_select_related = ('product', 'created_by')
    show_full_result_count = False
    list_per_page = 50
    date_hierarchy = 'created_at'
    ordering = ('-created_at',)

    fieldsets = (
        (_('Change'), {
            'fields': ('id', 'product', 'quantity_change', 'unit_of_measure', 'notes'),
        }),
        (_('Source'), {
            'fields': ('source_table', 'source_transaction_id'),
        }),
        (_('Audit'), {
            'fields': ('created_by', 'created_at'),
        }),
    )
