"""
Production — Django Admin Configuration

Read-only: runs are recorded through ProductionRunCoordinator only.

@file production/admin.py
"""

from django.contrib import admin

from core.admin import ReadOnlyAdmin

from .models import ProductionRun


@admin.register(ProductionRun)
class ProductionRunAdmin(ReadOnlyAdmin):
    list_display = (
        'created_at', 'product', 'machine', 'shift',
        'actual_pieces_produced', 'raw_material_bags_used', 'master_batch_bags_used',
        'created_by',
    )
    list_filter = ('shift', 'machine', 'created_at')
    search_fields = ('product__sku', 'product__name', 'machine__serial_number')
    list_select_related = ('product', 'machine', 'created_by')
    date_hierarchy = 'created_at'
    list_per_page = 50
    ordering = ('-created_at',)
