"""
Catalog — Django Admin Configuration

Product edits in the admin bypass the service allow-list, so the admin is
read-only for products; machines may be edited directly.

@file catalog/admin.py
"""

from django.contrib import admin

from core.admin import ReadOnlyAdmin

from .models import Machine, Product


@admin.register(Product)
class ProductAdmin(ReadOnlyAdmin):
    list_display = ('sku', 'name', 'product_type', 'uom', 'reorder_level', 'created_at')
    list_filter = ('product_type', 'uom')
    search_fields = ('sku', 'name')
    list_select_related = ('parent_raw_material', 'parent_master_batch')
    list_per_page = 50
    ordering = ('name',)


@admin.register(Machine)
class MachineAdmin(admin.ModelAdmin):
    list_display = ('name', 'serial_number', 'process_type', 'status', 'created_at')
    list_filter = ('process_type', 'status')
    search_fields = ('name', 'serial_number')
    readonly_fields = ('id', 'created_at', 'updated_at', 'created_by', 'updated_by')
    ordering = ('name',)

    def has_delete_permission(self, request, obj=None):
        return False
