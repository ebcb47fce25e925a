"""
Core — Django Admin Configuration

ReadOnlyAdmin is the base for every admin over an append-only table
(audit log, stock balances, ledger, production runs). The audit log view
shows the before and after quantity of each stock movement inline.

@file core/admin.py
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from core.models import AuditLog


class ReadOnlyAdmin(admin.ModelAdmin):

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(AuditLog)
class AuditLogAdmin(ReadOnlyAdmin):
    list_display = ('timestamp', 'action', 'model_name', 'object_id', 'stock_movement', 'actor')
    list_filter = ('action', 'model_name')
    search_fields = ('object_id', 'actor__email')
    readonly_fields = (
        'id', 'actor', 'action', 'model_name', 'object_id',
        'old_values', 'new_values', 'timestamp',
    )
    date_hierarchy = 'timestamp'
    list_select_related = ('actor',)
    show_full_result_count = False
    list_per_page = 50
    ordering = ('-timestamp',)

    @admin.display(description=_('Quantity'))
    def stock_movement(self, obj):
        if obj.action != AuditLog.ActionChoices.STOCK_ADJUSTMENT:
            return ''
        before = (obj.old_values or {}).get('quantity', '?')
        after = (obj.new_values or {}).get('quantity', '?')
        return f'{before} → {after}'
