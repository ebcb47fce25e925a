"""
Users — Django Admin Configuration

Plant staff accounts. Accounts are deactivated, never deleted. Deactivating
from the list goes through save() one row at a time so each change reaches
the audit log.

@file users/admin.py
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ('email', 'full_name', 'role', 'adjusts_stock', 'records_runs', 'is_active')
    list_filter = ('role', 'is_active', 'is_superuser')
    search_fields = ('email', 'first_name', 'last_name')
    readonly_fields = ('id', 'created_at', 'updated_at', 'date_joined', 'last_login')
    ordering = ('email',)
    actions = ('deactivate',)

    fieldsets = (
        (None, {'fields': ('id', 'email', 'password')}),
        (_('Personal info'), {'fields': ('first_name', 'last_name')}),
        (_('Plant role'), {'fields': ('role', 'is_active')}),
        (_('Django admin'), {'fields': ('is_staff', 'is_superuser')}),
        (_('Dates'), {'fields': ('date_joined', 'last_login', 'created_at', 'updated_at')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'role', 'password1', 'password2'),
        }),
    )
    filter_horizontal = ()

    @admin.display(description=_('Name'))
    def full_name(self, obj):
        return obj.get_full_name()

    @admin.display(description=_('Adjusts stock'), boolean=True)
    def adjusts_stock(self, obj):
        return obj.can_adjust_stock

    @admin.display(description=_('Records runs'), boolean=True)
    def records_runs(self, obj):
        return obj.can_record_runs

    @admin.action(description=_('Deactivate selected accounts'))
    def deactivate(self, request, queryset):
        count = 0
        for user in queryset.filter(is_active=True):
            user.is_active = False
            user._current_user = request.user
            user.save(update_fields=['is_active', 'updated_at'])
            count += 1
        self.message_user(request, _('%(count)d account(s) deactivated.') % {'count': count})

    def save_model(self, request, obj, form, change):
        obj._current_user = request.user
        super().save_model(request, obj, form, change)

    def has_delete_permission(self, request, obj=None):
        return False
