from django.contrib import admin
from .models import Merchant


@admin.register(Merchant)
class MerchantAdmin(admin.ModelAdmin):
    """Admin interface for merchants."""

    list_display = ['name', 'address', 'reward_threshold', 'is_open', 'rating', 'created_at']
    list_filter = ['is_open', 'created_at']
    search_fields = ['name', 'address']
    ordering = ['name']
    readonly_fields = ['created_at', 'updated_at']

    def get_readonly_fields(self, request, obj=None):
        """Lock the threshold once points were credited."""
        readonly = list(super().get_readonly_fields(request, obj))
        if obj is not None and obj.has_ledger_entries:
            readonly.append('reward_threshold')
        return readonly
