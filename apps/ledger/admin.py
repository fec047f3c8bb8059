from django.contrib import admin
from .models import LedgerEntry, RewardRedemption


class RewardRedemptionInline(admin.TabularInline):
    """Read-only redemptions within a ledger entry."""
    model = RewardRedemption
    extra = 0
    fields = ['rewards_earned', 'balance_before', 'threshold', 'created_at']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(LedgerEntry)
class LedgerEntryAdmin(admin.ModelAdmin):
    """
    Read-only view of ledger entries.

    Balances change only through credits, never by hand.
    """

    list_display = ['account', 'merchant', 'balance', 'total_credited', 'total_rewards', 'updated_at']
    list_filter = ['merchant']
    search_fields = ['account__email', 'account__external_uid', 'merchant__name']
    list_select_related = ['account', 'merchant']
    inlines = [RewardRedemptionInline]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(RewardRedemption)
class RewardRedemptionAdmin(admin.ModelAdmin):
    list_display = ['account', 'merchant', 'rewards_earned', 'threshold', 'created_at']
    list_filter = ['merchant', 'created_at']
    date_hierarchy = 'created_at'
    list_select_related = ['account', 'merchant']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
