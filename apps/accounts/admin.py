from django import forms
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User


def badge(label, background, color='white'):
    return format_html(
        '<span style="background: {}; color: {}; padding: 3px 8px; '
        'border-radius: 10px; font-size: 11px;">{}</span>',
        background, color, label
    )


class AccountCreationForm(forms.ModelForm):
    """Manual provisioning form; credentials stay with the identity provider."""

    class Meta:
        model = User
        fields = ('external_uid', 'email', 'display_name')

    def save(self, commit=True):
        user = super().save(commit=False)
        user.set_unusable_password()
        if commit:
            user.save()
        return user


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for loyalty accounts.

    Accounts are provisioned by the identity gate, so there is no add form
    with passwords. Deletion is replaced by GDPR anonymization to keep the
    ledger history.
    """

    add_form = AccountCreationForm

    list_display = [
        'external_uid',
        'email',
        'display_name',
        'membership_level',
        'is_active_badge',
        'is_staff_badge',
        'created_at',
        'last_visit',
    ]

    list_filter = [
        'is_active',
        'is_staff',
        'is_member',
        'membership_level',
        'created_at',
    ]

    search_fields = [
        'external_uid',
        'email',
        'display_name',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Identity', {
            'fields': ('external_uid', 'anti_forgery_token')
        }),
        ('Profile', {
            'fields': ('email', 'display_name', 'phone', 'membership_level', 'is_member')
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_visit', 'last_login'),
            'classes': ('collapse',),
        }),
        ('GDPR', {
            'fields': ('gdpr_deleted_at',),
            'classes': ('collapse',),
            'description': 'GDPR compliance fields. Use anonymize action for data deletion requests.',
        }),
    )

    add_fieldsets = (
        ('Create Account', {
            'classes': ('wide',),
            'fields': ('external_uid', 'email', 'display_name'),
        }),
    )

    readonly_fields = [
        'anti_forgery_token',
        'created_at',
        'last_visit',
        'last_login',
        'gdpr_deleted_at',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    def is_active_badge(self, obj):
        """Display active status as colored badge."""
        if obj.is_active:
            return badge('Active', '#6B8E5E')
        return badge('Inactive', '#B85C5C')
    is_active_badge.short_description = 'Status'
    is_active_badge.admin_order_field = 'is_active'

    def is_staff_badge(self, obj):
        """Display staff status as colored badge."""
        if obj.is_staff:
            return badge('Staff', '#A47449')
        return badge('User', '#ccc', '#666')
    is_staff_badge.short_description = 'Role'
    is_staff_badge.admin_order_field = 'is_staff'

    actions = [
        'activate_users',
        'deactivate_users',
        'anonymize_users',
    ]

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.action(description='Activate selected accounts')
    def activate_users(self, request, queryset):
        count = queryset.update(is_active=True)
        self.message_user(request, f'Activated {count} account(s).')

    @admin.action(description='Deactivate selected accounts')
    def deactivate_users(self, request, queryset):
        """Deactivate selected accounts (excludes superusers for safety)."""
        safe_queryset = queryset.filter(is_superuser=False)
        count = safe_queryset.update(is_active=False)
        skipped = queryset.count() - count
        msg = f'Deactivated {count} account(s).'
        if skipped:
            msg += f' Skipped {skipped} superuser(s) for safety.'
        self.message_user(request, msg)

    @admin.action(description='GDPR: Anonymize selected accounts (IRREVERSIBLE)')
    def anonymize_users(self, request, queryset):
        """
        GDPR-compliant anonymization of selected accounts.

        Personal data is cleared and the account deactivated; balances and
        reward history stay in the ledger.
        """
        safe_queryset = queryset.filter(is_superuser=False, is_staff=False)
        count = 0
        for user in safe_queryset:
            user.anonymize()
            count += 1

        skipped = queryset.count() - count
        msg = f'Anonymized {count} account(s).'
        if skipped:
            msg += f' Skipped {skipped} staff/superuser(s) for safety.'
        self.message_user(request, msg)
