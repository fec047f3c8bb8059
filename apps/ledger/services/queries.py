"""Read-only ledger queries."""

from uuid import UUID

from django.db.models import QuerySet

from apps.ledger.models import LedgerEntry, RewardRedemption


def list_account_entries(*, account_id: UUID) -> QuerySet:
    """Ledger entries of an account, most recently updated first."""
    return (
        LedgerEntry.objects
        .filter(account_id=account_id)
        .select_related('merchant')
        .order_by('-updated_at')
    )


def list_account_redemptions(*, account_id: UUID) -> QuerySet:
    """Reward redemptions of an account, newest first."""
    return (
        RewardRedemption.objects
        .filter(account_id=account_id)
        .select_related('merchant')
        .order_by('-created_at')
    )
