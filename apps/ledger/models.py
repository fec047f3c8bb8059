from django.db import models
from django.db.models import Q
import uuid


class LedgerEntry(models.Model):
    """
    Point balance of one account at one merchant.

    Rows are created lazily on the first credit and only ever mutated
    through ``AccountStore.atomic_update``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    account = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='ledger_entries'
    )
    merchant = models.ForeignKey(
        'merchants.Merchant',
        on_delete=models.PROTECT,
        related_name='ledger_entries'
    )

    # Points not yet redeemed; below the merchant threshold after every credit
    balance = models.PositiveIntegerField(default=0)

    # Lifetime counters (audit)
    total_credited = models.PositiveBigIntegerField(default=0)
    total_rewards = models.PositiveBigIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'ledger_entries'
        ordering = ['-updated_at']
        constraints = [
            models.UniqueConstraint(
                fields=['account', 'merchant'],
                name='unique_ledger_entry_per_account_merchant'
            ),
            models.CheckConstraint(
                condition=Q(balance__lte=models.F('total_credited')),
                name='ledger_balance_not_above_total_credited'
            ),
        ]
        verbose_name_plural = 'Ledger entries'

    def __str__(self):
        return f"{self.account} @ {self.merchant}: {self.balance}"


class RewardRedemption(models.Model):
    """Threshold crossing produced by a single credit."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    entry = models.ForeignKey(
        LedgerEntry,
        on_delete=models.PROTECT,
        related_name='redemptions'
    )
    account = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='reward_redemptions'
    )
    merchant = models.ForeignKey(
        'merchants.Merchant',
        on_delete=models.PROTECT,
        related_name='reward_redemptions'
    )

    rewards_earned = models.PositiveIntegerField()
    balance_before = models.PositiveIntegerField(
        help_text="Balance (including the credited items) that crossed the threshold"
    )
    threshold = models.PositiveIntegerField()

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'reward_redemptions'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['account', 'created_at'], name='redemption_account_idx'),
        ]

    def __str__(self):
        return f"{self.rewards_earned} reward(s) for {self.account} @ {self.merchant}"
