"""
Service layer tests for the ledger engine.

Tests cover:
- Point accrual and reward threshold crossings
- Anti-forgery token authorization
- Rejected requests leave no trace
- Redemption records and the rewards_earned signal
"""

import pytest
from uuid import uuid4
from unittest.mock import patch

from apps.ledger.models import LedgerEntry, RewardRedemption
from apps.ledger.signals import rewards_earned
from apps.merchants.models import Merchant
from apps.ledger.services import (
    AccountNotFoundError,
    AuthorizationError,
    CreditResult,
    InvalidConfigError,
    InvalidCreditRequestError,
    LedgerEngine,
    LedgerState,
    MAX_ITEM_COUNT,
    MerchantNotFoundError,
    NotFoundError,
)


def credit(account, merchant, item_count, token=None):
    return LedgerEngine().credit(
        account_id=account.id,
        anti_forgery_token=account.anti_forgery_token if token is None else token,
        merchant_id=merchant.id,
        item_count=item_count,
    )


@pytest.mark.django_db
class TestCredit:
    """Tests for LedgerEngine.credit()"""

    def test_below_threshold(self, account, merchant):
        result = credit(account, merchant, 7)

        assert result == CreditResult(rewards_earned=0, remaining_balance=7, total_credited=7)
        assert not RewardRedemption.objects.exists()

    def test_crossing_threshold_carries_remainder(self, account, merchant):
        credit(account, merchant, 7)
        result = credit(account, merchant, 5)

        assert result.rewards_earned == 1
        assert result.remaining_balance == 2

        entry = LedgerEntry.objects.get(account=account, merchant=merchant)
        assert entry.balance == 2
        assert entry.total_credited == 12
        assert entry.total_rewards == 1

    def test_multiple_rewards_in_one_credit(self, account, small_merchant):
        result = credit(account, small_merchant, 12)

        assert result.rewards_earned == 2
        assert result.remaining_balance == 2

    def test_exact_threshold(self, account, merchant):
        result = credit(account, merchant, 10)

        assert result.rewards_earned == 1
        assert result.remaining_balance == 0

    def test_largest_item_count_accepted(self, account, merchant):
        result = credit(account, merchant, MAX_ITEM_COUNT)

        assert result.total_credited == MAX_ITEM_COUNT
        assert result.rewards_earned == MAX_ITEM_COUNT // 10

    def test_total_credited_grows_by_item_count(self, account, merchant):
        for count in (3, 9, 1):
            credit(account, merchant, count)

        assert LedgerEntry.objects.get().total_credited == 13

    def test_balances_are_per_merchant(self, account, merchant, small_merchant):
        credit(account, merchant, 4)
        credit(account, small_merchant, 3)

        engine = LedgerEngine()
        assert engine.balance_for(account_id=account.id, merchant_id=merchant.id).balance == 4
        assert engine.balance_for(account_id=account.id, merchant_id=small_merchant.id).balance == 3

    def test_balances_are_per_account(self, account, other_account, merchant):
        credit(account, merchant, 4)
        credit(other_account, merchant, 8)

        assert LedgerEntry.objects.get(account=account).balance == 4
        assert LedgerEntry.objects.get(account=other_account).balance == 8


@pytest.mark.django_db
class TestCreditRejected:
    """Rejected credits must not change any state."""

    def test_forged_token(self, account, merchant):
        credit(account, merchant, 3)

        with pytest.raises(AuthorizationError):
            credit(account, merchant, 5, token='0' * 32)

        assert LedgerEntry.objects.get().balance == 3

    def test_token_of_other_account(self, account, other_account, merchant):
        with pytest.raises(AuthorizationError):
            credit(account, merchant, 5, token=other_account.anti_forgery_token)

        assert not LedgerEntry.objects.exists()

    def test_empty_token(self, account, merchant):
        with pytest.raises(AuthorizationError):
            credit(account, merchant, 1, token='')

    def test_unknown_merchant(self, account):
        with pytest.raises(NotFoundError):
            LedgerEngine().credit(
                account_id=account.id,
                anti_forgery_token=account.anti_forgery_token,
                merchant_id=uuid4(),
                item_count=3,
            )

        assert not LedgerEntry.objects.exists()
        assert not RewardRedemption.objects.exists()

    def test_unknown_account(self, merchant):
        with pytest.raises(AccountNotFoundError):
            LedgerEngine().credit(
                account_id=uuid4(),
                anti_forgery_token='a' * 32,
                merchant_id=merchant.id,
                item_count=3,
            )

    def test_inactive_account(self, account, merchant):
        account.is_active = False
        account.save()

        with pytest.raises(AccountNotFoundError):
            credit(account, merchant, 3)

    @pytest.mark.parametrize('item_count', [0, -2, 1.5, '3', True, MAX_ITEM_COUNT + 1, 2**31, 2**63])
    def test_invalid_item_count(self, account, merchant, item_count):
        with pytest.raises(InvalidCreditRequestError):
            credit(account, merchant, item_count)

        assert not LedgerEntry.objects.exists()

    def test_invalid_threshold(self, account, merchant):
        """A misconfigured merchant fails without touching the ledger."""
        with patch.object(LedgerEngine, '_current_threshold', return_value=0):
            with pytest.raises(InvalidConfigError):
                credit(account, merchant, 3)

        assert not LedgerEntry.objects.exists()


@pytest.mark.django_db
class TestThresholdChanges:
    """The threshold applied is the one committed when the entry is locked."""

    def test_threshold_read_inside_credit_transaction(self, account, merchant):
        stale = Merchant.objects.get(id=merchant.id)
        Merchant.objects.filter(id=merchant.id).update(reward_threshold=5)

        with patch.object(LedgerEngine, '_get_merchant', return_value=stale):
            result = credit(account, merchant, 6)

        assert stale.reward_threshold == 10
        assert result.rewards_earned == 1
        assert result.remaining_balance == 1
        assert RewardRedemption.objects.get().threshold == 5

    def test_balance_stays_below_threshold_after_change(self, account, merchant):
        """A threshold lowered before the first credit applies to that credit."""
        stale = Merchant.objects.get(id=merchant.id)
        Merchant.objects.filter(id=merchant.id).update(reward_threshold=3)

        with patch.object(LedgerEngine, '_get_merchant', return_value=stale):
            credit(account, merchant, 8)

        entry = LedgerEntry.objects.get()
        assert entry.balance == 2
        assert entry.balance < 3


@pytest.mark.django_db
class TestRedemption:
    """Tests for reward redemption records."""

    def test_redemption_recorded(self, account, merchant):
        credit(account, merchant, 25)

        redemption = RewardRedemption.objects.get()
        assert redemption.account_id == account.id
        assert redemption.merchant_id == merchant.id
        assert redemption.rewards_earned == 2
        assert redemption.balance_before == 25
        assert redemption.threshold == 10
        assert redemption.entry == LedgerEntry.objects.get()

    def test_signal_sent_after_commit(self, account, merchant, django_capture_on_commit_callbacks):
        received = []

        def receiver(sender, redemption, **kwargs):
            received.append(redemption)

        rewards_earned.connect(receiver)
        try:
            with django_capture_on_commit_callbacks(execute=True) as callbacks:
                credit(account, merchant, 11)
        finally:
            rewards_earned.disconnect(receiver)

        assert len(callbacks) == 1
        assert [r.rewards_earned for r in received] == [1]

    def test_no_signal_below_threshold(self, account, merchant, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks() as callbacks:
            credit(account, merchant, 9)

        assert callbacks == []


@pytest.mark.django_db
class TestBalanceFor:
    """Tests for LedgerEngine.balance_for()"""

    def test_zero_before_first_credit(self, account, merchant):
        state = LedgerEngine().balance_for(account_id=account.id, merchant_id=merchant.id)

        assert state == LedgerState()

    def test_after_credit(self, account, merchant):
        credit(account, merchant, 13)

        state = LedgerEngine().balance_for(account_id=account.id, merchant_id=merchant.id)

        assert state == LedgerState(balance=3, total_credited=13, total_rewards=1)

    def test_unknown_merchant(self, account):
        with pytest.raises(MerchantNotFoundError):
            LedgerEngine().balance_for(account_id=account.id, merchant_id=uuid4())
