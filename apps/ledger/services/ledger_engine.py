"""
Ledger Engine Module
====================

Credits loyalty points to an (account, merchant) ledger entry and resolves
reward threshold crossings before returning.

Classes:
    LedgerEngine: Validates credit requests and applies them atomically.

Example:
    Crediting a scan at the till::

        from apps.ledger.services import LedgerEngine

        result = LedgerEngine().credit(
            account_id=user.id,
            anti_forgery_token=scanned_barcode,
            merchant_id=merchant.id,
            item_count=3,
        )
        print(result.rewards_earned, result.remaining_balance)
"""

import logging
import secrets
from dataclasses import dataclass
from typing import Callable, Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction

from apps.ledger.models import LedgerEntry, RewardRedemption
from apps.ledger.signals import rewards_earned as rewards_earned_signal
from apps.merchants.models import Merchant

from .account_store import AccountStore, LedgerKey, LedgerState
from .exceptions import (
    AccountNotFoundError,
    AuthorizationError,
    InvalidConfigError,
    InvalidCreditRequestError,
    MerchantNotFoundError,
    StoreUnavailableError,
)
from .reward_policy import RewardOutcome, apply_reward_policy

logger = logging.getLogger(__name__)

User = get_user_model()

# Largest item_count accepted in a single credit
MAX_ITEM_COUNT = 1000


@dataclass(frozen=True)
class CreditRequest:
    account_id: UUID
    anti_forgery_token: str
    merchant_id: UUID
    item_count: int


@dataclass(frozen=True)
class CreditResult:
    rewards_earned: int
    remaining_balance: int
    total_credited: int


class LedgerEngine:
    """
    State machine for point accrual and reward redemption.

    A credit is applied in a single database transaction:

        1. Fetch-or-create the ledger entry under its row lock
        2. Add the credited items to the balance
        3. Re-read the merchant threshold and let the reward policy split the
           balance into rewards and remainder
        4. Persist the remainder and lifetime counters
        5. Record a RewardRedemption when at least one reward was earned

    Two concurrent credits on the same (account, merchant) key are applied
    one after the other; credits on different keys do not wait on each other.

    Args:
        store: Storage for ledger entries. Defaults to AccountStore().
        policy: Reward policy function. Defaults to apply_reward_policy.
    """

    def __init__(
        self,
        store: Optional[AccountStore] = None,
        policy: Callable[[int, int], RewardOutcome] = apply_reward_policy
    ):
        self.store = store or AccountStore()
        self.policy = policy

    def credit(
        self,
        *,
        account_id: UUID,
        anti_forgery_token: str,
        merchant_id: UUID,
        item_count: int
    ) -> CreditResult:
        """
        Credit ``item_count`` points to the account at the merchant.

        Args:
            account_id: Account receiving the points
            anti_forgery_token: Token scanned from the account's barcode
            merchant_id: Merchant where the purchase happened
            item_count: Number of items bought (points to add)

        Returns:
            CreditResult with rewards earned and the balance carried over

        Raises:
            InvalidCreditRequestError: If item_count is not a positive integer
            AccountNotFoundError: If the account does not exist or is inactive
            AuthorizationError: If the token does not belong to the account
            MerchantNotFoundError: If the merchant does not exist
            InvalidConfigError: If the merchant's threshold is invalid
            StoreUnavailableError: If the database fails (retryable)
        """
        request = CreditRequest(
            account_id=account_id,
            anti_forgery_token=anti_forgery_token,
            merchant_id=merchant_id,
            item_count=item_count,
        )
        self._validate_item_count(request.item_count)

        try:
            self._authorize(request)
            merchant = self._get_merchant(request.merchant_id)
        except DatabaseError as e:
            raise StoreUnavailableError(f"Credit lookup failed: {e}") from e

        try:
            with transaction.atomic():
                return self._apply(request, merchant)
        except InvalidConfigError as e:
            logger.error("Merchant %s has invalid reward configuration: %s", merchant.id, e)
            raise
        except DatabaseError as e:
            logger.error("Credit failed for account %s", request.account_id, exc_info=True)
            raise StoreUnavailableError(f"Credit failed: {e}") from e

    def balance_for(self, *, account_id: UUID, merchant_id: UUID) -> LedgerState:
        """
        Return the account's current state at a merchant.

        Raises:
            MerchantNotFoundError: If the merchant does not exist
        """
        self._get_merchant(merchant_id)
        return self.store.read(LedgerKey(account_id, merchant_id))

    def _apply(self, request: CreditRequest, merchant: Merchant) -> CreditResult:
        outcome = {}

        def add_points(state: LedgerState) -> LedgerState:
            threshold = self._current_threshold(merchant.id)
            new_balance = state.balance + request.item_count
            reward = self.policy(new_balance, threshold)
            outcome['threshold'] = threshold
            outcome['balance_before'] = new_balance
            outcome['reward'] = reward
            return LedgerState(
                balance=reward.remaining_balance,
                total_credited=state.total_credited + request.item_count,
                total_rewards=state.total_rewards + reward.rewards_earned,
            )

        entry = self.store.atomic_update(
            LedgerKey(request.account_id, merchant.id),
            add_points
        )
        reward = outcome['reward']

        logger.info(
            "Credited %d item(s) to account %s at merchant %s, balance %d",
            request.item_count, request.account_id, merchant.id, entry.balance
        )

        if reward.rewards_earned:
            self._record_redemption(
                entry, merchant, reward,
                balance_before=outcome['balance_before'],
                threshold=outcome['threshold'],
            )

        return CreditResult(
            rewards_earned=reward.rewards_earned,
            remaining_balance=reward.remaining_balance,
            total_credited=entry.total_credited,
        )

    def _record_redemption(
        self,
        entry: LedgerEntry,
        merchant: Merchant,
        reward: RewardOutcome,
        *,
        balance_before: int,
        threshold: int
    ) -> RewardRedemption:
        redemption = RewardRedemption.objects.create(
            entry=entry,
            account_id=entry.account_id,
            merchant=merchant,
            rewards_earned=reward.rewards_earned,
            balance_before=balance_before,
            threshold=threshold,
        )
        logger.info(
            "Account %s earned %d reward(s) at merchant %s",
            entry.account_id, reward.rewards_earned, merchant.id
        )
        transaction.on_commit(
            lambda: rewards_earned_signal.send(
                sender=LedgerEngine,
                redemption=redemption,
            )
        )
        return redemption

    @staticmethod
    def _validate_item_count(item_count) -> None:
        if isinstance(item_count, bool) or not isinstance(item_count, int):
            raise InvalidCreditRequestError("item_count must be an integer")
        if item_count <= 0:
            raise InvalidCreditRequestError("item_count must be greater than zero")
        if item_count > MAX_ITEM_COUNT:
            raise InvalidCreditRequestError(f"item_count must not exceed {MAX_ITEM_COUNT}")

    @staticmethod
    def _authorize(request: CreditRequest) -> None:
        try:
            account = User.objects.only('anti_forgery_token', 'is_active').get(
                id=request.account_id
            )
        except (User.DoesNotExist, ValidationError):
            raise AccountNotFoundError(f"Account {request.account_id} not found")

        if not account.is_active:
            raise AccountNotFoundError(f"Account {request.account_id} not found")

        supplied = request.anti_forgery_token or ''
        if not secrets.compare_digest(
            account.anti_forgery_token.encode(),
            str(supplied).encode()
        ):
            logger.warning("Forged or stale token for account %s", request.account_id)
            raise AuthorizationError("Forged or stale token")

    @staticmethod
    def _get_merchant(merchant_id: UUID) -> Merchant:
        try:
            return Merchant.objects.get(id=merchant_id)
        except (Merchant.DoesNotExist, ValidationError):
            raise MerchantNotFoundError(f"Merchant {merchant_id} not found")

    @staticmethod
    def _current_threshold(merchant_id: UUID) -> int:
        """Threshold as committed when the entry lock is held."""
        try:
            return Merchant.objects.values_list('reward_threshold', flat=True).get(id=merchant_id)
        except Merchant.DoesNotExist:
            raise MerchantNotFoundError(f"Merchant {merchant_id} not found")
