"""
Account store service.

Keyed storage for per-(account, merchant) ledger entries. The only write
path is ``atomic_update``: a read-modify-write executed under a row lock,
so that concurrent updates of one key serialize and none is lost, while
updates of distinct keys never touch the same row.
"""

import logging
from dataclasses import dataclass
from typing import Callable
from uuid import UUID

from django.db import DatabaseError, IntegrityError, transaction

from apps.ledger.models import LedgerEntry

from .exceptions import InvalidCreditRequestError, StoreUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerKey:
    account_id: UUID
    merchant_id: UUID


@dataclass(frozen=True)
class LedgerState:
    """Immutable snapshot of a ledger entry's counters."""

    balance: int = 0
    total_credited: int = 0
    total_rewards: int = 0

    @classmethod
    def of(cls, entry: LedgerEntry) -> 'LedgerState':
        return cls(
            balance=entry.balance,
            total_credited=entry.total_credited,
            total_rewards=entry.total_rewards,
        )


class AccountStore:
    """Transactional read-modify-write over ledger entries."""

    def read(self, key: LedgerKey) -> LedgerState:
        """Return the committed state for a key, or the zero state."""
        try:
            entry = LedgerEntry.objects.get(
                account_id=key.account_id,
                merchant_id=key.merchant_id
            )
        except LedgerEntry.DoesNotExist:
            return LedgerState()
        except DatabaseError as e:
            raise StoreUnavailableError(f"Ledger read failed: {e}") from e
        return LedgerState.of(entry)

    def atomic_update(
        self,
        key: LedgerKey,
        fn: Callable[[LedgerState], LedgerState]
    ) -> LedgerEntry:
        """
        Apply ``fn`` to the current state of ``key`` and persist the result.

        The entry is fetched (or created with zero counters) and locked in
        the same transaction that writes the new state. ``fn`` runs exactly
        once; if it raises, nothing is persisted, including a lazily
        created entry.

        Args:
            key: (account_id, merchant_id) of the entry
            fn: Pure transition from the current state to the new state

        Returns:
            The saved LedgerEntry

        Raises:
            StoreUnavailableError: If the database fails
            InvalidCreditRequestError: If ``fn`` returns a state that would
                decrease a lifetime counter or go negative
        """
        try:
            with transaction.atomic():
                entry = self._lock_entry(key)
                current = LedgerState.of(entry)
                new_state = fn(current)
                self._check_transition(current, new_state)

                entry.balance = new_state.balance
                entry.total_credited = new_state.total_credited
                entry.total_rewards = new_state.total_rewards
                entry.save(update_fields=[
                    'balance',
                    'total_credited',
                    'total_rewards',
                    'updated_at',
                ])
                return entry
        except DatabaseError as e:
            logger.error("Ledger update failed for %s", key, exc_info=True)
            raise StoreUnavailableError(f"Ledger update failed: {e}") from e

    def _lock_entry(self, key: LedgerKey) -> LedgerEntry:
        """Fetch-or-create the entry, holding its row lock until commit."""
        lookup = {
            'account_id': key.account_id,
            'merchant_id': key.merchant_id,
        }
        try:
            return LedgerEntry.objects.select_for_update().get(**lookup)
        except LedgerEntry.DoesNotExist:
            pass

        try:
            # Savepoint, so a lost creation race leaves the outer transaction usable
            with transaction.atomic():
                return LedgerEntry.objects.create(**lookup)
        except IntegrityError:
            return LedgerEntry.objects.select_for_update().get(**lookup)

    @staticmethod
    def _check_transition(current: LedgerState, new_state: LedgerState) -> None:
        if new_state.balance < 0:
            raise InvalidCreditRequestError("Balance cannot become negative")
        if (new_state.total_credited < current.total_credited
                or new_state.total_rewards < current.total_rewards):
            raise InvalidCreditRequestError("Lifetime counters cannot decrease")
