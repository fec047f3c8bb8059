"""
Ledger app services layer.

Services contain the point accrual state machine and its storage contract.
All state-changing operations run inside a transaction under a row lock.
"""

from .exceptions import (
    LedgerServiceError,
    InvalidCreditRequestError,
    AuthorizationError,
    NotFoundError,
    AccountNotFoundError,
    MerchantNotFoundError,
    InvalidConfigError,
    StoreUnavailableError,
)
from .reward_policy import RewardOutcome, apply_reward_policy
from .account_store import AccountStore, LedgerKey, LedgerState
from .ledger_engine import MAX_ITEM_COUNT, CreditRequest, CreditResult, LedgerEngine
from .queries import list_account_entries, list_account_redemptions

__all__ = [
    # Exceptions
    'LedgerServiceError',
    'InvalidCreditRequestError',
    'AuthorizationError',
    'NotFoundError',
    'AccountNotFoundError',
    'MerchantNotFoundError',
    'InvalidConfigError',
    'StoreUnavailableError',

    # Reward policy
    'RewardOutcome',
    'apply_reward_policy',

    # Storage
    'AccountStore',
    'LedgerKey',
    'LedgerState',

    # Engine
    'MAX_ITEM_COUNT',
    'CreditRequest',
    'CreditResult',
    'LedgerEngine',

    # Queries
    'list_account_entries',
    'list_account_redemptions',
]
