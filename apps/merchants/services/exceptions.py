"""Domain-specific exceptions for merchants services."""

from apps.ledger.services.exceptions import MerchantNotFoundError


class MerchantsServiceError(Exception):
    """Base exception for merchants services."""
    pass


class ThresholdLockedError(MerchantsServiceError):
    """Raised when changing the reward threshold of a merchant with ledger entries."""
    pass


__all__ = [
    'MerchantsServiceError',
    'MerchantNotFoundError',
    'ThresholdLockedError',
]
