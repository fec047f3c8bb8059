"""Services for merchants business logic."""

from .exceptions import (
    MerchantsServiceError,
    MerchantNotFoundError,
    ThresholdLockedError,
)
from .merchant_management import (
    create_merchant,
    update_merchant,
    get_merchant_by_id,
    list_merchants,
    list_participated_merchants,
)

__all__ = [
    # Exceptions
    'MerchantsServiceError',
    'MerchantNotFoundError',
    'ThresholdLockedError',
    # Services
    'create_merchant',
    'update_merchant',
    'get_merchant_by_id',
    'list_merchants',
    'list_participated_merchants',
]
