"""
Merchant management service.

Administrative create/update of merchants. The reward threshold is
immutable once any ledger entry references the merchant, so balances are
never reinterpreted under a different threshold.
"""

import logging
from typing import List
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet

from apps.ledger.models import LedgerEntry
from apps.merchants.models import Merchant

from .exceptions import MerchantNotFoundError, ThresholdLockedError

logger = logging.getLogger(__name__)


def get_merchant_by_id(*, merchant_id: UUID) -> Merchant:
    """
    Get merchant by ID.

    Raises:
        MerchantNotFoundError: If merchant doesn't exist
    """
    try:
        return Merchant.objects.get(id=merchant_id)
    except (Merchant.DoesNotExist, ValidationError):
        raise MerchantNotFoundError(f"Merchant with ID {merchant_id} not found")


def list_merchants() -> QuerySet:
    return Merchant.objects.all().order_by('name')


def list_participated_merchants(*, account_id: UUID) -> QuerySet:
    """Merchants at which the account has a ledger entry."""
    return (
        Merchant.objects
        .filter(ledger_entries__account_id=account_id)
        .distinct()
        .order_by('name')
    )


@transaction.atomic
def create_merchant(*, name: str, address: str, images: List[str], reward_threshold: int, **fields) -> Merchant:
    """
    Create a merchant.

    Args:
        name: Merchant name
        address: Street address
        images: Image URLs
        reward_threshold: Points required for one reward (>= 1)
        **fields: Optional profile fields (description, phone_number,
            website, locations, opening_hours, is_open, rating)

    Returns:
        Created Merchant instance
    """
    merchant = Merchant.objects.create(
        name=name,
        address=address,
        images=images,
        reward_threshold=reward_threshold,
        **fields
    )
    logger.info("Created merchant %s with reward threshold %d", merchant.id, reward_threshold)
    return merchant


@transaction.atomic
def update_merchant(*, merchant_id: UUID, **fields) -> Merchant:
    """
    Update merchant fields.

    Args:
        merchant_id: UUID of the merchant
        **fields: Validated fields to change

    Returns:
        Updated Merchant instance

    Raises:
        MerchantNotFoundError: If merchant doesn't exist
        ThresholdLockedError: If reward_threshold changes while ledger
            entries reference the merchant
    """
    try:
        merchant = (
            Merchant.objects
            .select_for_update()
            .get(id=merchant_id)
        )
    except (Merchant.DoesNotExist, ValidationError):
        raise MerchantNotFoundError(f"Merchant with ID {merchant_id} not found")

    new_threshold = fields.get('reward_threshold')
    if (
        new_threshold is not None
        and new_threshold != merchant.reward_threshold
        and LedgerEntry.objects.filter(merchant=merchant).exists()
    ):
        raise ThresholdLockedError(
            f"Reward threshold of {merchant.name} is locked: points have already been credited"
        )

    for name, value in fields.items():
        setattr(merchant, name, value)
    merchant.save()

    return merchant
