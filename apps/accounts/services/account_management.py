"""Account management service."""

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone
from uuid import UUID

from .exceptions import UserNotFoundError

User = get_user_model()


def _lock_user(user_id: UUID) -> User:
    try:
        return (
            User.objects
            .select_for_update()
            .get(id=user_id)
        )
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")


@transaction.atomic
def update_user_profile(*, user_id: UUID, **fields) -> User:
    """
    Update profile fields of an account and record the visit.

    Args:
        user_id: User's ID
        **fields: Validated profile fields (display_name, email, phone,
            membership_level, is_member)

    Returns:
        Updated User instance

    Raises:
        UserNotFoundError: If user does not exist
    """
    user = _lock_user(user_id)

    for name, value in fields.items():
        setattr(user, name, value)
    user.last_visit = timezone.now()
    user.save(update_fields=[*fields.keys(), 'last_visit'])

    return user


@transaction.atomic
def delete_user_account(*, user_id: UUID) -> None:
    """
    GDPR-compliant account deletion (anonymization).

    The row is kept so that ledger entries referencing it stay intact.

    Args:
        user_id: User's ID

    Raises:
        UserNotFoundError: If user does not exist
    """
    user = _lock_user(user_id)
    user.anonymize()
