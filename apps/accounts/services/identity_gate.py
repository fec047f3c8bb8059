"""
Identity gate service.

Verifies credentials issued by the external identity provider and resolves
them to a local account plus its anti-forgery token. The ledger core trusts
the resolved identity verbatim.

Providers are swapped through ``settings.IDENTITY_GATE['CLASS']``; the core
only ever talks to the ``IdentityGate`` interface.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.contrib.auth import get_user_model
from django.contrib.auth.hashers import make_password
from django.db import IntegrityError, transaction
from django.utils import timezone
from django.utils.module_loading import import_string
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken

from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)

User = get_user_model()


@dataclass(frozen=True)
class VerifiedIdentity:
    """Claims extracted from a verified credential."""

    subject: str
    email: str = ''


@dataclass(frozen=True)
class ResolvedIdentity:
    """Stable account identifier and the account's anti-forgery token."""

    account_id: UUID
    anti_forgery_token: str


class IdentityGate(ABC):
    """Base class for identity provider adapters."""

    @abstractmethod
    def verify_credential(self, credential_token: str) -> VerifiedIdentity:
        """
        Verify a provider credential.

        Raises:
            AuthenticationError: If the credential is invalid or expired
        """

    def resolve(self, credential_token: str) -> ResolvedIdentity:
        """
        Resolve a credential to an account, provisioning it on first contact.

        Args:
            credential_token: Raw credential from the Authorization header

        Returns:
            ResolvedIdentity for the (possibly new) account

        Raises:
            AuthenticationError: If the credential is invalid or the account
                has been deactivated
        """
        user = self.resolve_user(credential_token)
        return ResolvedIdentity(
            account_id=user.id,
            anti_forgery_token=user.anti_forgery_token,
        )

    def resolve_user(self, credential_token: str) -> User:
        """Same as ``resolve`` but returns the account instance."""
        identity = self.verify_credential(credential_token)
        user = provision_account(subject=identity.subject, email=identity.email)

        if not user.is_active:
            logger.warning("Rejected credential for deactivated account %s", user.id)
            raise AuthenticationError("Account is deactivated")

        return user


class JWTIdentityGate(IdentityGate):
    """
    Verifies provider-issued JWT access tokens with simplejwt.

    The signing key and algorithm come from ``settings.SIMPLE_JWT``; the
    subject is read from ``IDENTITY_GATE['SUBJECT_CLAIM']``.
    """

    def __init__(self, subject_claim: Optional[str] = None, email_claim: Optional[str] = None):
        gate_settings = getattr(settings, 'IDENTITY_GATE', {})
        self.subject_claim = subject_claim or gate_settings.get('SUBJECT_CLAIM', 'sub')
        self.email_claim = email_claim or gate_settings.get('EMAIL_CLAIM', 'email')

    def verify_credential(self, credential_token: str) -> VerifiedIdentity:
        if not credential_token:
            raise AuthenticationError("Missing credential")

        try:
            token = AccessToken(credential_token)
        except TokenError as e:
            logger.warning("Rejected identity token: %s", e)
            raise AuthenticationError("Invalid or expired token")

        subject = token.get(self.subject_claim)
        if not subject:
            raise AuthenticationError(f"Token has no '{self.subject_claim}' claim")

        return VerifiedIdentity(
            subject=str(subject),
            email=token.get(self.email_claim) or '',
        )


def get_identity_gate() -> IdentityGate:
    """Instantiate the configured identity gate."""
    gate_class = import_string(settings.IDENTITY_GATE['CLASS'])
    return gate_class()


def provision_account(*, subject: str, email: str = '') -> User:
    """
    Fetch or create the account for a provider subject.

    Concurrent first contact for the same subject is settled by the unique
    constraint on ``external_uid``; the loser re-reads the winner's row.
    Every call records the visit.

    Args:
        subject: Identity provider's stable subject identifier
        email: Email claim, stored on creation only

    Returns:
        User instance
    """
    now = timezone.now()

    try:
        with transaction.atomic():
            user, created = User.objects.get_or_create(
                external_uid=subject,
                defaults={
                    'email': email,
                    'last_visit': now,
                    # Credentials are verified by the identity provider
                    'password': make_password(None),
                },
            )
    except IntegrityError:
        user, created = User.objects.get(external_uid=subject), False

    if created:
        logger.info("Provisioned account %s for new identity", user.id)
    else:
        User.objects.filter(pk=user.pk).update(last_visit=now)
        user.last_visit = now

    return user
