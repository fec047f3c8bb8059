"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    AuthenticationError,
    UserNotFoundError,
)
from .identity_gate import (
    IdentityGate,
    JWTIdentityGate,
    ResolvedIdentity,
    VerifiedIdentity,
    get_identity_gate,
    provision_account,
)
from .account_management import update_user_profile, delete_user_account
from .barcode import render_barcode_png

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'AuthenticationError',
    'UserNotFoundError',
    # Identity
    'IdentityGate',
    'JWTIdentityGate',
    'ResolvedIdentity',
    'VerifiedIdentity',
    'get_identity_gate',
    'provision_account',
    # Services
    'update_user_profile',
    'delete_user_account',
    'render_barcode_png',
]
