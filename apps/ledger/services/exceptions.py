"""
Domain exceptions for the ledger app.

These exceptions represent rejected credits and infrastructure failures.
They are raised by the services layer and translated to HTTP responses
in views.

Exception Hierarchy:
    LedgerServiceError (base)
    ├── InvalidCreditRequestError
    ├── AuthorizationError
    ├── NotFoundError
    │   ├── AccountNotFoundError
    │   └── MerchantNotFoundError
    ├── InvalidConfigError
    └── StoreUnavailableError
"""


class LedgerServiceError(Exception):
    """Base exception for all ledger service errors."""
    pass


class InvalidCreditRequestError(LedgerServiceError):
    """Raised when a credit request violates its preconditions."""
    pass


class AuthorizationError(LedgerServiceError):
    """Raised when the anti-forgery token does not match the account."""
    pass


class NotFoundError(LedgerServiceError):
    """Raised when a referenced record does not exist."""
    pass


class AccountNotFoundError(NotFoundError):
    """Raised when the account does not exist or is deactivated."""
    pass


class MerchantNotFoundError(NotFoundError):
    """Raised when the merchant does not exist."""
    pass


class InvalidConfigError(LedgerServiceError):
    """Raised when a merchant's reward threshold is not a positive integer."""
    pass


class StoreUnavailableError(LedgerServiceError):
    """
    Raised when the persistence layer fails.

    Safe to retry: a failed atomic update has no partial effect.
    """
    pass
