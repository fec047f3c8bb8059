import pytest
from rest_framework.test import APIClient
from apps.accounts.models import User
from apps.accounts.tests.utils import issue_identity_token
from apps.merchants.models import Merchant


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def account(db):
    """Create and return a loyalty account."""
    return User.objects.create_user(
        external_uid='idp-ledger-account',
        email='ledger@example.com',
        display_name='Ledger Account',
    )


@pytest.fixture
def other_account(db):
    """Create and return a second loyalty account."""
    return User.objects.create_user(
        external_uid='idp-ledger-other',
        email='other-ledger@example.com',
        display_name='Other Account',
    )


@pytest.fixture
def merchant(db):
    """Merchant granting one reward per 10 points."""
    return Merchant.objects.create(
        name='Corner Espresso',
        address='Main Street 1',
        images=['https://example.com/espresso.jpg'],
        reward_threshold=10,
    )


@pytest.fixture
def small_merchant(db):
    """Merchant granting one reward per 5 points."""
    return Merchant.objects.create(
        name='Bagel Bros',
        address='Harbour Road 12',
        images=['https://example.com/bagel.jpg'],
        reward_threshold=5,
    )


@pytest.fixture
def authenticated_client(api_client, account):
    """Return API client authenticated as account."""
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_identity_token(account.external_uid)}')
    return api_client
