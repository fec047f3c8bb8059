import pytest
from rest_framework.test import APIClient
from apps.accounts.models import User
from apps.accounts.tests.utils import issue_identity_token
from apps.ledger.models import LedgerEntry
from apps.merchants.models import Merchant


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def customer(db):
    """Create and return a customer account."""
    return User.objects.create_user(
        external_uid='idp-customer',
        email='customer@example.com',
        display_name='Customer',
    )


@pytest.fixture
def staff_user(db):
    """Create and return a staff account."""
    return User.objects.create_user(
        external_uid='idp-merchant-staff',
        email='staff@example.com',
        is_staff=True,
    )


@pytest.fixture
def customer_client(api_client, customer):
    """Return API client authenticated as customer."""
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_identity_token(customer.external_uid)}')
    return api_client


@pytest.fixture
def staff_client(api_client, staff_user):
    """Return API client authenticated as staff."""
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_identity_token(staff_user.external_uid)}')
    return api_client


@pytest.fixture
def merchant(db):
    """Create a merchant with a threshold of 10."""
    return Merchant.objects.create(
        name='Corner Espresso',
        address='Main Street 1',
        images=['https://example.com/espresso.jpg'],
        reward_threshold=10,
    )


@pytest.fixture
def other_merchant(db):
    """Create a second merchant with a threshold of 5."""
    return Merchant.objects.create(
        name='Bagel Bros',
        address='Harbour Road 12',
        images=['https://example.com/bagel.jpg'],
        reward_threshold=5,
    )


@pytest.fixture
def credited_merchant(db, merchant, customer):
    """Merchant that already has a ledger entry for the customer."""
    LedgerEntry.objects.create(
        account=customer,
        merchant=merchant,
        balance=3,
        total_credited=3,
    )
    return merchant
