import pytest
from rest_framework.test import APIClient
from apps.accounts.tests.utils import issue_identity_token
from apps.accounts.models import User


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a provisioned account."""
    return User.objects.create_user(
        external_uid='idp-testuser',
        email='testuser@example.com',
        display_name='Test User',
    )


@pytest.fixture
def other_user(db):
    """Create and return another account."""
    return User.objects.create_user(
        external_uid='idp-otheruser',
        email='otheruser@example.com',
        display_name='Other User',
    )


@pytest.fixture
def user_inactive(db):
    """Create and return a deactivated account."""
    return User.objects.create_user(
        external_uid='idp-inactive',
        email='inactive@example.com',
        is_active=False,
    )


@pytest.fixture
def staff_user(db):
    """Create and return a staff account."""
    return User.objects.create_user(
        external_uid='idp-staff',
        email='staff@example.com',
        display_name='Staff',
        is_staff=True,
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an API client authenticated as user."""
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_identity_token(user.external_uid)}')
    return api_client


@pytest.fixture
def staff_client(api_client, staff_user):
    """Return an API client authenticated as staff."""
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_identity_token(staff_user.external_uid)}')
    return api_client
