import pytest
from unittest.mock import patch
from django.urls import reverse
from rest_framework import status
from apps.ledger.models import LedgerEntry
from apps.ledger.services import MAX_ITEM_COUNT, StoreUnavailableError


# =============================================================================
# Credit Tests
# =============================================================================

@pytest.mark.django_db
class TestCredit:
    """Tests for POST /api/ledger/credit/"""

    def credit(self, client, account, merchant, item_count, token=None):
        url = reverse('ledger:credit')
        data = {
            'anti_forgery_token': account.anti_forgery_token if token is None else token,
            'merchant_id': str(merchant.id),
            'item_count': item_count,
        }
        return client.post(url, data, format='json')

    def test_credit_below_threshold(self, authenticated_client, account, merchant):
        response = self.credit(authenticated_client, account, merchant, 7)

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {
            'message': 'Barcode validated successfully!',
            'rewards_earned': 0,
            'remaining_balance': 7,
        }

    def test_credit_earns_reward(self, authenticated_client, account, small_merchant):
        response = self.credit(authenticated_client, account, small_merchant, 12)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['rewards_earned'] == 2
        assert response.data['remaining_balance'] == 2
        assert response.data['message'] == 'Congratulations! You have earned 2 free reward(s)!'

    def test_credit_unauthenticated(self, api_client, account, merchant):
        response = self.credit(api_client, account, merchant, 1)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert not LedgerEntry.objects.exists()

    def test_credit_forged_token(self, authenticated_client, account, merchant):
        response = self.credit(authenticated_client, account, merchant, 3, token='f' * 32)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not LedgerEntry.objects.exists()

    def test_credit_unknown_merchant(self, authenticated_client, account):
        url = reverse('ledger:credit')
        data = {
            'anti_forgery_token': account.anti_forgery_token,
            'merchant_id': '00000000-0000-0000-0000-000000000000',
            'item_count': 2,
        }
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert 'error' in response.data

    @pytest.mark.parametrize('item_count', [0, -1, MAX_ITEM_COUNT + 1, 2**31, 2**63])
    def test_credit_invalid_item_count(self, authenticated_client, account, merchant, item_count):
        response = self.credit(authenticated_client, account, merchant, item_count)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not LedgerEntry.objects.exists()

    def test_credit_largest_item_count(self, authenticated_client, account, merchant):
        response = self.credit(authenticated_client, account, merchant, MAX_ITEM_COUNT)

        assert response.status_code == status.HTTP_200_OK
        assert LedgerEntry.objects.get().total_credited == MAX_ITEM_COUNT

    def test_credit_missing_fields(self, authenticated_client):
        url = reverse('ledger:credit')
        response = authenticated_client.post(url, {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'anti_forgery_token' in response.data
        assert 'merchant_id' in response.data
        assert 'item_count' in response.data

    def test_credit_store_unavailable(self, authenticated_client, account, merchant):
        with patch('apps.ledger.views.LedgerEngine.credit', side_effect=StoreUnavailableError("db down")):
            response = self.credit(authenticated_client, account, merchant, 2)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {'error': 'Failed to process points, please retry'}


# =============================================================================
# Balance / Redemption Tests
# =============================================================================

@pytest.mark.django_db
class TestBalances:
    """Tests for GET /api/ledger/balances/"""

    def test_balance_list(self, authenticated_client, account, merchant, small_merchant, other_account):
        LedgerEntry.objects.create(account=account, merchant=merchant, balance=4, total_credited=4)
        LedgerEntry.objects.create(account=other_account, merchant=small_merchant, balance=1, total_credited=1)

        url = reverse('ledger:balance-list')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['merchant']['id'] == str(merchant.id)
        assert response.data[0]['balance'] == 4

    def test_balance_detail_zero(self, authenticated_client, merchant):
        url = reverse('ledger:balance-detail', args=[merchant.id])
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['balance'] == 0
        assert response.data['total_credited'] == 0
        assert not LedgerEntry.objects.exists()

    def test_balance_detail_unknown_merchant(self, authenticated_client):
        url = reverse('ledger:balance-detail', args=['00000000-0000-0000-0000-000000000000'])
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestRedemptions:
    """Tests for GET /api/ledger/redemptions/"""

    def test_redemption_list(self, authenticated_client, account, merchant):
        url = reverse('ledger:credit')
        authenticated_client.post(url, {
            'anti_forgery_token': account.anti_forgery_token,
            'merchant_id': str(merchant.id),
            'item_count': 21,
        }, format='json')

        response = authenticated_client.get(reverse('ledger:redemption-list'))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['rewards_earned'] == 2
        assert response.data[0]['balance_before'] == 21
        assert response.data[0]['threshold'] == 10

    def test_redemption_list_empty(self, authenticated_client):
        response = authenticated_client.get(reverse('ledger:redemption-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == []
