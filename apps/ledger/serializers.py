from rest_framework import serializers
from apps.merchants.serializers import MerchantMinimalSerializer
from .models import LedgerEntry, RewardRedemption
from .services import MAX_ITEM_COUNT


# =============================================================================
# Input Serializers
# =============================================================================

class CreditInputSerializer(serializers.Serializer):
    """
    Validate input for crediting points from a barcode scan.

    Fields:
        anti_forgery_token (str): Token scanned from the account's barcode
        merchant_id (UUID): Merchant where the purchase happened
        item_count (int): Number of items bought (1 to MAX_ITEM_COUNT)
    """

    anti_forgery_token = serializers.CharField(max_length=64)
    merchant_id = serializers.UUIDField()
    item_count = serializers.IntegerField(min_value=1, max_value=MAX_ITEM_COUNT)


# =============================================================================
# Output Serializers
# =============================================================================

class CreditResultSerializer(serializers.Serializer):
    """Response for a completed credit."""

    message = serializers.CharField()
    rewards_earned = serializers.IntegerField()
    remaining_balance = serializers.IntegerField()


class LedgerEntrySerializer(serializers.ModelSerializer):
    """Balance of the current account at one merchant."""

    merchant = MerchantMinimalSerializer(read_only=True)

    class Meta:
        model = LedgerEntry
        fields = [
            'id',
            'merchant',
            'balance',
            'total_credited',
            'total_rewards',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class BalanceSerializer(serializers.Serializer):
    """Balance snapshot, zero when nothing was credited yet."""

    merchant_id = serializers.UUIDField()
    balance = serializers.IntegerField()
    total_credited = serializers.IntegerField()
    total_rewards = serializers.IntegerField()


class RewardRedemptionSerializer(serializers.ModelSerializer):
    """Reward redemption history item."""

    merchant = MerchantMinimalSerializer(read_only=True)

    class Meta:
        model = RewardRedemption
        fields = [
            'id',
            'merchant',
            'rewards_earned',
            'balance_before',
            'threshold',
            'created_at',
        ]
        read_only_fields = fields
