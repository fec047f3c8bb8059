from rest_framework import serializers
from .models import MAX_REWARD_THRESHOLD, Merchant


# =============================================================================
# Input Serializers
# =============================================================================

class MerchantCreateSerializer(serializers.Serializer):
    """
    Validate input for merchant creation.

    name, address and images are required; reward_threshold defaults to
    settings.LEDGER['DEFAULT_REWARD_THRESHOLD'] when omitted.
    """

    name = serializers.CharField(max_length=200)
    address = serializers.CharField(max_length=300)
    images = serializers.ListField(child=serializers.URLField(), allow_empty=False)
    reward_threshold = serializers.IntegerField(
        min_value=1,
        max_value=MAX_REWARD_THRESHOLD,
        required=False
    )
    description = serializers.CharField(required=False, allow_blank=True)
    phone_number = serializers.CharField(max_length=32, required=False, allow_blank=True)
    website = serializers.URLField(required=False, allow_blank=True)
    locations = serializers.ListField(required=False)
    opening_hours = serializers.DictField(required=False)
    is_open = serializers.BooleanField(required=False)
    rating = serializers.DecimalField(
        max_digits=2,
        decimal_places=1,
        min_value=0,
        max_value=5,
        required=False,
        allow_null=True
    )


class MerchantUpdateSerializer(MerchantCreateSerializer):
    """Validate input for partial merchant updates."""

    name = serializers.CharField(max_length=200, required=False)
    address = serializers.CharField(max_length=300, required=False)
    images = serializers.ListField(child=serializers.URLField(), required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class MerchantSerializer(serializers.ModelSerializer):
    """Full merchant representation."""

    class Meta:
        model = Merchant
        fields = [
            'id',
            'name',
            'description',
            'address',
            'phone_number',
            'website',
            'images',
            'locations',
            'opening_hours',
            'is_open',
            'rating',
            'reward_threshold',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class MerchantMinimalSerializer(serializers.ModelSerializer):
    """Minimal merchant info for nested serialization."""

    class Meta:
        model = Merchant
        fields = ['id', 'name', 'reward_threshold']
        read_only_fields = fields
