from rest_framework import serializers
from .models import User, MembershipLevel


class UserSerializer(serializers.ModelSerializer):
    """Current account profile, including the barcode token."""

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'phone',
            'membership_level',
            'is_member',
            'anti_forgery_token',
            'created_at',
            'last_visit',
        ]
        read_only_fields = fields


class UserAdminSerializer(serializers.ModelSerializer):
    """Account representation for administrative listing."""

    class Meta:
        model = User
        fields = [
            'id',
            'external_uid',
            'email',
            'display_name',
            'phone',
            'membership_level',
            'is_member',
            'is_active',
            'created_at',
            'last_visit',
            'gdpr_deleted_at',
        ]
        read_only_fields = fields


class UserUpdateSerializer(serializers.Serializer):
    """
    Validate input for administrative profile updates.

    The anti-forgery token and identity subject are never writable.
    """

    display_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    membership_level = serializers.ChoiceField(choices=MembershipLevel.choices, required=False)
    is_member = serializers.BooleanField(required=False)
