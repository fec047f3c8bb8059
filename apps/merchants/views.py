from django.conf import settings
from rest_framework import serializers, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .permissions import IsStaffOrReadOnly
from .serializers import (
    MerchantCreateSerializer,
    MerchantUpdateSerializer,
    MerchantSerializer,
)
from .services import (
    MerchantNotFoundError,
    ThresholdLockedError,
    create_merchant,
    update_merchant,
    get_merchant_by_id,
    list_merchants,
    list_participated_merchants,
)


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


@extend_schema(
    methods=['GET'],
    responses={200: MerchantSerializer(many=True)},
    description="List all participating merchants.",
    tags=['merchants'],
)
@extend_schema(
    methods=['POST'],
    request=MerchantCreateSerializer,
    responses={201: MerchantSerializer, 400: ErrorResponseSerializer},
    description="Create a merchant (staff only).",
    tags=['merchants'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsStaffOrReadOnly])
def merchant_list(request):
    """List merchants or create a new one."""
    if request.method == 'GET':
        return Response(MerchantSerializer(list_merchants(), many=True).data)

    serializer = MerchantCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    data = serializer.validated_data.copy()
    data.setdefault('reward_threshold', settings.LEDGER['DEFAULT_REWARD_THRESHOLD'])

    merchant = create_merchant(**data)
    return Response(MerchantSerializer(merchant).data, status=status.HTTP_201_CREATED)


@extend_schema(
    methods=['GET'],
    responses={200: MerchantSerializer, 404: ErrorResponseSerializer},
    description="Get merchant detail.",
    tags=['merchants'],
)
@extend_schema(
    methods=['PATCH'],
    request=MerchantUpdateSerializer,
    responses={
        200: MerchantSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
        409: ErrorResponseSerializer,
    },
    description="Update a merchant (staff only). The reward threshold is locked once points were credited.",
    tags=['merchants'],
)
@api_view(['GET', 'PATCH'])
@permission_classes([IsStaffOrReadOnly])
def merchant_detail(request, merchant_id):
    """Retrieve or update a merchant - thin HTTP handler."""
    if request.method == 'GET':
        try:
            merchant = get_merchant_by_id(merchant_id=merchant_id)
        except MerchantNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(MerchantSerializer(merchant).data)

    serializer = MerchantUpdateSerializer(data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)

    try:
        merchant = update_merchant(merchant_id=merchant_id, **serializer.validated_data)
    except MerchantNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except ThresholdLockedError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

    return Response(MerchantSerializer(merchant).data)


@extend_schema(
    responses={200: MerchantSerializer(many=True)},
    description="List merchants where the current account has collected points.",
    tags=['merchants'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def participated_merchants(request):
    """Merchants the current account participated in."""
    merchants = list_participated_merchants(account_id=request.user.id)
    return Response(MerchantSerializer(merchants, many=True).data)
