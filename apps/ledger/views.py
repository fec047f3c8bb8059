from rest_framework import serializers, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import (
    CreditInputSerializer,
    CreditResultSerializer,
    LedgerEntrySerializer,
    BalanceSerializer,
    RewardRedemptionSerializer,
)
from .services import (
    LedgerEngine,
    AuthorizationError,
    NotFoundError,
    InvalidCreditRequestError,
    InvalidConfigError,
    StoreUnavailableError,
    list_account_entries,
    list_account_redemptions,
)


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


def credit_message(rewards_earned):
    if rewards_earned:
        return f'Congratulations! You have earned {rewards_earned} free reward(s)!'
    return 'Barcode validated successfully!'


@extend_schema(
    request=CreditInputSerializer,
    responses={
        200: CreditResultSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
        500: ErrorResponseSerializer,
    },
    description="Credit points from a barcode scan and redeem rewards when the threshold is crossed.",
    tags=['ledger'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def credit(request):
    """Credit points to the current account - thin HTTP handler."""
    serializer = CreditInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    try:
        result = LedgerEngine().credit(
            account_id=request.user.id,
            anti_forgery_token=data['anti_forgery_token'],
            merchant_id=data['merchant_id'],
            item_count=data['item_count'],
        )
    except InvalidCreditRequestError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except AuthorizationError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except NotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InvalidConfigError:
        return Response(
            {'error': 'Merchant reward configuration is invalid'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
    except StoreUnavailableError:
        return Response(
            {'error': 'Failed to process points, please retry'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return Response(CreditResultSerializer({
        'message': credit_message(result.rewards_earned),
        'rewards_earned': result.rewards_earned,
        'remaining_balance': result.remaining_balance,
    }).data)


@extend_schema(
    responses={200: LedgerEntrySerializer(many=True)},
    description="List the current account's balances at every merchant it participated in.",
    tags=['ledger'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def balance_list(request):
    """List balances of the current account."""
    entries = list_account_entries(account_id=request.user.id)
    return Response(LedgerEntrySerializer(entries, many=True).data)


@extend_schema(
    responses={200: BalanceSerializer, 404: ErrorResponseSerializer},
    description="Get the current account's balance at one merchant.",
    tags=['ledger'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def balance_detail(request, merchant_id):
    """Balance at a single merchant (zero if nothing credited yet)."""
    try:
        state = LedgerEngine().balance_for(
            account_id=request.user.id,
            merchant_id=merchant_id,
        )
    except NotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except StoreUnavailableError:
        return Response(
            {'error': 'Failed to load balance, please retry'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return Response(BalanceSerializer({
        'merchant_id': merchant_id,
        'balance': state.balance,
        'total_credited': state.total_credited,
        'total_rewards': state.total_rewards,
    }).data)


@extend_schema(
    responses={200: RewardRedemptionSerializer(many=True)},
    description="List rewards earned by the current account.",
    tags=['ledger'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def redemption_list(request):
    """Reward history of the current account."""
    redemptions = list_account_redemptions(account_id=request.user.id)
    return Response(RewardRedemptionSerializer(redemptions, many=True).data)
