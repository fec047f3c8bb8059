from django.http import HttpResponse
from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated, IsAdminUser
from rest_framework.response import Response
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from .models import User
from .serializers import (
    UserSerializer,
    UserAdminSerializer,
    UserUpdateSerializer,
)
from .services import (
    UserNotFoundError,
    update_user_profile,
    delete_user_account,
    render_barcode_png,
)


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current account's profile, including its barcode token.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated account profile."""
    return Response(UserSerializer(request.user).data)


@extend_schema(
    responses={(200, 'image/png'): OpenApiTypes.BINARY},
    description="Render the current account's anti-forgery token as a QR code.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def current_user_barcode(request):
    """QR code scanned by merchants when crediting points."""
    png = render_barcode_png(request.user.anti_forgery_token)
    return HttpResponse(png, content_type='image/png')


# =============================================================================
# Administrative CRUD
# =============================================================================

@extend_schema(
    responses={200: UserAdminSerializer(many=True)},
    description="List all accounts (staff only).",
    tags=['users'],
)
@api_view(['GET'])
@permission_classes([IsAdminUser])
def user_list(request):
    """List accounts."""
    users = User.objects.all().order_by('-created_at')
    return Response(UserAdminSerializer(users, many=True).data)


@extend_schema(
    methods=['GET'],
    responses={200: UserAdminSerializer, 404: ErrorResponseSerializer},
    description="Get an account (staff only).",
    tags=['users'],
)
@extend_schema(
    methods=['PUT', 'PATCH'],
    request=UserUpdateSerializer,
    responses={200: UserAdminSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    description="Update account profile fields (staff only).",
    tags=['users'],
)
@extend_schema(
    methods=['DELETE'],
    responses={204: None, 404: ErrorResponseSerializer},
    description="Anonymize and deactivate an account (staff only). Ledger history is kept.",
    tags=['users'],
)
@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAdminUser])
def user_detail(request, user_id):
    """Retrieve, update or delete an account - thin HTTP handler."""
    if request.method == 'GET':
        try:
            user = User.objects.get(id=user_id)
        except User.DoesNotExist:
            return Response({'error': 'User not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(UserAdminSerializer(user).data)

    if request.method == 'DELETE':
        try:
            delete_user_account(user_id=user_id)
        except UserNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    serializer = UserUpdateSerializer(data=request.data, partial=request.method == 'PATCH')
    serializer.is_valid(raise_exception=True)

    try:
        user = update_user_profile(user_id=user_id, **serializer.validated_data)
    except UserNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(UserAdminSerializer(user).data)
