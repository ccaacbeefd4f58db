from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from .models import Account
from .serializers import (
    AccountSerializer, SignUpSerializer, SignInSerializer,
    UserSerializer, UserPreferenceSerializer
)
from .services import AuthService
from users.models import UserPreference
from api.permissions import IsAccountOwner, IsOwner


@api_view(['POST'])
@permission_classes([AllowAny])
def sign_up(request):
    """Create an owner account and return a JWT pair"""
    serializer = SignUpSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    service = AuthService()
    user = service.sign_up(**serializer.validated_data)
    return Response(
        {'user': UserSerializer(user).data, **service.issue_tokens(user)},
        status=status.HTTP_201_CREATED
    )


@api_view(['POST'])
@permission_classes([AllowAny])
def sign_in(request):
    """Authenticate by email/password and return a JWT pair"""
    serializer = SignInSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    service = AuthService()
    user = service.sign_in(request=request, **serializer.validated_data)
    return Response({'user': UserSerializer(user).data, **service.issue_tokens(user)})


@api_view(['POST'])
@permission_classes([AllowAny])
def sign_out(request):
    """Sign out; clients discard their tokens"""
    AuthService().sign_out(request)
    return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def current_user(request):
    """The signed-in user"""
    return Response(UserSerializer(AuthService.current_user(request)).data)


@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated])
def preferences(request):
    """Read or update theme, language and first-run flag"""
    prefs = UserPreference.for_user(request.user)
    if request.method == 'PATCH':
        serializer = UserPreferenceSerializer(prefs, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)
    return Response(UserPreferenceSerializer(prefs).data)


class AccountViewSet(viewsets.ReadOnlyModelViewSet):
    """
    ViewSet for the owner's own account
    """
    serializer_class = AccountSerializer
    permission_classes = [IsAuthenticated, IsOwner, IsAccountOwner]

    def get_queryset(self):
        """Only the caller's account is visible"""
        return Account.objects.filter(id=self.request.user.account_id)

    @action(detail=False, methods=['get', 'patch'])
    def current(self, request):
        """Get or update current user's account"""
        account = request.user.account
        if request.method == 'PATCH':
            serializer = self.get_serializer(account, data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            serializer.save()
            return Response(serializer.data)
        serializer = self.get_serializer(account)
        return Response(serializer.data)
