from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from core.context import OwnerContext
from .serializers import SetMealSerializer
from .services import MessMenuService
from api.permissions import IsOwner


class MessMenuViewSet(viewsets.ViewSet):
    """
    ViewSet for the weekly mess menu
    Anyone on the account can read it; only the owner edits it
    """
    lookup_field = 'day'
    lookup_value_regex = r'[A-Za-z]+'

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.service = MessMenuService()

    def get_permissions(self):
        if self.action == 'set_meal':
            return [IsAuthenticated(), IsOwner()]
        return [IsAuthenticated()]

    def list(self, request):
        ctx = OwnerContext.from_request(request)
        return Response(self.service.weekly_menu(ctx))

    def retrieve(self, request, day=None):
        ctx = OwnerContext.from_request(request)
        return Response(self.service.day_menu(ctx, day))

    @action(detail=False, methods=['post'])
    def set_meal(self, request):
        ctx = OwnerContext.from_request(request)
        serializer = SetMealSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        self.service.set_meal(ctx, data['day'], data['meal'], data['content'])
        return Response(self.service.day_menu(ctx, data['day']))
