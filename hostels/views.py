from rest_framework import viewsets, status
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from core.context import OwnerContext
from core.dto import HostelDTO
from .serializers import HostelSerializer
from .services import HostelService
from api.permissions import IsOwner


class HostelViewSet(viewsets.ViewSet):
    """
    ViewSet for Hostel management
    Scoped to the caller's account through OwnerContext
    """
    permission_classes = [IsAuthenticated, IsOwner]
    lookup_value_regex = r'\d+'

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.service = HostelService()

    def _dto(self, request, instance=None) -> HostelDTO:
        data = request.data
        return HostelDTO(
            name=data.get('name', getattr(instance, 'name', '')),
            address=data.get('address', getattr(instance, 'address', '')),
            contact=data.get('contact', getattr(instance, 'contact', '')),
            capacity=data.get('capacity', getattr(instance, 'capacity', None)),
        )

    def list(self, request):
        ctx = OwnerContext.from_request(request)
        return Response(HostelSerializer(self.service.list_hostels(ctx), many=True).data)

    def retrieve(self, request, pk=None):
        ctx = OwnerContext.from_request(request)
        return Response(HostelSerializer(self.service.get_hostel(ctx, pk)).data)

    def create(self, request):
        ctx = OwnerContext.from_request(request)
        hostel = self.service.create_hostel(ctx, self._dto(request))
        return Response(HostelSerializer(hostel).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        ctx = OwnerContext.from_request(request)
        current = self.service.get_hostel(ctx, pk)
        hostel = self.service.update_hostel(ctx, pk, self._dto(request, current))
        return Response(HostelSerializer(hostel).data)

    def update(self, request, pk=None):
        return self.partial_update(request, pk)

    def destroy(self, request, pk=None):
        ctx = OwnerContext.from_request(request)
        self.service.delete_hostel(ctx, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
