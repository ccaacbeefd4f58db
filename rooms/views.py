from rest_framework import viewsets, status
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from core.context import OwnerContext
from core.dto import RoomDTO
from .serializers import RoomSerializer, RoomOccupancySerializer
from .services import RoomService
from api.permissions import IsOwner


class RoomViewSet(viewsets.ViewSet):
    """
    ViewSet for Room management
    Occupancy shown here is always recomputed from active students
    """
    permission_classes = [IsAuthenticated, IsOwner]
    lookup_value_regex = r'\d+'

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.service = RoomService()

    def list(self, request):
        ctx = OwnerContext.from_request(request)
        hostel_id = request.query_params.get('hostel') or None
        rooms = self.service.list_rooms(ctx, hostel_id=hostel_id, search=request.query_params.get('search', ''))
        return Response(RoomOccupancySerializer(rooms, many=True).data)

    def retrieve(self, request, pk=None):
        ctx = OwnerContext.from_request(request)
        return Response(RoomOccupancySerializer(self.service.get_room(ctx, pk)).data)

    def create(self, request):
        ctx = OwnerContext.from_request(request)
        data = request.data
        room = self.service.create_room(ctx, RoomDTO(
            number=data.get('number', ''),
            floor=data.get('floor', ''),
            capacity=data.get('capacity'),
            hostel_id=data.get('hostel'),
        ))
        return Response(RoomSerializer(room).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        ctx = OwnerContext.from_request(request)
        current = self.service.room_repo.get_for_owner(ctx, pk)
        data = request.data
        room = self.service.update_room(ctx, pk, RoomDTO(
            number=current.number,
            floor=data.get('floor', current.floor),
            capacity=data.get('capacity', current.capacity),
            hostel_id=data.get('hostel', current.hostel_id),
        ))
        return Response(RoomSerializer(room).data)

    def update(self, request, pk=None):
        return self.partial_update(request, pk)

    def destroy(self, request, pk=None):
        ctx = OwnerContext.from_request(request)
        self.service.delete_room(ctx, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
