"""
Room repository - Data access layer for Room domain.
Follows Repository pattern for clean separation of concerns.
"""
from django.db.models import QuerySet
from core.context import OwnerContext
from core.repositories import BaseRepository, storage_errors
from .models import Room


class RoomRepository(BaseRepository[Room]):
    """Repository for Room model"""

    def __init__(self):
        super().__init__(Room)

    def get_queryset(self) -> QuerySet[Room]:
        return Room.objects.select_related('hostel')

    def get_by_hostel(self, ctx: OwnerContext, hostel_id: int) -> QuerySet[Room]:
        return self.list_by_owner(ctx, hostel_id=hostel_id)

    @storage_errors
    def lock(self, ctx: OwnerContext, room_id: int) -> Room:
        """Row-lock a room for the current transaction"""
        return self.get_for_owner(ctx, room_id, for_update=True)

    @storage_errors
    def refresh_occupied(self, room: Room) -> Room:
        """
        Rewrite the cached occupied counter from active students.
        Must run inside the transaction that changed the students.
        """
        occupied = room.count_active_students()
        if room.occupied != occupied:
            room.occupied = occupied
            room.save(update_fields=['occupied', 'updated_at'])
        return room
