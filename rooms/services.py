"""
Room service - Business logic layer for Room domain.
Services orchestrate repositories and contain business rules.
"""
from typing import List, Optional
from django.db import IntegrityError, transaction
from core.context import OwnerContext
from core.dto import RoomDTO
from core.exceptions import BusinessLogicError, ValidationError
from core.services import BaseService
from core.validators import RequiredFieldsValidator, CapacityValidator, IdentifierValidator
from hostels.repositories import HostelRepository
from occupancy.calculator import calculate_occupancy, RoomOccupancy
from students.repositories import StudentRepository
from .models import Room
from .repositories import RoomRepository


class RoomService(BaseService):
    """Service for room-related business logic"""

    def __init__(self):
        super().__init__()
        self.room_repo = RoomRepository()
        self.hostel_repo = HostelRepository()
        self.student_repo = StudentRepository()

    def _hostel_id(self, ctx: OwnerContext, hostel_id) -> Optional[int]:
        hostel_id = IdentifierValidator.validate_hostel(hostel_id)
        if hostel_id is None:
            return None
        return self.hostel_repo.get_for_owner(ctx, hostel_id).id

    def create_room(self, ctx: OwnerContext, data: RoomDTO) -> Room:
        """
        Create a new room. Rooms start empty.

        Raises:
            ValidationError: Missing number/capacity or duplicate number
            NotFoundError: If hostel_id is not one of the owner's hostels
        """
        RequiredFieldsValidator.validate(vars(data), ['number', 'capacity'])
        capacity = CapacityValidator.validate_capacity(data.capacity)
        number = str(data.number).strip()
        hostel_id = self._hostel_id(ctx, data.hostel_id)

        if self.room_repo.exists(ctx, number=number):
            raise ValidationError(
                message=f"Room {number} already exists",
                code="DUPLICATE_ROOM_NUMBER",
                details={"number": number}
            )
        try:
            with transaction.atomic():
                room = self.room_repo.create(
                    ctx,
                    number=number,
                    floor=str(data.floor or '').strip(),
                    capacity=capacity,
                    hostel_id=hostel_id,
                    occupied=0,
                )
        except IntegrityError:
            raise ValidationError(message=f"Room {number} already exists", code="DUPLICATE_ROOM_NUMBER")

        self.log_info(f"Room created: {room.number}", room_id=room.id, account_id=ctx.account_id)
        return room

    def update_room(self, ctx: OwnerContext, room_id: int, data: RoomDTO) -> Room:
        """
        Update floor, capacity or hostel grouping.
        Capacity may not drop below the room's active students.
        """
        capacity = CapacityValidator.validate_capacity(data.capacity)
        with transaction.atomic():
            room = self.room_repo.lock(ctx, room_id)
            occupied = room.count_active_students()
            if capacity < occupied:
                raise BusinessLogicError(
                    message=f"Room {room.number} has {occupied} active students",
                    code="CAPACITY_BELOW_OCCUPANCY",
                    details={"occupied": occupied, "capacity": capacity}
                )
            room.floor = str(data.floor or '').strip()
            room.capacity = capacity
            room.hostel_id = self._hostel_id(ctx, data.hostel_id)
            room.occupied = occupied
            room.save()
        self.log_info(f"Room updated: {room.number}", room_id=room.id)
        return room

    def delete_room(self, ctx: OwnerContext, room_id: int) -> None:
        """Delete an empty room"""
        with transaction.atomic():
            room = self.room_repo.lock(ctx, room_id)
            if room.students.exists():
                raise BusinessLogicError(
                    message=f"Room {room.number} still has students assigned",
                    code="ROOM_NOT_EMPTY"
                )
            room.delete()
        self.log_info("Room deleted", room_id=room_id, account_id=ctx.account_id)

    def list_rooms(self, ctx: OwnerContext, hostel_id=None, search: str = '') -> List[RoomOccupancy]:
        """
        Rooms with recomputed occupancy, optionally narrowed to a hostel
        and a case-insensitive number search.
        """
        hostel_id = IdentifierValidator.validate_hostel(hostel_id)
        rooms = self.room_repo.fetch(ctx) if hostel_id is None else list(self.room_repo.get_by_hostel(ctx, hostel_id))
        students = self.student_repo.fetch_assignments(ctx)
        summary = calculate_occupancy(rooms, students)
        needle = (search or '').strip().lower()
        return [room for room in summary.rooms if needle in room.number.lower()]

    def get_room(self, ctx: OwnerContext, room_id: int) -> RoomOccupancy:
        room = self.room_repo.get_for_owner(ctx, room_id)
        students = self.student_repo.fetch_assignments(ctx, room_id=room.id)
        return calculate_occupancy([room], students).for_room(room.id)
