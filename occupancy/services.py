"""
Occupancy service - recomputes occupancy from the owner's rooms and students.
"""
from typing import Optional
from core.context import OwnerContext
from core.services import BaseService
from core.validators import IdentifierValidator
from rooms.repositories import RoomRepository
from students.repositories import StudentRepository
from .calculator import calculate_occupancy, OccupancySummary


class OccupancyService(BaseService):
    """Service for occupancy figures"""

    def __init__(self):
        super().__init__()
        self.room_repo = RoomRepository()
        self.student_repo = StudentRepository()

    def summary(self, ctx: OwnerContext, hostel_id: Optional[int] = None) -> OccupancySummary:
        """
        Occupancy for all rooms, or the rooms of one hostel.
        The stored Room.occupied counters are not consulted.
        """
        hostel_id = IdentifierValidator.validate_hostel(hostel_id)
        if hostel_id is None:
            rooms = self.room_repo.fetch(ctx)
            students = self.student_repo.fetch_assignments(ctx)
        else:
            rooms = self.room_repo.fetch(ctx, hostel_id=hostel_id)
            students = self.student_repo.fetch_assignments(ctx, room__hostel_id=hostel_id)
        return calculate_occupancy(rooms, students)
