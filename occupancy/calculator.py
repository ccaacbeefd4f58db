"""
Occupancy calculator.

Derives per-room and aggregate occupancy from Room and Student records. The
count of active students assigned to a room is authoritative; the stored
Room.occupied counter is never read here.

Works on any objects exposing the model attribute names (Room: id, number,
floor, capacity, hostel_id; Student: room_id, status), so it can be used on
querysets, lists of instances or plain test doubles.
"""
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Tuple

from core.constants import RoomStatus, StudentStatus


def room_status(capacity: int, occupied: int) -> str:
    """Display status: Full, Vacant or '<n> Beds Free'"""
    if occupied >= capacity:
        return RoomStatus.FULL
    if occupied == 0:
        return RoomStatus.VACANT
    return RoomStatus.BEDS_FREE.format(free=capacity - occupied)


def percentage(part, whole) -> float:
    """part/whole*100, or 0.0 when whole is 0"""
    if not whole:
        return 0.0
    return round(float(part) / float(whole) * 100, 2)


def is_active(student) -> bool:
    return student.status != StudentStatus.INACTIVE


@dataclass(frozen=True)
class RoomOccupancy:
    room_id: int
    number: str
    floor: str
    hostel_id: int
    capacity: int
    occupied: int

    @property
    def status(self) -> str:
        return room_status(self.capacity, self.occupied)

    @property
    def beds_free(self) -> int:
        return max(self.capacity - self.occupied, 0)

    @property
    def is_full(self) -> bool:
        return self.occupied >= self.capacity


@dataclass(frozen=True)
class OccupancySummary:
    rooms: Tuple[RoomOccupancy, ...]
    active_students: int

    @property
    def total_capacity(self) -> int:
        return sum(room.capacity for room in self.rooms)

    @property
    def total_occupied(self) -> int:
        return sum(room.occupied for room in self.rooms)

    @property
    def vacancy(self) -> int:
        return self.total_capacity - self.total_occupied

    @property
    def occupancy_percentage(self) -> float:
        return percentage(self.active_students, self.total_capacity)

    @property
    def total_rooms(self) -> int:
        return len(self.rooms)

    @property
    def full_rooms(self) -> int:
        return sum(1 for room in self.rooms if room.is_full)

    @property
    def full_rooms_percentage(self) -> float:
        return percentage(self.full_rooms, self.total_rooms)

    def for_room(self, room_id) -> RoomOccupancy:
        for room in self.rooms:
            if room.room_id == room_id:
                return room
        raise KeyError(room_id)


def occupied_by_room(students: Iterable) -> Counter:
    """Active student count keyed by room id"""
    return Counter(
        student.room_id for student in students
        if is_active(student) and student.room_id is not None
    )


def calculate_occupancy(rooms: Iterable, students: Iterable) -> OccupancySummary:
    """
    Recompute occupancy for an owner's rooms.

    Args:
        rooms: All rooms of the owner
        students: All students of the owner; inactive ones are ignored

    Returns:
        OccupancySummary with one RoomOccupancy per room
    """
    students = list(students)
    counts = occupied_by_room(students)
    per_room = tuple(
        RoomOccupancy(
            room_id=room.id,
            number=room.number,
            floor=room.floor,
            hostel_id=room.hostel_id,
            capacity=room.capacity,
            occupied=counts.get(room.id, 0),
        )
        for room in rooms
    )
    return OccupancySummary(
        rooms=per_room,
        active_students=sum(1 for student in students if is_active(student)),
    )
