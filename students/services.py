"""
Student service - Business logic layer for Student domain.

Every change that can move a student into or out of a room (create, room
reassignment, status toggle, delete) runs in one transaction with the room
row locks and the refresh of the rooms' cached occupied counters.
"""
from typing import Optional
from django.db import transaction
from core.constants import StudentStatus
from core.context import OwnerContext
from core.coordinator import student_toggles, Result
from core.dto import StudentDTO
from core.exceptions import RoomFullError, ValidationError
from core.services import BaseService
from core.validators import RequiredFieldsValidator, ContactValidator, AmountValidator, IdentifierValidator
from common.storage import upload_file
from rooms.models import Room
from rooms.repositories import RoomRepository
from .models import Student
from .repositories import StudentRepository

# image kind -> model field
IMAGE_FIELDS = {
    'profile': 'profile_image',
    'id_front': 'id_front_image',
    'id_back': 'id_back_image',
}


class StudentService(BaseService):
    """Service for student-related business logic"""

    def __init__(self):
        super().__init__()
        self.student_repo = StudentRepository()
        self.room_repo = RoomRepository()

    def _validate(self, data: StudentDTO) -> dict:
        RequiredFieldsValidator.validate(vars(data), ['name', 'phone', 'room_id', 'rent'])
        cleaned = {
            'name': data.name.strip(),
            'phone': ContactValidator.validate_phone(data.phone),
            'parent_phone': '',
            'national_id': '',
            'bed': (data.bed or '').strip(),
            'rent': AmountValidator.validate_rent(data.rent),
        }
        if data.parent_phone:
            cleaned['parent_phone'] = ContactValidator.validate_phone(data.parent_phone, field='parent_phone')
        if data.national_id:
            cleaned['national_id'] = ContactValidator.validate_national_id(data.national_id)
        return cleaned

    @staticmethod
    def _room_id(value) -> int:
        return IdentifierValidator.validate_id(value, "room", "INVALID_ROOM", "Select a room")

    @staticmethod
    def _ensure_bed_free(room: Room):
        """Room must be locked by the caller"""
        occupied = room.count_active_students()
        if occupied >= room.capacity:
            raise RoomFullError(
                message=f"Room {room.number} is full",
                details={"room": room.number, "capacity": room.capacity, "occupied": occupied}
            )

    def _lock_rooms(self, ctx: OwnerContext, *room_ids) -> dict:
        """Lock rooms in id order so concurrent reassignments cannot deadlock"""
        return {
            room_id: self.room_repo.lock(ctx, room_id)
            for room_id in sorted(set(room_ids))
        }

    def create_student(self, ctx: OwnerContext, data: StudentDTO) -> Student:
        """
        Add an active student to a room.

        Raises:
            ValidationError: Missing fields, malformed phone or ID number
            NotFoundError: If the room is not one of the owner's
            RoomFullError: If the room has no free bed
        """
        cleaned = self._validate(data)
        with transaction.atomic():
            room = self.room_repo.lock(ctx, self._room_id(data.room_id))
            self._ensure_bed_free(room)
            student = self.student_repo.create(
                ctx, room=room, status=StudentStatus.ACTIVE, **cleaned
            )
            self.room_repo.refresh_occupied(room)

        self.log_info(f"Student added: {student.name}", student_id=student.id, room=room.number)
        if data.images:
            student = self.attach_images(ctx, student.id, data.images)
        return student

    def update_student(self, ctx: OwnerContext, student_id: int, data: StudentDTO) -> Student:
        """Update details; a room change moves the student between rooms"""
        cleaned = self._validate(data)
        with transaction.atomic():
            student = self.student_repo.get_for_owner(ctx, student_id, for_update=True)
            old_room_id = student.room_id
            new_room_id = self._room_id(data.room_id)
            rooms = self._lock_rooms(ctx, *[r for r in (old_room_id, new_room_id) if r is not None])

            if new_room_id != old_room_id and student.is_active:
                self._ensure_bed_free(rooms[new_room_id])

            for key, value in cleaned.items():
                setattr(student, key, value)
            student.room = rooms[new_room_id]
            student.save()

            for room in rooms.values():
                self.room_repo.refresh_occupied(room)

        if old_room_id != new_room_id:
            self.log_info("Student moved", student_id=student.id, from_room=old_room_id, to_room=new_room_id)
        else:
            self.log_info(f"Student updated: {student.name}", student_id=student.id)
        return student

    def delete_student(self, ctx: OwnerContext, student_id: int) -> None:
        """Remove a student and free their bed. Payment history goes with them."""
        with transaction.atomic():
            student = self.student_repo.get_for_owner(ctx, student_id, for_update=True)
            room_id = student.room_id
            room = self.room_repo.lock(ctx, room_id) if room_id else None
            student.delete()
            if room is not None:
                self.room_repo.refresh_occupied(room)
        self.log_info("Student deleted", student_id=student_id, account_id=ctx.account_id)

    def _flip_status(self, ctx: OwnerContext, student_id: int) -> Student:
        with transaction.atomic():
            student = self.student_repo.get_for_owner(ctx, student_id, for_update=True)
            room = self.room_repo.lock(ctx, student.room_id) if student.room_id else None
            new_status = StudentStatus.flipped(student.status)
            if new_status == StudentStatus.ACTIVE and room is not None:
                self._ensure_bed_free(room)
            student.status = new_status
            student.save(update_fields=['status', 'updated_at'])
            if room is not None:
                self.room_repo.refresh_occupied(room)
        self.log_info(f"Student status -> {new_status}", student_id=student.id)
        return student

    def toggle_status(self, ctx: OwnerContext, student_id: int,
                      apply=None, revert=None) -> Optional[Result]:
        """
        Activate or deactivate a student.

        Returns:
            Ok(student) or Err(error) for the applied toggle; None when a
            toggle for this student is already in flight
        """
        return student_toggles.run(
            student_id,
            lambda: self._flip_status(ctx, student_id),
            apply=apply,
            revert=revert,
        )

    def attach_images(self, ctx: OwnerContext, student_id: int, images: dict) -> Student:
        """
        Upload profile / ID images and store their URLs.

        Args:
            images: Mapping of 'profile', 'id_front', 'id_back' to file objects
        """
        unknown = set(images) - set(IMAGE_FIELDS)
        if unknown:
            raise ValidationError(
                message="Unknown image type",
                code="INVALID_IMAGE_KIND",
                details={"kinds": sorted(unknown)}
            )
        student = self.student_repo.get_for_owner(ctx, student_id)
        patch = {
            IMAGE_FIELDS[kind]: upload_file(fileobj, f"students/{student.id}/{kind}.jpg")
            for kind, fileobj in images.items()
            if fileobj
        }
        if not patch:
            return student
        return self.student_repo.update(ctx, student.id, **patch)

    def list_students(self, ctx: OwnerContext, search: str = '', status: str = ''):
        queryset = self.student_repo.search(ctx, search)
        if status:
            queryset = queryset.filter(status=status)
        return list(queryset)

    def get_student(self, ctx: OwnerContext, student_id: int) -> Student:
        return self.student_repo.get_for_owner(ctx, student_id)
