from django.db import models
from django.core.validators import MinValueValidator
from accounts.models import Account
from hostels.models import Hostel
from core.constants import StudentStatus
from occupancy.calculator import room_status


class Room(models.Model):
    """
    Room owned by an account, optionally grouped under a hostel.

    `occupied` is a cached counter maintained by StudentService in the same
    transaction as every student change; occupancy queries recompute it.
    """
    account = models.ForeignKey(Account, on_delete=models.CASCADE, related_name='rooms')
    hostel = models.ForeignKey(Hostel, on_delete=models.SET_NULL, related_name='rooms', null=True, blank=True)
    number = models.CharField(max_length=20, help_text="e.g., 'A-101'")
    floor = models.CharField(max_length=20, blank=True)
    capacity = models.PositiveIntegerField(validators=[MinValueValidator(1)], help_text="Number of beds")
    occupied = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['number']
        verbose_name = "Room"
        verbose_name_plural = "Rooms"
        constraints = [
            models.UniqueConstraint(fields=['account', 'number'], name='unique_room_number_per_owner'),
        ]
        indexes = [
            models.Index(fields=['account', 'hostel'], name='room_account_hostel_idx'),
        ]

    def __str__(self):
        return f"Room {self.number} ({self.occupied}/{self.capacity})"

    @property
    def status(self):
        return room_status(self.capacity, self.occupied)

    def count_active_students(self) -> int:
        return self.students.exclude(status=StudentStatus.INACTIVE).count()
