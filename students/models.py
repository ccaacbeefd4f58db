from django.db import models
from django.core.validators import MinValueValidator
from accounts.models import Account
from rooms.models import Room
from core.constants import StudentStatus


class Student(models.Model):
    """Student living in one of the owner's rooms"""
    account = models.ForeignKey(Account, on_delete=models.CASCADE, related_name='students')
    name = models.CharField(max_length=255)
    phone = models.CharField(max_length=10)
    parent_phone = models.CharField(max_length=10, blank=True)
    national_id = models.CharField(max_length=12, blank=True, help_text="12-digit identity number")
    room = models.ForeignKey(Room, on_delete=models.PROTECT, related_name='students', null=True, blank=True)
    bed = models.CharField(max_length=20, blank=True, help_text="Bed label, e.g. 'B'")
    rent = models.DecimalField(max_digits=10, decimal_places=2, default=0, validators=[MinValueValidator(0)])
    status = models.CharField(max_length=10, choices=StudentStatus.CHOICES, default=StudentStatus.ACTIVE)

    # Download URLs from blob storage
    profile_image = models.URLField(max_length=500, blank=True)
    id_front_image = models.URLField(max_length=500, blank=True)
    id_back_image = models.URLField(max_length=500, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        verbose_name = "Student"
        verbose_name_plural = "Students"
        indexes = [
            models.Index(fields=['account', 'status'], name='student_account_status_idx'),
            models.Index(fields=['account', 'room'], name='student_account_room_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.phone})"

    @property
    def is_active(self):
        return self.status != StudentStatus.INACTIVE

    @property
    def room_number(self):
        """Display number of the assigned room"""
        return self.room.number if self.room_id else ''
