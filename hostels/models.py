from django.db import models
from django.core.validators import MinValueValidator
from accounts.models import Account


class Hostel(models.Model):
    """Hostel/PG owned by an account"""
    account = models.ForeignKey(Account, on_delete=models.CASCADE, related_name='hostels')
    name = models.CharField(max_length=255)
    address = models.TextField()
    contact = models.CharField(max_length=15)
    capacity = models.PositiveIntegerField(default=0, validators=[MinValueValidator(0)], help_text="Total beds")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        verbose_name = "Hostel"
        verbose_name_plural = "Hostels"
        indexes = [
            models.Index(fields=['account', 'name'], name='hostel_account_name_idx'),
            models.Index(fields=['account', 'created_at'], name='hostel_account_created_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.account.name})"
