from django.db import models
from accounts.models import Account
from core.constants import Weekday


class MessMenuEntry(models.Model):
    """One day of an owner's weekly mess menu. Each meal is free text."""
    account = models.ForeignKey(Account, on_delete=models.CASCADE, related_name='mess_menu')
    day = models.CharField(max_length=10, choices=Weekday.CHOICES)
    breakfast = models.TextField(blank=True)
    lunch = models.TextField(blank=True)
    snacks = models.TextField(blank=True)
    dinner = models.TextField(blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Mess Menu Entry"
        verbose_name_plural = "Mess Menu Entries"
        constraints = [
            models.UniqueConstraint(fields=['account', 'day'], name='unique_menu_day_per_owner'),
        ]

    def __str__(self):
        return f"{self.day} menu ({self.account_id})"
