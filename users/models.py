from django.contrib.auth.models import AbstractUser
from django.conf import settings
from django.db import models
from accounts.models import Account
from core.constants import UserRole, Theme, Language


class User(AbstractUser):
    """Custom User model - Owner/Student"""
    account = models.ForeignKey(Account, on_delete=models.CASCADE, related_name='users', null=True, blank=True)
    role = models.CharField(max_length=20, choices=UserRole.CHOICES, default=UserRole.OWNER)
    phone = models.CharField(max_length=15, blank=True)

    class Meta:
        verbose_name = "User"
        verbose_name_plural = "Users"

    def __str__(self):
        return f"{self.username} ({self.get_role_display()})"


class UserPreference(models.Model):
    """Per-user key-value preferences: theme, language, first-run flag"""
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='preferences')
    theme = models.CharField(max_length=20, choices=Theme.CHOICES, default=Theme.TEAL)
    language = models.CharField(max_length=5, choices=Language.CHOICES, default=Language.ENGLISH)
    onboarding_complete = models.BooleanField(default=False, help_text="First-run onboarding seen")
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "User Preference"
        verbose_name_plural = "User Preferences"

    def __str__(self):
        return f"{self.user} - {self.theme}/{self.language}"

    @classmethod
    def for_user(cls, user):
        preferences, _ = cls.objects.get_or_create(user=user)
        return preferences
