from django.db import models


class Account(models.Model):
    """Owner account - root scope for all hostel data"""
    name = models.CharField(max_length=255, help_text="Owner/Business name")
    phone = models.CharField(max_length=15, blank=True)
    hostel_details = models.TextField(blank=True, help_text="Free-text hostel details given at sign-up")
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Account"
        verbose_name_plural = "Accounts"
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    @property
    def owner(self):
        """Get the owner user (first user with OWNER role)"""
        return self.users.filter(role='OWNER').first()
