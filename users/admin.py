from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User, UserPreference


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Owners sign up through the API; student users are created here and
    attached to the owner's account with role STUDENT.
    """
    list_display = ['username', 'email', 'account', 'role', 'is_active', 'is_staff', 'date_joined']
    list_filter = ['role', 'is_active', 'is_staff', 'account']
    search_fields = ['username', 'email', 'account__name', 'phone']

    fieldsets = BaseUserAdmin.fieldsets + (
        ('Account Information', {
            'fields': ('account', 'role', 'phone'),
            'description': 'Role OWNER manages the account; role STUDENT only sees the student dashboard.'
        }),
    )

    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ('Account Information', {
            'fields': ('account', 'role', 'phone'),
        }),
    )

    def get_readonly_fields(self, request, obj=None):
        """Make account readonly for existing users to prevent breaking relationships"""
        readonly = list(super().get_readonly_fields(request, obj))
        if obj:  # Editing existing user
            readonly.append('account')
        return readonly


@admin.register(UserPreference)
class UserPreferenceAdmin(admin.ModelAdmin):
    list_display = ['user', 'theme', 'language', 'onboarding_complete', 'updated_at']
    list_filter = ['theme', 'language']
