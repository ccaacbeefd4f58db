from django.contrib import admin
from .models import Account


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    """
    Owner accounts.

    Accounts are normally created by owner sign-up; every hostel, room,
    student, payment, expense and menu entry belongs to exactly one account.
    """
    list_display = ['name', 'phone', 'is_active', 'owner_count', 'student_count', 'created_at']
    list_filter = ['is_active', 'created_at']
    search_fields = ['name', 'phone']
    list_editable = ['is_active']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'is_active'),
        }),
        ('Contact Information (Optional)', {
            'fields': ('phone', 'hostel_details')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    readonly_fields = ['created_at', 'updated_at']

    def owner_count(self, obj):
        """Show number of owners for this account"""
        return obj.users.filter(role='OWNER').count()
    owner_count.short_description = 'Owners'

    def student_count(self, obj):
        return obj.students.count()
    student_count.short_description = 'Students'
