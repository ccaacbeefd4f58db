from django.contrib import admin
from .models import Student


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ['name', 'phone', 'room', 'bed', 'rent', 'status', 'account', 'created_at']
    list_filter = ['status', 'account']
    search_fields = ['name', 'phone', 'national_id', 'room__number']
    readonly_fields = ['created_at', 'updated_at']
