from django.contrib import admin
from .models import Room


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ['number', 'account', 'hostel', 'floor', 'capacity', 'occupied', 'status']
    list_filter = ['account', 'hostel']
    search_fields = ['number', 'floor']
    readonly_fields = ['occupied']
