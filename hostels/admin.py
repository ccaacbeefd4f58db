from django.contrib import admin
from .models import Hostel


@admin.register(Hostel)
class HostelAdmin(admin.ModelAdmin):
    list_display = ['name', 'account', 'contact', 'capacity', 'created_at']
    list_filter = ['account', 'created_at']
    search_fields = ['name', 'address', 'contact']
