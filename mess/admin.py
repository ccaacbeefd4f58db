from django.contrib import admin
from .models import MessMenuEntry


@admin.register(MessMenuEntry)
class MessMenuEntryAdmin(admin.ModelAdmin):
    list_display = ['day', 'account', 'updated_at']
    list_filter = ['day', 'account']
