from django.contrib import admin
from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ['student_name', 'month', 'amount', 'method', 'date', 'account']
    list_filter = ['month', 'method', 'account']
    search_fields = ['student_name', 'student__phone', 'notes']
    date_hierarchy = 'date'
