from django.contrib import admin
from .models import Expense


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ['category', 'amount', 'month', 'date', 'account']
    list_filter = ['category', 'month', 'account']
    search_fields = ['note']
