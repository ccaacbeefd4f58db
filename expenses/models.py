from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone
from accounts.models import Account
from core.constants import ExpenseCategory


class Expense(models.Model):
    """Hostel running cost, partitioned by month key like payments"""
    account = models.ForeignKey(Account, on_delete=models.CASCADE, related_name='expenses')
    amount = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    category = models.CharField(max_length=20, choices=ExpenseCategory.CHOICES, default=ExpenseCategory.OTHER)
    note = models.TextField(blank=True)
    date = models.DateTimeField(default=timezone.now)
    month = models.CharField(max_length=20, help_text="e.g. 'March 2025'")

    class Meta:
        ordering = ['-date']
        verbose_name = "Expense"
        verbose_name_plural = "Expenses"
        indexes = [
            models.Index(fields=['account', 'month'], name='expense_account_month_idx'),
        ]

    def __str__(self):
        return f"{self.category} - {self.amount} ({self.month})"

    @property
    def category_meta(self):
        """Icon and colours for the category"""
        return ExpenseCategory.META.get(self.category, ExpenseCategory.META[ExpenseCategory.OTHER])
