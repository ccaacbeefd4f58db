from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone
from accounts.models import Account
from students.models import Student
from core.constants import PaymentMethod


class Payment(models.Model):
    """
    Rent payment for one student and one month.

    `month` is the canonical "<MonthName> <Year>" key from core.months; it is
    the reconciliation join key together with the student.
    """
    account = models.ForeignKey(Account, on_delete=models.CASCADE, related_name='payments')
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name='payments')
    student_name = models.CharField(max_length=255, help_text="Name at the time of payment")
    month = models.CharField(max_length=20, help_text="e.g. 'March 2025'")
    amount = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    method = models.CharField(max_length=10, choices=PaymentMethod.CHOICES, default=PaymentMethod.CASH)
    notes = models.TextField(blank=True)
    date = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['-date', 'id']
        verbose_name = "Payment"
        verbose_name_plural = "Payments"
        indexes = [
            models.Index(fields=['account', 'month'], name='payment_account_month_idx'),
            models.Index(fields=['student', 'month'], name='payment_student_month_idx'),
        ]

    def __str__(self):
        return f"{self.student_name} - {self.month} - {self.amount}"
