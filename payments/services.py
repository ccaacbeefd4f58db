"""
Payment service - Business logic layer for Payment domain.
Month reconciliation, recording and deleting payments.
"""
from typing import List, Optional
from django.db import transaction
from django.utils.text import slugify
from core.constants import PaymentMethod
from core.context import OwnerContext
from core.coordinator import payment_toggles, Result
from core.dto import PaymentDTO
from core.exceptions import DuplicatePaymentError, ValidationError
from core.months import current_month, normalize_month, shift_month
from core.services import BaseService
from core.validators import AmountValidator, RequiredFieldsValidator
from students.repositories import StudentRepository
from .models import Payment
from .reconciler import reconcile, Reconciliation
from .repositories import PaymentRepository


class PaymentService(BaseService):
    """Service for payment-related business logic"""

    def __init__(self):
        super().__init__()
        self.payment_repo = PaymentRepository()
        self.student_repo = StudentRepository()

    @staticmethod
    def resolve_month(month: Optional[str] = None, offset=0) -> str:
        """Canonical month key, defaulting to the current month, moved by offset months"""
        key = normalize_month(month) if month else current_month()
        try:
            offset = int(offset or 0)
        except (TypeError, ValueError):
            raise ValidationError(message="Month offset must be a whole number", code="INVALID_MONTH")
        return shift_month(key, offset) if offset else key

    @staticmethod
    def _guard_key(student_id, month: str) -> str:
        return f"student-{student_id}:{slugify(month)}"

    def reconcile_month(self, ctx: OwnerContext, month: Optional[str] = None) -> Reconciliation:
        """
        Paid/Unpaid status of every student for month.

        Students and the month's payments are fetched by two independent
        queries; both are fully evaluated before they are joined.
        """
        month = self.resolve_month(month)
        students = self.student_repo.fetch(ctx)
        payments = self.payment_repo.fetch_month(ctx, month)
        reconciliation = reconcile(students, payments, month)
        self.log_info(
            f"Reconciled {month}: {reconciliation.paid_count}/{reconciliation.total_active} paid",
            account_id=ctx.account_id
        )
        return reconciliation

    def _validate(self, data: PaymentDTO) -> dict:
        RequiredFieldsValidator.validate(vars(data), ['student_id'])
        method = data.method or PaymentMethod.CASH
        if method not in dict(PaymentMethod.CHOICES):
            raise ValidationError(
                message=f"Unknown payment method '{method}'",
                code="INVALID_METHOD",
                details={"field": "method"}
            )
        return {
            'amount': AmountValidator.validate_amount(data.amount),
            'month': self.resolve_month(data.month),
            'method': method,
            'notes': (data.notes or '').strip(),
        }

    def _create_payment(self, ctx: OwnerContext, student_id, cleaned: dict) -> Payment:
        with transaction.atomic():
            student = self.student_repo.get_for_owner(ctx, student_id, for_update=True)
            existing = self.payment_repo.get_for_student(ctx, student.id, cleaned['month']).first()
            if existing is not None:
                raise DuplicatePaymentError(
                    message=f"{student.name} has already paid for {cleaned['month']}",
                    details={"payment_id": existing.id}
                )
            payment = self.payment_repo.create(
                ctx, student=student, student_name=student.name, **cleaned
            )
        self.log_info(
            f"Payment recorded: {payment.student_name} {payment.month}",
            payment_id=payment.id, amount=str(payment.amount)
        )
        return payment

    def record_payment(self, ctx: OwnerContext, data: PaymentDTO,
                       apply=None, revert=None) -> Optional[Result]:
        """
        Record a payment for a student and month.

        Returns:
            Ok(payment) / Err(error), or None while another payment change
            for the same student and month is in flight

        Raises:
            ValidationError: Before anything is written, for bad input
        """
        cleaned = self._validate(data)
        return payment_toggles.run(
            self._guard_key(data.student_id, cleaned['month']),
            lambda: self._create_payment(ctx, data.student_id, cleaned),
            apply=apply,
            revert=revert,
        )

    def _delete_payment(self, ctx: OwnerContext, payment: Payment) -> Payment:
        self.payment_repo.delete(ctx, payment.id)
        self.log_info("Payment deleted", payment_id=payment.id, student_id=payment.student_id, month=payment.month)
        return payment

    def delete_payment(self, ctx: OwnerContext, payment_id: int,
                       apply=None, revert=None) -> Optional[Result]:
        """
        Delete a payment; the student reconciles as Unpaid for that month again.

        Returns:
            Ok(deleted payment) / Err(error), or None while in flight
        """
        payment = self.payment_repo.get_for_owner(ctx, payment_id)
        return payment_toggles.run(
            self._guard_key(payment.student_id, payment.month),
            lambda: self._delete_payment(ctx, payment),
            apply=apply,
            revert=revert,
        )

    def get_payment(self, ctx: OwnerContext, payment_id: int) -> Payment:
        return self.payment_repo.get_for_owner(ctx, payment_id)

    def list_payments(self, ctx: OwnerContext, month: Optional[str] = None) -> List[Payment]:
        return self.payment_repo.fetch_month(ctx, self.resolve_month(month))
