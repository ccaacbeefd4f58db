"""
Expense service - Business logic layer for Expense domain.
"""
from decimal import Decimal
from typing import List, Optional
from django.utils import timezone
from core.constants import ExpenseCategory
from core.context import OwnerContext
from core.dto import ExpenseDTO
from core.exceptions import ValidationError
from core.months import current_month, format_month, normalize_month
from core.services import BaseService
from core.validators import AmountValidator
from .models import Expense
from .repositories import ExpenseRepository


class ExpenseService(BaseService):
    """Service for expense-related business logic"""

    def __init__(self):
        super().__init__()
        self.expense_repo = ExpenseRepository()

    @staticmethod
    def categories() -> List[dict]:
        return ExpenseCategory.catalogue()

    def list_month(self, ctx: OwnerContext, month: Optional[str] = None) -> List[Expense]:
        """Expenses of month (default current), newest first"""
        month = normalize_month(month) if month else current_month()
        return self.expense_repo.fetch_month(ctx, month)

    @staticmethod
    def total(expenses) -> Decimal:
        return sum((expense.amount for expense in expenses), Decimal('0'))

    def summary(self, ctx: OwnerContext, month: Optional[str] = None) -> dict:
        """Month total and per-category totals in catalogue order"""
        month = normalize_month(month) if month else current_month()
        by_category = self.expense_repo.total_by_category(ctx, month)
        return {
            'month': month,
            'total': sum(by_category.values(), Decimal('0')),
            'categories': [
                {**entry, 'total': by_category.get(entry['name'], Decimal('0'))}
                for entry in ExpenseCategory.catalogue()
            ],
        }

    def add_expense(self, ctx: OwnerContext, data: ExpenseDTO) -> Expense:
        """
        Record an expense. Its month key follows the expense date unless given.

        Raises:
            ValidationError: Missing or non-positive amount, unknown category
        """
        amount = AmountValidator.validate_amount(data.amount)
        category = data.category or ExpenseCategory.OTHER
        if category not in ExpenseCategory.META:
            raise ValidationError(
                message=f"Unknown category '{category}'",
                code="INVALID_CATEGORY",
                details={"field": "category"}
            )
        now = timezone.now()
        expense = self.expense_repo.create(
            ctx,
            amount=amount,
            category=category,
            note=(data.note or '').strip(),
            date=now,
            month=normalize_month(data.month) if data.month else format_month(now),
        )
        self.log_info(f"Expense added: {category} {amount}", expense_id=expense.id, month=expense.month)
        return expense

    def delete_expense(self, ctx: OwnerContext, expense_id: int) -> None:
        self.expense_repo.delete(ctx, expense_id)
        self.log_info("Expense deleted", expense_id=expense_id, account_id=ctx.account_id)
