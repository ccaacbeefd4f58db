"""
Expense repository - Data access layer for Expense domain.
"""
from decimal import Decimal
from typing import List
from django.db.models import Sum, QuerySet
from core.context import OwnerContext
from core.repositories import BaseRepository, storage_errors
from .models import Expense


class ExpenseRepository(BaseRepository[Expense]):
    """Repository for Expense model"""

    def __init__(self):
        super().__init__(Expense)

    def get_by_month(self, ctx: OwnerContext, month: str) -> QuerySet[Expense]:
        """Expenses of one month, newest first"""
        return self.list_by_owner(ctx, month=month).order_by('-date', '-id')

    @storage_errors
    def fetch_month(self, ctx: OwnerContext, month: str) -> List[Expense]:
        return list(self.get_by_month(ctx, month))

    @storage_errors
    def total_by_category(self, ctx: OwnerContext, month: str) -> dict:
        rows = (
            self.list_by_owner(ctx, month=month)
            .values('category')
            .annotate(total=Sum('amount'))
        )
        return {row['category']: row['total'] or Decimal('0') for row in rows}
