"""
Payment repository - Data access layer for Payment domain.
"""
from typing import List
from django.db.models import QuerySet
from core.context import OwnerContext
from core.repositories import BaseRepository, storage_errors
from .models import Payment


class PaymentRepository(BaseRepository[Payment]):
    """Repository for Payment model"""

    def __init__(self):
        super().__init__(Payment)

    def get_by_month(self, ctx: OwnerContext, month: str) -> QuerySet[Payment]:
        return self.list_by_owner(ctx, month=month).order_by('id')

    @storage_errors
    def fetch_month(self, ctx: OwnerContext, month: str) -> List[Payment]:
        """All payments of one month, evaluated"""
        return list(self.get_by_month(ctx, month))

    def get_for_student(self, ctx: OwnerContext, student_id: int, month: str) -> QuerySet[Payment]:
        return self.list_by_owner(ctx, student_id=student_id, month=month).order_by('id')
