"""
Student repository - Data access layer for Student domain.
"""
from typing import List
from django.db.models import Q, QuerySet
from core.context import OwnerContext
from core.repositories import BaseRepository, storage_errors
from .models import Student


class StudentRepository(BaseRepository[Student]):
    """Repository for Student model"""

    def __init__(self):
        super().__init__(Student)

    def get_queryset(self) -> QuerySet[Student]:
        return Student.objects.select_related('room')

    def search(self, ctx: OwnerContext, query: str) -> QuerySet[Student]:
        """Case-insensitive match on name, phone or room number"""
        queryset = self.list_by_owner(ctx)
        query = (query or '').strip()
        if query:
            queryset = queryset.filter(
                Q(name__icontains=query) |
                Q(phone__icontains=query) |
                Q(room__number__icontains=query)
            )
        return queryset

    @storage_errors
    def fetch_assignments(self, ctx: OwnerContext, **filters) -> List[Student]:
        """
        Light fetch for occupancy math: only id, room_id and status are loaded.
        """
        return list(
            Student.objects
            .filter(**self._scope(ctx), **filters)
            .only('id', 'room_id', 'status')
        )
