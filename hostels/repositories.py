"""
Hostel repository - Data access layer for Hostel domain.
Follows Repository pattern for clean separation of concerns.
"""
from django.db.models import QuerySet, Count, Sum
from core.context import OwnerContext
from core.repositories import BaseRepository
from .models import Hostel


class HostelRepository(BaseRepository[Hostel]):
    """Repository for Hostel model"""

    def __init__(self):
        super().__init__(Hostel)

    def get_with_stats(self, ctx: OwnerContext) -> QuerySet[Hostel]:
        """Hostels with room count and room capacity"""
        return self.list_by_owner(ctx).annotate(
            room_count=Count('rooms'),
            room_capacity=Sum('rooms__capacity'),
        )
