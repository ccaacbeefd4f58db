"""
Mess menu repository - Data access layer for the weekly menu.
"""
from django.db import transaction
from core.context import OwnerContext
from core.repositories import BaseRepository, storage_errors
from .models import MessMenuEntry


class MessMenuRepository(BaseRepository[MessMenuEntry]):
    """Repository for MessMenuEntry model"""

    def __init__(self):
        super().__init__(MessMenuEntry)

    @storage_errors
    def upsert_meal(self, ctx: OwnerContext, day: str, meal: str, content: str) -> MessMenuEntry:
        """
        Set one meal of one day. Other meals and days are left untouched.
        """
        with transaction.atomic():
            entry, created = MessMenuEntry.objects.select_for_update().get_or_create(
                day=day, defaults={meal: content}, **self._scope(ctx)
            )
            if not created:
                setattr(entry, meal, content)
                entry.save(update_fields=[meal, 'updated_at'])
        return entry
