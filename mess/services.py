"""
Mess menu service - weekly menu snapshot, per-meal updates and live subscriptions.
"""
from typing import Callable, Optional
from django.utils import timezone
from core.constants import Meal, Weekday
from core.context import OwnerContext
from core.exceptions import ValidationError
from core.services import BaseService
from .repositories import MessMenuRepository
from .subscriptions import MenuSubscription


class MessMenuService(BaseService):
    """Service for the owner's weekly mess menu"""

    def __init__(self):
        super().__init__()
        self.menu_repo = MessMenuRepository()

    @staticmethod
    def normalize_day(day: str) -> str:
        for name in Weekday.ORDER:
            if name.lower() == (day or '').strip().lower():
                return name
        raise ValidationError(message=f"Unknown day '{day}'", code="INVALID_DAY", details={"field": "day"})

    @staticmethod
    def normalize_meal(meal: str) -> str:
        meal = (meal or '').strip().lower()
        if meal not in Meal.ORDER:
            raise ValidationError(message=f"Unknown meal '{meal}'", code="INVALID_MEAL", details={"field": "meal"})
        return meal

    def weekly_menu(self, ctx: OwnerContext) -> dict:
        """All seven days in week order; days never set come back empty"""
        entries = {entry.day: entry for entry in self.menu_repo.fetch(ctx)}
        return {
            day: {meal: getattr(entries.get(day), meal, '') for meal in Meal.ORDER}
            for day in Weekday.ORDER
        }

    def day_menu(self, ctx: OwnerContext, day: Optional[str] = None) -> dict:
        """Menu of day, default today"""
        day = self.normalize_day(day) if day else Weekday.ORDER[timezone.localdate().weekday()]
        return {'day': day, **self.weekly_menu(ctx)[day]}

    def set_meal(self, ctx: OwnerContext, day: str, meal: str, content: str):
        day = self.normalize_day(day)
        meal = self.normalize_meal(meal)
        entry = self.menu_repo.upsert_meal(ctx, day, meal, (content or '').strip())
        self.log_info(f"Menu updated: {day} {meal}", account_id=ctx.account_id)
        return entry

    def subscribe(self, ctx: OwnerContext, callback: Callable[[dict], None]) -> MenuSubscription:
        """
        Push the weekly menu to callback now and after every change.
        The caller owns the subscription and must dispose() it.
        """
        subscription = MenuSubscription(
            account_id=ctx.account_id,
            callback=callback,
            snapshot=lambda: self.weekly_menu(ctx),
        )
        return subscription.start()
