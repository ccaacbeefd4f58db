"""
Dashboard service - home screen figures for owners and students.
"""
from core.context import OwnerContext
from core.months import current_month
from core.services import BaseService
from expenses.repositories import ExpenseRepository
from mess.services import MessMenuService
from occupancy.services import OccupancyService
from payments.services import PaymentService


class DashboardService(BaseService):
    """Service for dashboard aggregates"""

    def __init__(self):
        super().__init__()
        self.occupancy_service = OccupancyService()
        self.payment_service = PaymentService()
        self.expense_repo = ExpenseRepository()
        self.menu_service = MessMenuService()

    def owner_home(self, ctx: OwnerContext) -> dict:
        """
        Students against capacity, full rooms and fee collection for the
        current month. All three percentages are 0 when their denominator is 0.
        """
        month = current_month()
        occupancy = self.occupancy_service.summary(ctx)
        reconciliation = self.payment_service.reconcile_month(ctx, month)
        expenses = self.expense_repo.fetch_month(ctx, month)

        return {
            'month': month,
            'students': {
                'total': occupancy.active_students,
                'capacity': occupancy.total_capacity,
                'percentage': occupancy.occupancy_percentage,
            },
            'rooms': {
                'total': occupancy.total_rooms,
                'full': occupancy.full_rooms,
                'percentage': occupancy.full_rooms_percentage,
            },
            'fees': {
                'collected': reconciliation.paid_count,
                'total': reconciliation.total_active,
                'percentage': reconciliation.collection_percentage,
                'amount': reconciliation.collected_amount,
            },
            'expenses': {
                'total': sum((expense.amount for expense in expenses), 0),
                'count': len(expenses),
            },
        }

    def student_home(self, ctx: OwnerContext) -> dict:
        """Minimal dashboard for student users: greeting and today's menu"""
        user = ctx.user
        return {
            'name': user.get_full_name() or user.email,
            'month': current_month(),
            'today_menu': self.menu_service.day_menu(ctx),
        }
