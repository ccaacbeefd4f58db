# expenses/tests.py

from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APITestCase

from accounts.models import Account
from users.models import User
from core.constants import ExpenseCategory, UserRole
from core.context import OwnerContext
from core.dto import ExpenseDTO
from core.exceptions import ValidationError
from core.months import current_month
from .models import Expense
from .services import ExpenseService


class ExpenseServiceTestCase(TestCase):
    """Test cases for monthly expenses"""

    def setUp(self):
        self.account = Account.objects.create(name='Owner One')
        self.ctx = OwnerContext(account_id=self.account.id)
        self.service = ExpenseService()

    def test_add_expense_defaults_to_current_month(self):
        expense = self.service.add_expense(self.ctx, ExpenseDTO(
            amount='1200', category=ExpenseCategory.ELECTRICITY, note=' bill '
        ))
        self.assertEqual(expense.month, current_month())
        self.assertEqual(expense.note, 'bill')
        self.assertEqual(expense.category_meta['icon'], 'flash')

    def test_explicit_month(self):
        expense = self.service.add_expense(self.ctx, ExpenseDTO(amount='300', month='march 2025'))
        self.assertEqual(expense.month, 'March 2025')
        self.assertEqual(expense.category, ExpenseCategory.OTHER)

    def test_validation(self):
        for amount in [None, '', '0', '-1']:
            with self.assertRaises(ValidationError):
                self.service.add_expense(self.ctx, ExpenseDTO(amount=amount))
        with self.assertRaises(ValidationError) as ctx:
            self.service.add_expense(self.ctx, ExpenseDTO(amount='10', category='Rent'))
        self.assertEqual(ctx.exception.code, 'INVALID_CATEGORY')
        self.assertFalse(Expense.objects.exists())

    def test_month_list_total_and_summary(self):
        self.service.add_expense(self.ctx, ExpenseDTO(amount='1000', category=ExpenseCategory.KITCHEN, month='March 2025'))
        self.service.add_expense(self.ctx, ExpenseDTO(amount='500', category=ExpenseCategory.KITCHEN, month='March 2025'))
        self.service.add_expense(self.ctx, ExpenseDTO(amount='700', category=ExpenseCategory.INTERNET, month='March 2025'))
        self.service.add_expense(self.ctx, ExpenseDTO(amount='900', month='February 2025'))

        march = self.service.list_month(self.ctx, 'March 2025')
        self.assertEqual(len(march), 3)
        self.assertEqual(self.service.total(march), Decimal('2200'))

        summary = self.service.summary(self.ctx, 'March 2025')
        self.assertEqual(summary['total'], Decimal('2200'))
        totals = {entry['name']: entry['total'] for entry in summary['categories']}
        self.assertEqual(totals[ExpenseCategory.KITCHEN], Decimal('1500'))
        self.assertEqual(totals[ExpenseCategory.ELECTRICITY], Decimal('0'))
        self.assertEqual([entry['name'] for entry in summary['categories']],
                         [value for value, _ in ExpenseCategory.CHOICES])

    def test_owner_isolation(self):
        self.service.add_expense(self.ctx, ExpenseDTO(amount='100', month='March 2025'))
        other_ctx = OwnerContext(account_id=Account.objects.create(name='Owner Two').id)
        self.assertEqual(self.service.list_month(other_ctx, 'March 2025'), [])


class ExpenseAPITestCase(APITestCase):
    """Test cases for the expenses API"""

    def setUp(self):
        self.account = Account.objects.create(name='Owner One')
        self.owner = User.objects.create_user(
            username='owner@example.com', email='owner@example.com', password='testpass123',
            account=self.account, role=UserRole.OWNER
        )
        self.client.force_authenticate(user=self.owner)

    def test_create_list_delete(self):
        response = self.client.post(reverse('expense-list'), {
            'amount': '1500', 'category': 'Maintenance', 'note': 'Plumber', 'month': 'March 2025'
        }, format='json')
        self.assertEqual(response.status_code, 201)
        expense_id = response.data['id']

        response = self.client.get(reverse('expense-list'), {'month': 'March 2025'})
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['total'], Decimal('1500'))

        response = self.client.delete(reverse('expense-detail', args=[expense_id]))
        self.assertEqual(response.status_code, 204)

    def test_missing_amount(self):
        response = self.client.post(reverse('expense-list'), {'category': 'Kitchen'}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['code'], 'AMOUNT_REQUIRED')

    def test_categories(self):
        response = self.client.get(reverse('expense-categories'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.data), len(ExpenseCategory.CHOICES))
        self.assertEqual(response.data[0]['name'], 'Electricity')

    def test_summary(self):
        Expense.objects.create(account=self.account, amount=Decimal('250'), category='Internet', month='March 2025')
        response = self.client.get(reverse('expense-summary'), {'month': 'March 2025'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['total'], Decimal('250'))
