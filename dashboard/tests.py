# dashboard/tests.py

from decimal import Decimal

from django.urls import reverse
from rest_framework.test import APITestCase

from accounts.models import Account
from users.models import User
from core.constants import StudentStatus, UserRole
from core.months import current_month
from expenses.models import Expense
from mess.models import MessMenuEntry
from payments.models import Payment
from rooms.models import Room
from students.models import Student


class DashboardAPITestCase(APITestCase):
    """Test cases for the role-aware home screen"""

    def setUp(self):
        self.account = Account.objects.create(name='Owner One')
        self.owner = User.objects.create_user(
            username='owner@example.com', email='owner@example.com', password='testpass123',
            account=self.account, role=UserRole.OWNER
        )

    def test_empty_owner_dashboard_has_zero_percentages(self):
        self.client.force_authenticate(user=self.owner)
        response = self.client.get(reverse('dashboard:home'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['role'], 'OWNER')
        self.assertEqual(response.data['students']['percentage'], 0.0)
        self.assertEqual(response.data['rooms']['percentage'], 0.0)
        self.assertEqual(response.data['fees']['percentage'], 0.0)

    def test_owner_dashboard(self):
        month = current_month()
        full = Room.objects.create(account=self.account, number='A-101', capacity=1, occupied=1)
        Room.objects.create(account=self.account, number='A-102', capacity=3)
        rahul = Student.objects.create(account=self.account, name='Rahul', phone='9876543210',
                                       room=full, rent=Decimal('5000'))
        Student.objects.create(account=self.account, name='Old', phone='9876543211', room=full,
                               rent=Decimal('5000'), status=StudentStatus.INACTIVE)
        Payment.objects.create(account=self.account, student=rahul, student_name='Rahul',
                               month=month, amount=Decimal('5000'))
        Expense.objects.create(account=self.account, amount=Decimal('800'), month=month)

        self.client.force_authenticate(user=self.owner)
        data = self.client.get(reverse('dashboard:home')).data

        self.assertEqual(data['month'], month)
        self.assertEqual(data['students'], {'total': 1, 'capacity': 4, 'percentage': 25.0})
        self.assertEqual(data['rooms'], {'total': 2, 'full': 1, 'percentage': 50.0})
        self.assertEqual(data['fees']['collected'], 1)
        self.assertEqual(data['fees']['percentage'], 100.0)
        self.assertEqual(data['expenses']['count'], 1)

    def test_student_dashboard(self):
        resident = User.objects.create_user(
            username='student@example.com', email='student@example.com', password='testpass123',
            first_name='Rahul', account=self.account, role=UserRole.STUDENT
        )
        self.client.force_authenticate(user=resident)
        data = self.client.get(reverse('dashboard:home')).data

        self.assertEqual(data['role'], 'STUDENT')
        self.assertEqual(data['name'], 'Rahul')
        self.assertIn(data['today_menu']['day'], [choice for choice, _ in MessMenuEntry._meta.get_field('day').choices])

    def test_requires_login(self):
        self.assertEqual(self.client.get(reverse('dashboard:home')).status_code, 401)
