# mess/tests.py

from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APITestCase

from accounts.models import Account
from users.models import User
from core.constants import UserRole, Weekday
from core.context import OwnerContext
from core.exceptions import ValidationError
from .models import MessMenuEntry
from .services import MessMenuService


class MessMenuServiceTestCase(TestCase):
    """Test cases for the weekly mess menu"""

    def setUp(self):
        self.account = Account.objects.create(name='Owner One')
        self.ctx = OwnerContext(account_id=self.account.id)
        self.service = MessMenuService()

    def test_weekly_menu_has_every_day(self):
        menu = self.service.weekly_menu(self.ctx)
        self.assertEqual(list(menu), Weekday.ORDER)
        self.assertEqual(menu['Monday'], {'breakfast': '', 'lunch': '', 'snacks': '', 'dinner': ''})

    def test_set_meal_merges(self):
        self.service.set_meal(self.ctx, 'monday', 'Breakfast', 'Poha')
        self.service.set_meal(self.ctx, 'Monday', 'dinner', ' Dal Rice ')

        monday = self.service.day_menu(self.ctx, 'Monday')
        self.assertEqual(monday['breakfast'], 'Poha')
        self.assertEqual(monday['dinner'], 'Dal Rice')
        self.assertEqual(monday['lunch'], '')
        self.assertEqual(MessMenuEntry.objects.filter(account=self.account).count(), 1)

    def test_unknown_day_or_meal(self):
        with self.assertRaises(ValidationError) as ctx:
            self.service.set_meal(self.ctx, 'Funday', 'lunch', 'x')
        self.assertEqual(ctx.exception.code, 'INVALID_DAY')
        with self.assertRaises(ValidationError) as ctx:
            self.service.set_meal(self.ctx, 'Monday', 'brunch', 'x')
        self.assertEqual(ctx.exception.code, 'INVALID_MEAL')

    def test_day_menu_defaults_to_today(self):
        self.assertIn(self.service.day_menu(self.ctx)['day'], Weekday.ORDER)


class MenuSubscriptionTestCase(TestCase):
    """Test cases for live menu subscriptions"""

    def setUp(self):
        self.account = Account.objects.create(name='Owner One')
        self.ctx = OwnerContext(account_id=self.account.id)
        self.service = MessMenuService()
        self.snapshots = []

    def test_initial_snapshot_and_updates(self):
        subscription = self.service.subscribe(self.ctx, self.snapshots.append)
        self.addCleanup(subscription.dispose)
        self.assertEqual(len(self.snapshots), 1)
        self.assertEqual(self.snapshots[0]['Tuesday']['lunch'], '')

        self.service.set_meal(self.ctx, 'Tuesday', 'lunch', 'Rajma Chawal')
        self.assertEqual(len(self.snapshots), 2)
        self.assertEqual(self.snapshots[-1]['Tuesday']['lunch'], 'Rajma Chawal')

    def test_other_owner_changes_are_ignored(self):
        subscription = self.service.subscribe(self.ctx, self.snapshots.append)
        self.addCleanup(subscription.dispose)
        other_ctx = OwnerContext(account_id=Account.objects.create(name='Owner Two').id)
        self.service.set_meal(other_ctx, 'Monday', 'lunch', 'Biryani')
        self.assertEqual(len(self.snapshots), 1)

    def test_no_updates_after_dispose(self):
        subscription = self.service.subscribe(self.ctx, self.snapshots.append)
        subscription.dispose()
        subscription.dispose()
        self.assertTrue(subscription.disposed)

        self.service.set_meal(self.ctx, 'Monday', 'lunch', 'Biryani')
        self.assertEqual(len(self.snapshots), 1)

    def test_context_manager_disposes(self):
        with self.service.subscribe(self.ctx, self.snapshots.append) as subscription:
            self.service.set_meal(self.ctx, 'Monday', 'snacks', 'Samosa')
        self.assertTrue(subscription.disposed)
        self.service.set_meal(self.ctx, 'Monday', 'snacks', 'Pakora')
        self.assertEqual(len(self.snapshots), 2)

    def test_delete_is_pushed(self):
        self.service.set_meal(self.ctx, 'Friday', 'dinner', 'Paneer')
        with self.service.subscribe(self.ctx, self.snapshots.append):
            MessMenuEntry.objects.filter(account=self.account).get().delete()
        self.assertEqual(self.snapshots[-1]['Friday']['dinner'], '')


class MessMenuAPITestCase(APITestCase):
    """Test cases for the mess menu API"""

    def setUp(self):
        self.account = Account.objects.create(name='Owner One')
        self.owner = User.objects.create_user(
            username='owner@example.com', email='owner@example.com', password='testpass123',
            account=self.account, role=UserRole.OWNER
        )
        self.resident = User.objects.create_user(
            username='student@example.com', email='student@example.com', password='testpass123',
            account=self.account, role=UserRole.STUDENT
        )

    def test_owner_sets_meal_and_student_reads(self):
        self.client.force_authenticate(user=self.owner)
        response = self.client.post(reverse('mess-menu-set-meal'), {
            'day': 'Wednesday', 'meal': 'breakfast', 'content': 'Idli'
        }, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['breakfast'], 'Idli')

        self.client.force_authenticate(user=self.resident)
        response = self.client.get(reverse('mess-menu-detail', kwargs={'day': 'wednesday'}))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['day'], 'Wednesday')
        self.assertEqual(response.data['breakfast'], 'Idli')

        response = self.client.get(reverse('mess-menu-list'))
        self.assertEqual(len(response.data), 7)

    def test_student_cannot_edit(self):
        self.client.force_authenticate(user=self.resident)
        response = self.client.post(reverse('mess-menu-set-meal'), {
            'day': 'Monday', 'meal': 'lunch', 'content': 'x'
        }, format='json')
        self.assertEqual(response.status_code, 403)

    def test_unknown_day(self):
        self.client.force_authenticate(user=self.owner)
        response = self.client.get(reverse('mess-menu-detail', kwargs={'day': 'funday'}))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['code'], 'INVALID_DAY')
