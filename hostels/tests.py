# hostels/tests.py

from unittest import mock

from django.db import DatabaseError
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APITestCase

from accounts.models import Account
from users.models import User
from core.constants import UserRole
from core.context import OwnerContext
from core.dto import HostelDTO
from core.exceptions import ValidationError
from rooms.models import Room
from .models import Hostel
from .services import HostelService


class HostelServiceTestCase(TestCase):
    """Test cases for hostel management"""

    def setUp(self):
        self.account = Account.objects.create(name='Owner One')
        self.ctx = OwnerContext(account_id=self.account.id)
        self.service = HostelService()

    def test_create_and_list_with_stats(self):
        hostel = self.service.create_hostel(self.ctx, HostelDTO(
            name=' Sunrise PG ', address='Main Road', contact='9876543210', capacity='20'
        ))
        self.assertEqual(hostel.name, 'Sunrise PG')
        self.assertEqual(hostel.capacity, 20)
        Room.objects.create(account=self.account, hostel=hostel, number='A-101', capacity=2)
        Room.objects.create(account=self.account, hostel=hostel, number='A-102', capacity=3)

        listed = self.service.list_hostels(self.ctx)
        self.assertEqual(len(listed), 1)
        self.assertEqual(listed[0].room_count, 2)
        self.assertEqual(listed[0].room_capacity, 5)

    def test_required_fields(self):
        with self.assertRaises(ValidationError) as ctx:
            self.service.create_hostel(self.ctx, HostelDTO(name='Sunrise', capacity=10))
        self.assertEqual(ctx.exception.details['missing'], ['address', 'contact'])

    def test_delete_keeps_rooms(self):
        hostel = Hostel.objects.create(account=self.account, name='Sunrise', address='x', contact='9876543210')
        room = Room.objects.create(account=self.account, hostel=hostel, number='A-101', capacity=2)
        self.service.delete_hostel(self.ctx, hostel.id)

        room.refresh_from_db()
        self.assertIsNone(room.hostel_id)


class HostelAPITestCase(APITestCase):
    """Test cases for the hostels API"""

    def setUp(self):
        self.account = Account.objects.create(name='Owner One')
        self.owner = User.objects.create_user(
            username='owner@example.com', email='owner@example.com', password='testpass123',
            account=self.account, role=UserRole.OWNER
        )
        self.client.force_authenticate(user=self.owner)
        self.payload = {'name': 'Sunrise', 'address': 'Main Road', 'contact': '9876543210', 'capacity': 10}

    def test_crud(self):
        response = self.client.post(reverse('hostel-list'), self.payload, format='json')
        self.assertEqual(response.status_code, 201)
        hostel_id = response.data['id']

        response = self.client.patch(reverse('hostel-detail', args=[hostel_id]), {'capacity': 12}, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['capacity'], 12)
        self.assertEqual(response.data['name'], 'Sunrise')

        response = self.client.delete(reverse('hostel-detail', args=[hostel_id]))
        self.assertEqual(response.status_code, 204)
        self.assertFalse(Hostel.objects.exists())

    def test_owner_isolation(self):
        other = Account.objects.create(name='Owner Two')
        theirs = Hostel.objects.create(account=other, name='Moonlight', address='x', contact='9876543210')

        response = self.client.get(reverse('hostel-list'))
        self.assertEqual(response.data, [])
        response = self.client.get(reverse('hostel-detail', args=[theirs.id]))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data['code'], 'NOT_FOUND')

    def test_storage_failure_is_service_unavailable(self):
        with mock.patch.object(Hostel.objects, 'create', side_effect=DatabaseError('connection lost')):
            response = self.client.post(reverse('hostel-list'), self.payload, format='json')
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.data['code'], 'STORAGE_ERROR')

    def test_missing_fields_is_bad_request(self):
        response = self.client.post(reverse('hostel-list'), {'name': 'Sunrise'}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['code'], 'REQUIRED_FIELDS')

    def test_student_role_is_forbidden(self):
        student_user = User.objects.create_user(
            username='student@example.com', email='student@example.com', password='testpass123',
            account=self.account, role=UserRole.STUDENT
        )
        self.client.force_authenticate(user=student_user)
        self.assertEqual(self.client.get(reverse('hostel-list')).status_code, 403)
