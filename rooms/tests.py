# rooms/tests.py

from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APITestCase

from accounts.models import Account
from users.models import User
from core.constants import StudentStatus, UserRole
from core.context import OwnerContext
from core.dto import RoomDTO
from core.exceptions import BusinessLogicError, NotFoundError, ValidationError
from hostels.models import Hostel
from students.models import Student
from .models import Room
from .services import RoomService


class RoomServiceTestCase(TestCase):
    """Test cases for room management"""

    def setUp(self):
        self.account = Account.objects.create(name='Owner One')
        self.ctx = OwnerContext(account_id=self.account.id)
        self.service = RoomService()

    def _student(self, room, name='Rahul', status=StudentStatus.ACTIVE):
        return Student.objects.create(account=self.account, name=name, phone='9876543210',
                                      room=room, rent=Decimal('5000'), status=status)

    def test_create_room_starts_empty(self):
        room = self.service.create_room(self.ctx, RoomDTO(number=' A-101 ', floor='1', capacity='2'))
        self.assertEqual(room.number, 'A-101')
        self.assertEqual(room.capacity, 2)
        self.assertEqual(room.occupied, 0)
        self.assertEqual(room.status, 'Vacant')

    def test_duplicate_number_per_owner(self):
        self.service.create_room(self.ctx, RoomDTO(number='A-101', capacity=2))
        with self.assertRaises(ValidationError) as ctx:
            self.service.create_room(self.ctx, RoomDTO(number='A-101', capacity=3))
        self.assertEqual(ctx.exception.code, 'DUPLICATE_ROOM_NUMBER')

        # another owner may reuse the number
        other_ctx = OwnerContext(account_id=Account.objects.create(name='Owner Two').id)
        self.assertEqual(self.service.create_room(other_ctx, RoomDTO(number='A-101', capacity=1)).number, 'A-101')

    def test_capacity_must_be_positive(self):
        for capacity in [0, -1, 'two', None]:
            with self.assertRaises(ValidationError):
                self.service.create_room(self.ctx, RoomDTO(number='A-101', capacity=capacity))

    def test_hostel_must_belong_to_owner(self):
        other = Account.objects.create(name='Owner Two')
        their_hostel = Hostel.objects.create(account=other, name='Moonlight', address='x', contact='9876543210')
        with self.assertRaises(NotFoundError):
            self.service.create_room(self.ctx, RoomDTO(number='A-101', capacity=2, hostel_id=their_hostel.id))

    def test_capacity_cannot_drop_below_active_students(self):
        room = self.service.create_room(self.ctx, RoomDTO(number='A-101', capacity=3))
        self._student(room)
        self._student(room, name='Priya')
        self._student(room, name='Arjun', status=StudentStatus.INACTIVE)

        with self.assertRaises(BusinessLogicError) as ctx:
            self.service.update_room(self.ctx, room.id, RoomDTO(capacity=1))
        self.assertEqual(ctx.exception.code, 'CAPACITY_BELOW_OCCUPANCY')

        updated = self.service.update_room(self.ctx, room.id, RoomDTO(capacity=2, floor='2'))
        self.assertEqual(updated.capacity, 2)
        self.assertEqual(updated.occupied, 2)
        self.assertEqual(updated.status, 'Full')

    def test_delete_requires_empty_room(self):
        room = self.service.create_room(self.ctx, RoomDTO(number='A-101', capacity=2))
        student = self._student(room, status=StudentStatus.INACTIVE)
        with self.assertRaises(BusinessLogicError) as ctx:
            self.service.delete_room(self.ctx, room.id)
        self.assertEqual(ctx.exception.code, 'ROOM_NOT_EMPTY')

        student.delete()
        self.service.delete_room(self.ctx, room.id)
        self.assertFalse(Room.objects.filter(id=room.id).exists())

    def test_list_rooms_recomputes_occupancy(self):
        hostel = Hostel.objects.create(account=self.account, name='Sunrise', address='x', contact='9876543210')
        a101 = self.service.create_room(self.ctx, RoomDTO(number='A-101', capacity=2, hostel_id=hostel.id))
        self.service.create_room(self.ctx, RoomDTO(number='B-201', capacity=1))
        self._student(a101)

        rows = self.service.list_rooms(self.ctx)
        self.assertEqual([(r.number, r.occupied, r.status) for r in rows],
                         [('A-101', 1, '1 Beds Free'), ('B-201', 0, 'Vacant')])
        self.assertEqual([r.number for r in self.service.list_rooms(self.ctx, hostel_id=hostel.id)], ['A-101'])
        self.assertEqual([r.number for r in self.service.list_rooms(self.ctx, search='b-2')], ['B-201'])

        self.assertEqual(self.service.get_room(self.ctx, a101.id).beds_free, 1)


class RoomAPITestCase(APITestCase):
    """Test cases for the rooms API"""

    def setUp(self):
        self.account = Account.objects.create(name='Owner One')
        self.owner = User.objects.create_user(
            username='owner@example.com', email='owner@example.com', password='testpass123',
            account=self.account, role=UserRole.OWNER
        )
        self.client.force_authenticate(user=self.owner)

    def test_create_list_update_delete(self):
        response = self.client.post(reverse('room-list'), {'number': 'A-101', 'capacity': 2}, format='json')
        self.assertEqual(response.status_code, 201)
        room_id = response.data['id']

        response = self.client.get(reverse('room-list'))
        self.assertEqual(response.data[0]['status'], 'Vacant')
        self.assertEqual(response.data[0]['beds_free'], 2)

        response = self.client.patch(reverse('room-detail', args=[room_id]), {'capacity': 4}, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['capacity'], 4)
        self.assertEqual(response.data['number'], 'A-101')

        response = self.client.delete(reverse('room-detail', args=[room_id]))
        self.assertEqual(response.status_code, 204)

    def test_duplicate_number_is_bad_request(self):
        self.client.post(reverse('room-list'), {'number': 'A-101', 'capacity': 2}, format='json')
        response = self.client.post(reverse('room-list'), {'number': 'A-101', 'capacity': 2}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['code'], 'DUPLICATE_ROOM_NUMBER')

    def test_malformed_hostel_is_bad_request(self):
        response = self.client.get(reverse('room-list'), {'hostel': 'abc'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['code'], 'INVALID_HOSTEL')

        response = self.client.post(reverse('room-list'), {
            'number': 'A-101', 'capacity': 2, 'hostel': 'abc'
        }, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['details']['field'], 'hostel')
        self.assertFalse(Room.objects.filter(account=self.account).exists())

        room = Room.objects.create(account=self.account, number='B-201', capacity=2)
        response = self.client.patch(reverse('room-detail', args=[room.id]), {'hostel': 'x1'}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['code'], 'INVALID_HOSTEL')

    def test_delete_non_empty_room_is_conflict(self):
        room = Room.objects.create(account=self.account, number='A-101', capacity=2, occupied=1)
        Student.objects.create(account=self.account, name='Rahul', phone='9876543210',
                               room=room, rent=Decimal('5000'))
        response = self.client.delete(reverse('room-detail', args=[room.id]))
        self.assertEqual(response.status_code, 409)
