# occupancy/tests.py

from decimal import Decimal
from types import SimpleNamespace

from django.test import SimpleTestCase, TestCase
from django.urls import reverse
from rest_framework.test import APITestCase

from accounts.models import Account
from users.models import User
from core.constants import StudentStatus, UserRole
from core.context import OwnerContext
from core.dto import StudentDTO
from rooms.models import Room
from students.models import Student
from students.services import StudentService
from .calculator import calculate_occupancy, occupied_by_room, percentage, room_status
from .services import OccupancyService


def room(id, capacity, number=None, hostel_id=None, occupied=0):
    return SimpleNamespace(id=id, number=number or f"R-{id}", floor='1', capacity=capacity,
                           hostel_id=hostel_id, occupied=occupied)


def student(room_id, status=StudentStatus.ACTIVE):
    return SimpleNamespace(room_id=room_id, status=status)


class CalculatorTestCase(SimpleTestCase):
    """Test cases for the pure occupancy calculator"""

    def test_room_status(self):
        self.assertEqual(room_status(2, 0), "Vacant")
        self.assertEqual(room_status(2, 1), "1 Beds Free")
        self.assertEqual(room_status(3, 1), "2 Beds Free")
        self.assertEqual(room_status(2, 2), "Full")
        self.assertEqual(room_status(2, 3), "Full")

    def test_inactive_students_never_count(self):
        counts = occupied_by_room([
            student(1), student(1, StudentStatus.INACTIVE), student(2), student(None),
        ])
        self.assertEqual(counts[1], 1)
        self.assertEqual(counts[2], 1)

    def test_stored_counter_is_ignored(self):
        summary = calculate_occupancy([room(1, 2, occupied=2)], [student(1)])
        self.assertEqual(summary.for_room(1).occupied, 1)
        self.assertEqual(summary.for_room(1).status, "1 Beds Free")

    def test_aggregates(self):
        rooms = [room(1, 2), room(2, 1), room(3, 3)]
        students = [student(1), student(1), student(2), student(3, StudentStatus.INACTIVE)]
        summary = calculate_occupancy(rooms, students)

        self.assertEqual(summary.total_capacity, 6)
        self.assertEqual(summary.total_occupied, 3)
        self.assertEqual(summary.vacancy, 3)
        self.assertEqual(summary.active_students, 3)
        self.assertEqual(summary.occupancy_percentage, 50.0)
        self.assertEqual(summary.total_rooms, 3)
        self.assertEqual(summary.full_rooms, 2)
        self.assertEqual(summary.full_rooms_percentage, 66.67)
        self.assertEqual(summary.for_room(3).status, "Vacant")

    def test_zero_denominators(self):
        empty = calculate_occupancy([], [])
        self.assertEqual(empty.occupancy_percentage, 0.0)
        self.assertEqual(empty.full_rooms_percentage, 0.0)
        self.assertEqual(empty.vacancy, 0)
        self.assertEqual(percentage(3, 0), 0.0)

    def test_inputs_in_any_order(self):
        rooms = [room(1, 2), room(2, 2)]
        students = [student(2), student(1), student(2)]
        forward = calculate_occupancy(rooms, students)
        backward = calculate_occupancy(list(reversed(rooms)), list(reversed(students)))
        self.assertEqual(forward.for_room(2).occupied, backward.for_room(2).occupied)
        self.assertEqual(forward.total_occupied, backward.total_occupied)


class OccupancyMaintenanceTestCase(TestCase):
    """Recomputed occupancy and the stored counter agree after every student change"""

    def setUp(self):
        self.account = Account.objects.create(name='Owner One')
        self.ctx = OwnerContext(account_id=self.account.id)
        self.room_a = Room.objects.create(account=self.account, number='A-101', capacity=2)
        self.room_b = Room.objects.create(account=self.account, number='B-201', capacity=1)
        self.service = StudentService()
        self.occupancy = OccupancyService()

    def _add(self, name, room, phone='9876543210'):
        return self.service.create_student(self.ctx, StudentDTO(
            name=name, phone=phone, room_id=room.id, rent=Decimal('5000')
        ))

    def assertConsistent(self):
        summary = self.occupancy.summary(self.ctx)
        for stored in Room.objects.filter(account=self.account):
            counted = Student.objects.filter(room=stored).exclude(status=StudentStatus.INACTIVE).count()
            self.assertEqual(summary.for_room(stored.id).occupied, counted)
            self.assertEqual(stored.occupied, counted)
        return summary

    def test_rahul_scenario(self):
        rahul = self._add('Rahul', self.room_a)
        self.assertEqual(rahul.room_number, 'A-101')

        row = self.assertConsistent().for_room(self.room_a.id)
        self.assertEqual(row.occupied, 1)
        self.assertEqual(row.status, "1 Beds Free")

    def test_add_remove_reassign_toggle(self):
        rahul = self._add('Rahul', self.room_a)
        priya = self._add('Priya', self.room_a, phone='9876500000')
        self.assertConsistent()

        # reassignment
        self.service.update_student(self.ctx, priya.id, StudentDTO(
            name='Priya', phone='9876500000', room_id=self.room_b.id, rent=Decimal('4500')
        ))
        summary = self.assertConsistent()
        self.assertEqual(summary.for_room(self.room_a.id).occupied, 1)
        self.assertEqual(summary.for_room(self.room_b.id).status, "Full")

        # status toggle
        result = self.service.toggle_status(self.ctx, rahul.id)
        self.assertTrue(result.ok)
        summary = self.assertConsistent()
        self.assertEqual(summary.for_room(self.room_a.id).status, "Vacant")
        self.assertEqual(summary.active_students, 1)

        # removal
        self.service.delete_student(self.ctx, priya.id)
        summary = self.assertConsistent()
        self.assertEqual(summary.total_occupied, 0)
        self.assertEqual(summary.occupancy_percentage, 0.0)

    def test_hostel_filter(self):
        from hostels.models import Hostel
        hostel = Hostel.objects.create(account=self.account, name='Sunrise', address='Main Road',
                                       contact='9876543210', capacity=10)
        self.room_b.hostel = hostel
        self.room_b.save()
        self._add('Rahul', self.room_a)

        summary = self.occupancy.summary(self.ctx, hostel_id=hostel.id)
        self.assertEqual(summary.total_rooms, 1)
        self.assertEqual(summary.total_capacity, 1)
        self.assertEqual(summary.active_students, 0)


class OccupancyAPITestCase(APITestCase):

    def setUp(self):
        self.account = Account.objects.create(name='Owner One')
        self.owner = User.objects.create_user(
            username='owner@example.com', email='owner@example.com', password='testpass123',
            account=self.account, role=UserRole.OWNER
        )
        Room.objects.create(account=self.account, number='A-101', capacity=2)
        other = Account.objects.create(name='Owner Two')
        Room.objects.create(account=other, number='Z-1', capacity=5)

    def test_summary(self):
        self.client.force_authenticate(user=self.owner)
        response = self.client.get(reverse('occupancy-summary'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['total_capacity'], 2)
        self.assertEqual(response.data['occupancy_percentage'], 0.0)
        self.assertEqual(response.data['rooms'][0]['status'], 'Vacant')

    def test_malformed_hostel_filter(self):
        self.client.force_authenticate(user=self.owner)
        response = self.client.get(reverse('occupancy-summary'), {'hostel': 'abc'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['code'], 'INVALID_HOSTEL')

    def test_summary_requires_login(self):
        response = self.client.get(reverse('occupancy-summary'))
        self.assertEqual(response.status_code, 401)
