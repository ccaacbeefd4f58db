# students/tests.py

from decimal import Decimal
import shutil
import tempfile

from django.core.cache import cache
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework.test import APITestCase

from accounts.models import Account
from users.models import User
from core.constants import StudentStatus, UserRole
from core.context import OwnerContext
from core.coordinator import student_toggles, Ok
from core.dto import StudentDTO
from core.exceptions import NotFoundError, RoomFullError, ValidationError
from payments.models import Payment
from rooms.models import Room
from .models import Student
from .services import StudentService


class StudentServiceTestCase(TestCase):
    """Test cases for student lifecycle and bed accounting"""

    def setUp(self):
        cache.clear()
        self.account = Account.objects.create(name='Owner One')
        self.ctx = OwnerContext(account_id=self.account.id)
        self.single = Room.objects.create(account=self.account, number='S-1', capacity=1)
        self.double = Room.objects.create(account=self.account, number='D-1', capacity=2)
        self.service = StudentService()

    def _dto(self, **overrides):
        data = dict(name='Rahul', phone='9876543210', room_id=self.double.id, rent=Decimal('5000'))
        data.update(overrides)
        return StudentDTO(**data)

    def test_create_student(self):
        student = self.service.create_student(self.ctx, self._dto(
            parent_phone='9123456780', national_id='123412341234', bed='B1'
        ))
        self.assertEqual(student.status, StudentStatus.ACTIVE)
        self.assertEqual(student.room_number, 'D-1')
        self.assertEqual(student.bed, 'B1')
        self.double.refresh_from_db()
        self.assertEqual(self.double.occupied, 1)

    def test_required_fields(self):
        with self.assertRaises(ValidationError) as ctx:
            self.service.create_student(self.ctx, self._dto(name='', room_id=None))
        self.assertEqual(ctx.exception.code, 'REQUIRED_FIELDS')
        self.assertEqual(sorted(ctx.exception.details['missing']), ['name', 'room_id'])

    def test_format_validation(self):
        for overrides in [{'phone': '12345'}, {'parent_phone': '12'}, {'national_id': '1234'},
                          {'rent': '-1'}, {'room_id': 'abc'}]:
            with self.assertRaises(ValidationError):
                self.service.create_student(self.ctx, self._dto(**overrides))
        self.assertFalse(Student.objects.exists())

    def test_full_room_rejects_student(self):
        self.service.create_student(self.ctx, self._dto(room_id=self.single.id))
        with self.assertRaises(RoomFullError) as ctx:
            self.service.create_student(self.ctx, self._dto(name='Priya', room_id=self.single.id))
        self.assertEqual(ctx.exception.details['capacity'], 1)
        self.assertEqual(Student.objects.filter(room=self.single).count(), 1)

    def test_other_owners_room_is_not_found(self):
        other = Account.objects.create(name='Owner Two')
        their_room = Room.objects.create(account=other, number='X-1', capacity=3)
        with self.assertRaises(NotFoundError):
            self.service.create_student(self.ctx, self._dto(room_id=their_room.id))

    def test_move_into_full_room_is_rejected(self):
        self.service.create_student(self.ctx, self._dto(room_id=self.single.id))
        priya = self.service.create_student(self.ctx, self._dto(name='Priya'))
        with self.assertRaises(RoomFullError):
            self.service.update_student(self.ctx, priya.id, self._dto(name='Priya', room_id=self.single.id))
        priya.refresh_from_db()
        self.assertEqual(priya.room_id, self.double.id)

    def test_inactive_student_may_move_into_full_room(self):
        self.service.create_student(self.ctx, self._dto(room_id=self.single.id))
        priya = self.service.create_student(self.ctx, self._dto(name='Priya'))
        self.service.toggle_status(self.ctx, priya.id)

        moved = self.service.update_student(self.ctx, priya.id, self._dto(name='Priya', room_id=self.single.id))
        self.assertEqual(moved.room_id, self.single.id)
        self.single.refresh_from_db()
        self.assertEqual(self.single.occupied, 1)

    def test_toggle_status_round_trip(self):
        student = self.service.create_student(self.ctx, self._dto())
        applied = []

        result = self.service.toggle_status(self.ctx, student.id, apply=applied.append)
        self.assertTrue(result.ok)
        self.assertEqual(result.value.status, StudentStatus.INACTIVE)
        self.assertEqual(applied, [result.value])
        self.double.refresh_from_db()
        self.assertEqual(self.double.occupied, 0)

        result = self.service.toggle_status(self.ctx, student.id)
        self.assertEqual(result.value.status, StudentStatus.ACTIVE)
        self.double.refresh_from_db()
        self.assertEqual(self.double.occupied, 1)

    def test_reactivation_into_full_room_fails_and_reverts(self):
        rahul = self.service.create_student(self.ctx, self._dto(room_id=self.single.id))
        self.service.toggle_status(self.ctx, rahul.id)
        self.service.create_student(self.ctx, self._dto(name='Priya', room_id=self.single.id))

        reverted = []
        result = self.service.toggle_status(self.ctx, rahul.id, revert=lambda: reverted.append(True))
        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, RoomFullError)
        self.assertEqual(reverted, [True])
        rahul.refresh_from_db()
        self.assertEqual(rahul.status, StudentStatus.INACTIVE)

    def test_toggle_in_flight_is_a_noop(self):
        student = self.service.create_student(self.ctx, self._dto())
        self.assertTrue(student_toggles.begin_toggle(student.id))
        try:
            self.assertIsNone(self.service.toggle_status(self.ctx, student.id))
        finally:
            student_toggles.complete_toggle(student.id, Ok(None))
        student.refresh_from_db()
        self.assertEqual(student.status, StudentStatus.ACTIVE)

    def test_delete_removes_payments_and_frees_bed(self):
        student = self.service.create_student(self.ctx, self._dto())
        Payment.objects.create(account=self.account, student=student, student_name=student.name,
                               month='March 2025', amount=Decimal('5000'))
        self.service.delete_student(self.ctx, student.id)

        self.assertFalse(Payment.objects.exists())
        self.double.refresh_from_db()
        self.assertEqual(self.double.occupied, 0)

    def test_list_students_search_and_status(self):
        self.service.create_student(self.ctx, self._dto())
        priya = self.service.create_student(self.ctx, self._dto(name='Priya', phone='9000000001',
                                                                 room_id=self.single.id))
        self.service.toggle_status(self.ctx, priya.id)

        self.assertEqual([s.name for s in self.service.list_students(self.ctx, search='s-1')], ['Priya'])
        self.assertEqual([s.name for s in self.service.list_students(self.ctx, search='RAH')], ['Rahul'])
        self.assertEqual(
            [s.name for s in self.service.list_students(self.ctx, status=StudentStatus.INACTIVE)], ['Priya']
        )

    def test_unknown_image_kind(self):
        student = self.service.create_student(self.ctx, self._dto())
        with self.assertRaises(ValidationError) as ctx:
            self.service.attach_images(self.ctx, student.id, {'passport': object()})
        self.assertEqual(ctx.exception.code, 'INVALID_IMAGE_KIND')


class StudentImageTestCase(TestCase):

    def setUp(self):
        self.media_root = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.media_root, ignore_errors=True)
        self.account = Account.objects.create(name='Owner One')
        self.ctx = OwnerContext(account_id=self.account.id)
        room = Room.objects.create(account=self.account, number='A-101', capacity=2)
        self.student = Student.objects.create(
            account=self.account, name='Rahul', phone='9876543210', room=room, rent=Decimal('5000')
        )

    def test_upload_replaces_previous_image(self):
        with override_settings(MEDIA_ROOT=self.media_root, MEDIA_URL='/media/'):
            service = StudentService()
            first = service.attach_images(self.ctx, self.student.id, {
                'profile': SimpleUploadedFile('me.jpg', b'first', content_type='image/jpeg'),
            })
            second = service.attach_images(self.ctx, self.student.id, {
                'profile': SimpleUploadedFile('me.jpg', b'second', content_type='image/jpeg'),
            })

        self.assertEqual(first.profile_image, f'/media/students/{self.student.id}/profile.jpg')
        self.assertEqual(second.profile_image, first.profile_image)
        self.assertEqual(second.id_front_image, '')


class StudentAPITestCase(APITestCase):
    """Test cases for the students API"""

    def setUp(self):
        cache.clear()
        self.account = Account.objects.create(name='Owner One')
        self.owner = User.objects.create_user(
            username='owner@example.com', email='owner@example.com', password='testpass123',
            account=self.account, role=UserRole.OWNER
        )
        self.room = Room.objects.create(account=self.account, number='A-101', capacity=1)
        self.client.force_authenticate(user=self.owner)

    def _create(self, **overrides):
        data = {'name': 'Rahul', 'phone': '9876543210', 'room': self.room.id, 'rent': '5000'}
        data.update(overrides)
        return self.client.post(reverse('student-list'), data, format='json')

    def test_create_and_list(self):
        response = self._create()
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['room_number'], 'A-101')
        self.assertTrue(response.data['is_active'])

        response = self.client.get(reverse('student-list'), {'search': 'rah'})
        self.assertEqual(len(response.data), 1)

    def test_room_full_is_conflict(self):
        self._create()
        response = self._create(name='Priya')
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data['code'], 'ROOM_FULL')

    def test_bad_phone_is_bad_request(self):
        response = self._create(phone='12345')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['code'], 'INVALID_FORMAT')

    def test_partial_update_keeps_other_fields(self):
        student_id = self._create().data['id']
        response = self.client.patch(reverse('student-detail', args=[student_id]), {'bed': 'B2'}, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['bed'], 'B2')
        self.assertEqual(response.data['name'], 'Rahul')

    def test_toggle_status(self):
        student_id = self._create().data['id']
        response = self.client.post(reverse('student-toggle-status', args=[student_id]))
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.data['applied'])
        self.assertEqual(response.data['student']['status'], StudentStatus.INACTIVE)

    def test_toggle_status_in_flight(self):
        student_id = self._create().data['id']
        student_toggles.begin_toggle(student_id)
        try:
            response = self.client.post(reverse('student-toggle-status', args=[student_id]))
        finally:
            student_toggles.complete_toggle(student_id, Ok(None))
        self.assertEqual(response.status_code, 202)
        self.assertFalse(response.data['applied'])

    def test_delete(self):
        student_id = self._create().data['id']
        response = self.client.delete(reverse('student-detail', args=[student_id]))
        self.assertEqual(response.status_code, 204)
        self.room.refresh_from_db()
        self.assertEqual(self.room.occupied, 0)

    def test_other_owner_gets_not_found(self):
        student_id = self._create().data['id']
        other = User.objects.create_user(
            username='other@example.com', email='other@example.com', password='testpass123',
            account=Account.objects.create(name='Owner Two'), role=UserRole.OWNER
        )
        self.client.force_authenticate(user=other)
        response = self.client.get(reverse('student-detail', args=[student_id]))
        self.assertEqual(response.status_code, 404)
