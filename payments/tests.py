# payments/tests.py

from decimal import Decimal
from types import SimpleNamespace

from django.core.cache import cache
from django.test import SimpleTestCase, TestCase
from django.urls import reverse
from rest_framework.test import APITestCase

from accounts.models import Account
from users.models import User
from core.constants import PaymentStatus, PaymentTab, StudentStatus, UserRole
from core.context import OwnerContext
from core.coordinator import payment_toggles, Ok
from core.dto import PaymentDTO
from core.exceptions import DuplicatePaymentError, NotFoundError, ValidationError
from core.months import current_month
from rooms.models import Room
from students.models import Student
from .models import Payment
from .reconciler import filter_reconciled, reconcile, ReconciliationView
from .services import PaymentService


def make_student(id, name, room_number='A-101', status=StudentStatus.ACTIVE):
    return SimpleNamespace(id=id, name=name, phone='9876543210', room_id=1,
                           room_number=room_number, rent=Decimal('5000'), status=status)


def make_payment(id, student_id, month, amount='5000'):
    return SimpleNamespace(id=id, student_id=student_id, month=month, amount=Decimal(amount))


class ReconcilerTestCase(SimpleTestCase):
    """Test cases for the pure month reconciliation"""

    def setUp(self):
        self.students = [
            make_student(1, 'Rahul', 'A-101'),
            make_student(2, 'Priya', 'B-201'),
            make_student(3, 'Arjun', 'A-102', status=StudentStatus.INACTIVE),
        ]

    def test_paid_iff_payment_for_month(self):
        payments = [make_payment(10, 1, 'March 2025'), make_payment(11, 2, 'February 2025')]
        result = reconcile(self.students, payments, 'March 2025')

        self.assertEqual(result.get(1).payment_status, PaymentStatus.PAID)
        self.assertEqual(result.get(1).payment.id, 10)
        self.assertEqual(result.get(2).payment_status, PaymentStatus.UNPAID)
        self.assertIsNone(result.get(2).payment)

    def test_aggregates(self):
        payments = [make_payment(10, 1, 'March 2025'), make_payment(12, 3, 'March 2025', '4000')]
        result = reconcile(self.students, payments, 'March 2025')

        self.assertEqual(result.total_active, 2)
        self.assertEqual(result.paid_count, 1)
        self.assertEqual(result.unpaid_count, 1)
        self.assertEqual(result.collection_percentage, 50.0)
        self.assertEqual(result.collected_amount, Decimal('9000'))

    def test_zero_active_students(self):
        result = reconcile([], [], 'March 2025')
        self.assertEqual(result.collection_percentage, 0.0)
        self.assertEqual(result.paid_count, 0)

    def test_duplicate_payments_keep_lowest_id(self):
        payments = [make_payment(30, 1, 'March 2025'), make_payment(20, 1, 'March 2025')]
        with self.assertLogs('payments.reconciler', level='WARNING') as logs:
            result = reconcile(self.students, payments, 'March 2025')
        self.assertEqual(result.get(1).payment.id, 20)
        self.assertEqual(result.paid_count, 1)
        self.assertIn('Duplicate payment', logs.output[0])

    def test_input_order_does_not_matter(self):
        payments = [make_payment(10, 1, 'March 2025'), make_payment(11, 2, 'March 2025')]
        forward = reconcile(self.students, payments, 'March 2025')
        backward = reconcile(list(reversed(self.students)), list(reversed(payments)), 'March 2025')
        for student_id in (1, 2, 3):
            self.assertEqual(forward.get(student_id), backward.get(student_id))

    def test_mark_paid_and_unpaid_return_patched_copies(self):
        result = reconcile(self.students, [], 'March 2025')
        payment = make_payment(10, 1, 'March 2025')

        paid = result.mark_paid(1, payment)
        self.assertEqual(paid.get(1).payment_status, PaymentStatus.PAID)
        self.assertEqual(result.get(1).payment_status, PaymentStatus.UNPAID)

        unpaid = paid.mark_unpaid(1)
        self.assertEqual(unpaid.get(1).payment_status, PaymentStatus.UNPAID)
        self.assertIsNone(unpaid.get(1).payment)
        self.assertEqual(unpaid, result)

    def test_view_is_patched_by_mutation_outcome(self):
        view = ReconciliationView(reconcile(self.students, [], 'March 2025'))
        payment = make_payment(10, 2, 'March 2025')

        view.paid(payment)
        self.assertEqual(view.row(2).payment_status, PaymentStatus.PAID)
        self.assertEqual(view.reconciliation.paid_count, 1)
        self.assertEqual(view.row(1).payment_status, PaymentStatus.UNPAID)

        view.unpaid(payment)
        self.assertEqual(view.row(2).payment_status, PaymentStatus.UNPAID)
        self.assertEqual(view.reconciliation.paid_count, 0)

    def test_filtering_is_pure(self):
        payments = [make_payment(10, 1, 'March 2025')]
        result = reconcile(self.students, payments, 'March 2025')
        rows_before = result.rows

        first = filter_reconciled(result.rows, PaymentTab.UNPAID, 'a')
        second = filter_reconciled(result.rows, PaymentTab.UNPAID, 'a')
        self.assertEqual(first, second)
        self.assertEqual(result.rows, rows_before)
        self.assertEqual([row.name for row in first], ['Priya', 'Arjun'])

    def test_search_matches_name_and_room_case_insensitive(self):
        result = reconcile(self.students, [], 'March 2025')
        self.assertEqual([r.name for r in filter_reconciled(result.rows, search='RAHUL')], ['Rahul'])
        self.assertEqual([r.name for r in filter_reconciled(result.rows, search='a-10')], ['Rahul', 'Arjun'])
        self.assertEqual(filter_reconciled(result.rows, PaymentTab.PAID), ())
        self.assertEqual(len(filter_reconciled(result.rows, PaymentTab.ALL, '')), 3)


class PaymentServiceTestCase(TestCase):
    """Test cases for recording and deleting payments"""

    def setUp(self):
        cache.clear()
        self.account = Account.objects.create(name='Owner One')
        self.ctx = OwnerContext(account_id=self.account.id)
        self.room = Room.objects.create(account=self.account, number='A-101', capacity=2, occupied=1)
        self.rahul = Student.objects.create(
            account=self.account, name='Rahul', phone='9876543210', room=self.room, rent=Decimal('5000')
        )
        self.service = PaymentService()

    def _record(self, month='March 2025', amount='5000', student=None):
        return self.service.record_payment(self.ctx, PaymentDTO(
            student_id=(student or self.rahul).id, month=month, amount=amount
        ))

    def test_rahul_paid_for_march_only(self):
        result = self._record()
        self.assertTrue(result.ok)
        self.assertEqual(result.value.student_name, 'Rahul')

        march = self.service.reconcile_month(self.ctx, 'March 2025')
        february = self.service.reconcile_month(self.ctx, 'February 2025')
        self.assertEqual(march.get(self.rahul.id).payment_status, PaymentStatus.PAID)
        self.assertEqual(february.get(self.rahul.id).payment_status, PaymentStatus.UNPAID)
        self.assertEqual(march.get(self.rahul.id).room_number, 'A-101')

    def test_delete_round_trip(self):
        payment = self._record().value
        result = self.service.delete_payment(self.ctx, payment.id)
        self.assertTrue(result.ok)
        self.assertFalse(Payment.objects.filter(id=payment.id).exists())

        march = self.service.reconcile_month(self.ctx, 'March 2025')
        self.assertEqual(march.get(self.rahul.id).payment_status, PaymentStatus.UNPAID)
        self.assertEqual(march.paid_count, 0)

    def test_second_payment_same_month_is_rejected(self):
        self._record()
        result = self._record(amount='100')
        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, DuplicatePaymentError)
        self.assertEqual(Payment.objects.filter(student=self.rahul).count(), 1)

    def test_validation_happens_before_write(self):
        for amount in [None, '', '0', '-5']:
            with self.assertRaises(ValidationError):
                self._record(amount=amount)
        with self.assertRaises(ValidationError):
            self._record(month='13/2025')
        self.assertFalse(Payment.objects.exists())

    def test_month_key_is_canonicalised(self):
        payment = self._record(month='march 2025').value
        self.assertEqual(payment.month, 'March 2025')

    def test_default_month_is_current(self):
        payment = self._record(month='').value
        self.assertEqual(payment.month, current_month())

    def test_in_flight_payment_is_a_noop(self):
        key = PaymentService._guard_key(self.rahul.id, 'March 2025')
        self.assertTrue(payment_toggles.begin_toggle(key))
        try:
            self.assertIsNone(self._record())
        finally:
            payment_toggles.complete_toggle(key, Ok(None))
        self.assertFalse(Payment.objects.exists())

    def test_guard_key_is_cache_safe(self):
        key = PaymentService._guard_key(self.rahul.id, 'March 2025')
        self.assertEqual(key, f"student-{self.rahul.id}:march-2025")
        self.assertNotIn(' ', key)

    def test_apply_receives_recorded_payment(self):
        applied = []
        result = self.service.record_payment(self.ctx, PaymentDTO(
            student_id=self.rahul.id, month='March 2025', amount='5000'
        ), apply=applied.append)
        self.assertEqual(applied, [result.value])

    def test_other_owner_cannot_pay_for_student(self):
        other_ctx = OwnerContext(account_id=Account.objects.create(name='Owner Two').id)
        result = self.service.record_payment(other_ctx, PaymentDTO(
            student_id=self.rahul.id, month='March 2025', amount='5000'
        ))
        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, NotFoundError)

    def test_reconciliation_is_owner_scoped(self):
        self._record()
        other_ctx = OwnerContext(account_id=Account.objects.create(name='Owner Two').id)
        other = self.service.reconcile_month(other_ctx, 'March 2025')
        self.assertEqual(other.rows, ())


class PaymentAPITestCase(APITestCase):
    """Test cases for the payments API"""

    def setUp(self):
        cache.clear()
        self.account = Account.objects.create(name='Owner One')
        self.owner = User.objects.create_user(
            username='owner@example.com', email='owner@example.com', password='testpass123',
            account=self.account, role=UserRole.OWNER
        )
        self.room = Room.objects.create(account=self.account, number='A-101', capacity=2, occupied=2)
        self.rahul = Student.objects.create(
            account=self.account, name='Rahul', phone='9876543210', room=self.room, rent=Decimal('5000')
        )
        self.priya = Student.objects.create(
            account=self.account, name='Priya', phone='9876500000', room=self.room, rent=Decimal('4500')
        )
        self.client.force_authenticate(user=self.owner)

    def _record(self, **overrides):
        data = {'student': self.rahul.id, 'month': 'March 2025', 'amount': '5000', 'method': 'UPI'}
        data.update(overrides)
        return self.client.post(reverse('payment-list'), data, format='json')

    def test_record_and_reconcile(self):
        response = self._record()
        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.data['applied'])
        self.assertEqual(response.data['month'], 'March 2025')
        self.assertEqual(response.data['student']['payment_status'], 'Paid')
        self.assertEqual(response.data['student']['payment']['method'], 'UPI')
        self.assertEqual(response.data['stats']['paid_count'], 1)

        response = self.client.get(reverse('payment-reconcile'), {'month': 'March 2025'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['month'], 'March 2025')
        self.assertEqual(response.data['previous_month'], 'February 2025')
        self.assertEqual(response.data['next_month'], 'April 2025')
        self.assertEqual(response.data['stats']['paid_count'], 1)
        self.assertEqual(response.data['stats']['collection_percentage'], 50.0)

        statuses = {row['name']: row['payment_status'] for row in response.data['results']}
        self.assertEqual(statuses, {'Rahul': 'Paid', 'Priya': 'Unpaid'})

    def test_tab_search_and_offset(self):
        self._record()
        response = self.client.get(reverse('payment-reconcile'), {'month': 'March 2025', 'tab': 'Unpaid'})
        self.assertEqual([row['name'] for row in response.data['results']], ['Priya'])

        response = self.client.get(reverse('payment-reconcile'), {'month': 'March 2025', 'search': 'rah'})
        self.assertEqual(response.data['count'], 1)

        response = self.client.get(reverse('payment-reconcile'), {'month': 'April 2025', 'offset': -1})
        self.assertEqual(response.data['month'], 'March 2025')
        self.assertEqual(response.data['stats']['paid_count'], 1)

        response = self.client.get(reverse('payment-reconcile'), {'month': 'April 2025'})
        self.assertEqual(response.data['stats']['paid_count'], 0)

    def test_invalid_tab_and_month(self):
        response = self.client.get(reverse('payment-reconcile'), {'tab': 'Late'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['code'], 'INVALID_TAB')

        response = self.client.get(reverse('payment-reconcile'), {'month': '2025-03'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['code'], 'INVALID_MONTH')

    def test_months_at_the_edge_of_the_calendar(self):
        response = self.client.get(reverse('payment-reconcile'), {'month': 'December 9999'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['code'], 'INVALID_MONTH')

        response = self.client.get(reverse('payment-reconcile'), {'month': 'March 2025', 'offset': 100000})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['code'], 'INVALID_MONTH')

        response = self.client.get(reverse('payment-reconcile'), {'month': 'December 9998'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['previous_month'], 'November 9998')
        self.assertIsNone(response.data['next_month'])

        response = self.client.get(reverse('payment-reconcile'), {'month': 'January 1'})
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.data['previous_month'])

    def test_error_mapping(self):
        self.assertEqual(self._record(amount='').status_code, 400)
        self.assertEqual(self._record().status_code, 201)

        duplicate = self._record()
        self.assertEqual(duplicate.status_code, 409)
        self.assertEqual(duplicate.data['code'], 'DUPLICATE_PAYMENT')

        self.assertEqual(self._record(student=999999).status_code, 404)

    def test_delete_payment(self):
        payment_id = self._record().data['student']['payment']['id']
        response = self.client.delete(reverse('payment-detail', args=[payment_id]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['student']['name'], 'Rahul')
        self.assertEqual(response.data['student']['payment_status'], 'Unpaid')
        self.assertIsNone(response.data['student']['payment'])
        self.assertEqual(response.data['stats']['paid_count'], 0)

        response = self.client.get(reverse('payment-reconcile'), {'month': 'March 2025', 'tab': 'Paid'})
        self.assertEqual(response.data['results'], [])

    def test_export_csv(self):
        self._record()
        response = self.client.get(reverse('payment-export'), {'month': 'March 2025'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Content-Type'], 'text/csv')
        content = response.content.decode()
        self.assertIn('Rahul,A-101,5000.00,Paid,5000.00,UPI', content)
        self.assertIn('Priya,A-101,4500.00,Unpaid', content)

    def test_receipt_pdf(self):
        payment_id = self._record().data['student']['payment']['id']
        response = self.client.get(reverse('payment-receipt', args=[payment_id]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Content-Type'], 'application/pdf')
        self.assertTrue(response.content.startswith(b'%PDF'))

    def test_requires_owner(self):
        student_user = User.objects.create_user(
            username='student@example.com', email='student@example.com', password='testpass123',
            account=self.account, role=UserRole.STUDENT
        )
        self.client.force_authenticate(user=student_user)
        self.assertEqual(self.client.get(reverse('payment-reconcile')).status_code, 403)

        self.client.force_authenticate(user=None)
        self.assertEqual(self.client.get(reverse('payment-reconcile')).status_code, 401)
