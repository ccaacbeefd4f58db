# core/tests.py

from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal
from unittest import mock
import threading

from django.core.cache import cache
from django.db import DatabaseError, IntegrityError
from django.test import SimpleTestCase, TestCase
from django.utils import translation

from accounts.models import Account
from hostels.models import Hostel
from core.context import OwnerContext
from core.coordinator import StatusToggleCoordinator, Ok, Err
from core.exceptions import (
    BusinessLogicError, NotAuthenticatedError, NotFoundError, StorageError, ValidationError
)
from core.months import format_month, normalize_month, parse_month, shift_month
from core.repositories import BaseRepository
from core.validators import (
    AmountValidator, CapacityValidator, ContactValidator, IdentifierValidator, RequiredFieldsValidator
)


class MonthKeyTestCase(SimpleTestCase):
    """Test cases for month-string keys"""

    def test_format_month(self):
        self.assertEqual(format_month(date(2025, 3, 15)), "March 2025")
        self.assertEqual(format_month(date(2024, 12, 1)), "December 2024")

    def test_format_month_ignores_active_language(self):
        with translation.override('te'):
            self.assertEqual(format_month(date(2025, 3, 15)), "March 2025")
        with translation.override('de'):
            self.assertEqual(format_month(date(2025, 3, 15)), "March 2025")

    def test_format_month_uses_local_time_for_aware_datetimes(self):
        # 31 March 20:00 UTC is already 1 April in Asia/Kolkata
        moment = datetime(2025, 3, 31, 20, 0, tzinfo=dt_timezone.utc)
        self.assertEqual(format_month(moment), "April 2025")

    def test_parse_and_normalize(self):
        self.assertEqual(parse_month("March 2025"), date(2025, 3, 1))
        self.assertEqual(normalize_month(" march 2025 "), "March 2025")

    def test_invalid_month_key(self):
        for key in ["2025-03", "Marchh 2025", "", "March", None]:
            with self.assertRaises(ValidationError) as ctx:
                parse_month(key)
            self.assertEqual(ctx.exception.code, "INVALID_MONTH")

    def test_shift_month_across_years(self):
        self.assertEqual(shift_month("January 2025", -1), "December 2024")
        self.assertEqual(shift_month("December 2024", 1), "January 2025")
        self.assertEqual(shift_month("March 2025", -14), "January 2024")
        self.assertEqual(shift_month("March 2025", 0), "March 2025")

    def test_year_out_of_range(self):
        for key in ["March 0", "December 9999", "January 10000", "March -5"]:
            with self.assertRaises(ValidationError) as ctx:
                parse_month(key)
            self.assertEqual(ctx.exception.code, "INVALID_MONTH")
        self.assertEqual(parse_month("December 9998"), date(9998, 12, 1))

    def test_shift_month_out_of_range(self):
        for key, delta in [("December 9998", 1), ("January 1", -1), ("March 2025", 100000)]:
            with self.assertRaises(ValidationError) as ctx:
                shift_month(key, delta)
            self.assertEqual(ctx.exception.code, "INVALID_MONTH")


class ValidatorTestCase(SimpleTestCase):
    """Test cases for form validators"""

    def test_required_fields(self):
        with self.assertRaises(ValidationError) as ctx:
            RequiredFieldsValidator.validate({'name': '  ', 'phone': '9876543210'}, ['name', 'phone', 'rent'])
        self.assertEqual(ctx.exception.details['missing'], ['name', 'rent'])

    def test_phone_and_national_id(self):
        self.assertEqual(ContactValidator.validate_phone(' 9876543210 '), '9876543210')
        self.assertEqual(ContactValidator.validate_national_id('123412341234'), '123412341234')
        for bad in ['98765', '98765432101', 'abcdefghij']:
            with self.assertRaises(ValidationError):
                ContactValidator.validate_phone(bad)
        with self.assertRaises(ValidationError):
            ContactValidator.validate_national_id('1234')

    def test_amount(self):
        self.assertEqual(AmountValidator.validate_amount('5000'), Decimal('5000'))
        with self.assertRaises(ValidationError) as ctx:
            AmountValidator.validate_amount('')
        self.assertEqual(ctx.exception.code, 'AMOUNT_REQUIRED')
        for bad in ['0', '-10', 'abc', 'NaN']:
            with self.assertRaises(ValidationError):
                AmountValidator.validate_amount(bad)

    def test_rent_and_capacity(self):
        self.assertEqual(AmountValidator.validate_rent('0'), Decimal('0'))
        with self.assertRaises(ValidationError):
            AmountValidator.validate_rent('-1')
        self.assertEqual(CapacityValidator.validate_capacity('2'), 2)
        with self.assertRaises(ValidationError):
            CapacityValidator.validate_capacity(0)
        self.assertEqual(CapacityValidator.validate_capacity(0, minimum=0), 0)

    def test_identifiers(self):
        self.assertEqual(IdentifierValidator.validate_hostel('7'), 7)
        self.assertIsNone(IdentifierValidator.validate_hostel(''))
        self.assertIsNone(IdentifierValidator.validate_hostel(None))
        for bad in ['abc', '1.5', '0', '-3', [1]]:
            with self.assertRaises(ValidationError) as ctx:
                IdentifierValidator.validate_hostel(bad)
            self.assertEqual(ctx.exception.code, 'INVALID_HOSTEL')
        with self.assertRaises(ValidationError) as ctx:
            IdentifierValidator.validate_id(None, 'room', 'INVALID_ROOM', 'Select a room')
        self.assertEqual(ctx.exception.details, {'field': 'room'})


class StatusToggleCoordinatorTestCase(SimpleTestCase):
    """Test cases for the per-entity in-flight guard"""

    def setUp(self):
        cache.clear()
        self.coordinator = StatusToggleCoordinator('test')

    def test_begin_toggle_refuses_second_concurrent_toggle(self):
        self.assertTrue(self.coordinator.begin_toggle(1))
        self.assertFalse(self.coordinator.begin_toggle(1))
        # other ids are independent
        self.assertTrue(self.coordinator.begin_toggle(2))

    def test_complete_toggle_applies_and_clears(self):
        applied = []
        self.coordinator.begin_toggle(1)
        result = self.coordinator.complete_toggle(1, Ok('patched'), apply=applied.append)
        self.assertTrue(result.ok)
        self.assertEqual(applied, ['patched'])
        self.assertTrue(self.coordinator.begin_toggle(1))

    def test_complete_toggle_reverts_on_failure(self):
        reverted = []
        self.coordinator.begin_toggle(1)
        error = BusinessLogicError("nope")
        result = self.coordinator.complete_toggle(1, Err(error), revert=lambda: reverted.append(True))
        self.assertFalse(result.ok)
        self.assertIs(result.error, error)
        self.assertEqual(reverted, [True])
        self.assertTrue(self.coordinator.begin_toggle(1))

    def test_marker_cleared_when_apply_raises(self):
        self.coordinator.begin_toggle(1)

        def broken_apply(value):
            raise RuntimeError("boom")

        with self.assertRaises(RuntimeError):
            self.coordinator.complete_toggle(1, Ok(None), apply=broken_apply)
        self.assertTrue(self.coordinator.begin_toggle(1))

    def test_second_toggle_while_in_flight_is_a_noop(self):
        mutations = []

        def mutation():
            mutations.append('first')
            # a double tap arriving while the first toggle is still running
            self.assertIsNone(self.coordinator.run(7, lambda: mutations.append('second')))
            return 'done'

        result = self.coordinator.run(7, mutation)
        self.assertTrue(result.ok)
        self.assertEqual(result.value, 'done')
        self.assertEqual(mutations, ['first'])
        self.assertTrue(self.coordinator.begin_toggle(7))

    def test_concurrent_threads_apply_exactly_one_mutation(self):
        started = threading.Event()
        release = threading.Event()
        applied = []
        results = []

        def slow_mutation():
            started.set()
            release.wait(5)
            applied.append(1)
            return 'ok'

        worker = threading.Thread(target=lambda: results.append(self.coordinator.run(3, slow_mutation)))
        worker.start()
        started.wait(5)
        second = self.coordinator.run(3, lambda: applied.append(2))
        release.set()
        worker.join(5)

        self.assertIsNone(second)
        self.assertEqual(applied, [1])
        self.assertTrue(results[0].ok)

    def test_application_error_becomes_err(self):
        def failing():
            raise ValidationError("bad input")

        result = self.coordinator.run(1, failing)
        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, ValidationError)
        self.assertTrue(self.coordinator.begin_toggle(1))

    def test_unexpected_error_releases_and_propagates(self):
        def failing():
            raise KeyError('x')

        with self.assertRaises(KeyError):
            self.coordinator.run(1, failing)
        self.assertTrue(self.coordinator.begin_toggle(1))


class BaseRepositoryTestCase(TestCase):
    """Test cases for owner-scoped data access"""

    def setUp(self):
        self.account = Account.objects.create(name='Owner One')
        self.other_account = Account.objects.create(name='Owner Two')
        self.ctx = OwnerContext(account_id=self.account.id)
        self.other_ctx = OwnerContext(account_id=self.other_account.id)
        self.repo = BaseRepository(Hostel)

    def _hostel(self, ctx, name):
        return self.repo.create(ctx, name=name, address='Main Road', contact='9876543210', capacity=10)

    def test_missing_owner_is_not_authenticated(self):
        with self.assertRaises(NotAuthenticatedError):
            self.repo.fetch(None)
        with self.assertRaises(NotAuthenticatedError):
            self.repo.create(OwnerContext(account_id=None), name='x')

    def test_owner_isolation(self):
        mine = self._hostel(self.ctx, 'Sunrise')
        theirs = self._hostel(self.other_ctx, 'Moonlight')

        self.assertEqual([h.id for h in self.repo.fetch(self.ctx)], [mine.id])
        with self.assertRaises(NotFoundError):
            self.repo.get_for_owner(self.ctx, theirs.id)
        with self.assertRaises(NotFoundError):
            self.repo.update(self.ctx, theirs.id, name='Taken')
        with self.assertRaises(NotFoundError):
            self.repo.delete(self.ctx, theirs.id)

        theirs.refresh_from_db()
        self.assertEqual(theirs.name, 'Moonlight')

    def test_update_and_delete(self):
        hostel = self._hostel(self.ctx, 'Sunrise')
        updated = self.repo.update(self.ctx, hostel.id, name='Sunrise PG')
        self.assertEqual(updated.name, 'Sunrise PG')
        self.repo.delete(self.ctx, hostel.id)
        self.assertFalse(self.repo.exists(self.ctx, id=hostel.id))

    def test_database_failure_becomes_storage_error(self):
        with mock.patch.object(Hostel.objects, 'create', side_effect=DatabaseError('connection lost')):
            with self.assertRaises(StorageError):
                self._hostel(self.ctx, 'Sunrise')

    def test_integrity_error_passes_through(self):
        with mock.patch.object(Hostel.objects, 'create', side_effect=IntegrityError('duplicate')):
            with self.assertRaises(IntegrityError):
                self._hostel(self.ctx, 'Sunrise')


class OwnerContextTestCase(SimpleTestCase):

    def test_anonymous_user(self):
        from django.contrib.auth.models import AnonymousUser
        with self.assertRaises(NotAuthenticatedError):
            OwnerContext.from_user(AnonymousUser())
        with self.assertRaises(NotAuthenticatedError):
            OwnerContext.from_user(None)

    def test_user_without_account(self):
        user = mock.Mock(is_authenticated=True, account_id=None)
        with self.assertRaises(NotAuthenticatedError) as ctx:
            OwnerContext.from_user(user)
        self.assertEqual(ctx.exception.code, 'NO_ACCOUNT')


class RequestIDMiddlewareTestCase(TestCase):

    def test_request_id_header(self):
        response = self.client.get('/api/hostels/')
        self.assertEqual(len(response['X-Request-ID']), 8)

        response = self.client.get('/api/hostels/', HTTP_X_REQUEST_ID='client-42')
        self.assertEqual(response['X-Request-ID'], 'client-42')

    def test_filter_falls_back_outside_requests(self):
        import logging
        from common.logging_config import RequestIDFilter
        record = logging.LogRecord('staytrack', logging.INFO, __file__, 1, 'msg', None, None)
        RequestIDFilter().filter(record)
        self.assertEqual(record.request_id, 'N/A')
