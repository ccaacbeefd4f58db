# accounts/tests.py

from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APITestCase

from core.constants import UserRole
from core.exceptions import NotAuthenticatedError, ValidationError
from users.models import User, UserPreference
from .models import Account
from .services import AuthService


class AuthServiceTestCase(TestCase):
    """Test cases for owner sign-up and sign-in"""

    def setUp(self):
        self.service = AuthService()

    def test_sign_up_creates_account_owner_and_preferences(self):
        user = self.service.sign_up(email=' Owner@Example.com ', password='secret1', name='Ravi',
                                    hostel_details='Sunrise PG, 20 beds')
        self.assertEqual(user.username, 'owner@example.com')
        self.assertEqual(user.role, UserRole.OWNER)
        self.assertEqual(user.account.name, 'Ravi')
        self.assertEqual(user.account.owner, user)
        self.assertTrue(UserPreference.objects.filter(user=user).exists())

    def test_sign_up_validation(self):
        with self.assertRaises(ValidationError) as ctx:
            self.service.sign_up(email='owner@example.com', password='123', name='Ravi')
        self.assertEqual(ctx.exception.code, 'WEAK_PASSWORD')

        self.service.sign_up(email='owner@example.com', password='secret1', name='Ravi')
        with self.assertRaises(ValidationError) as ctx:
            self.service.sign_up(email='OWNER@example.com', password='secret1', name='Ravi')
        self.assertEqual(ctx.exception.code, 'EMAIL_IN_USE')
        self.assertEqual(Account.objects.count(), 1)

    def test_sign_in(self):
        self.service.sign_up(email='owner@example.com', password='secret1', name='Ravi')
        self.assertEqual(self.service.sign_in(email='OWNER@example.com', password='secret1').first_name, 'Ravi')

        with self.assertRaises(NotAuthenticatedError) as ctx:
            self.service.sign_in(email='owner@example.com', password='wrong')
        self.assertEqual(ctx.exception.code, 'INVALID_CREDENTIALS')

    def test_inactive_account_cannot_sign_in(self):
        user = self.service.sign_up(email='owner@example.com', password='secret1', name='Ravi')
        Account.objects.filter(id=user.account_id).update(is_active=False)
        with self.assertRaises(NotAuthenticatedError):
            self.service.sign_in(email='owner@example.com', password='secret1')


class AuthAPITestCase(APITestCase):
    """Test cases for the auth endpoints"""

    def _sign_up(self):
        return self.client.post(reverse('accounts:signup'), {
            'email': 'owner@example.com', 'password': 'secret1', 'name': 'Ravi'
        }, format='json')

    def test_sign_up_and_use_access_token(self):
        response = self._sign_up()
        self.assertEqual(response.status_code, 201)
        self.assertIn('access', response.data)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        response = self.client.get(reverse('accounts:me'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['email'], 'owner@example.com')
        self.assertEqual(response.data['account']['name'], 'Ravi')

    def test_login(self):
        self._sign_up()
        response = self.client.post(reverse('accounts:login'), {
            'email': 'owner@example.com', 'password': 'secret1'
        }, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertIn('refresh', response.data)

    def test_bad_credentials(self):
        self._sign_up()
        response = self.client.post(reverse('accounts:login'), {
            'email': 'owner@example.com', 'password': 'nope'
        }, format='json')
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data['code'], 'INVALID_CREDENTIALS')

    def test_duplicate_email(self):
        self._sign_up()
        response = self._sign_up()
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['code'], 'EMAIL_IN_USE')

    def test_preferences(self):
        account = Account.objects.create(name='Ravi')
        user = User.objects.create_user(username='owner@example.com', password='secret1',
                                        account=account, role=UserRole.OWNER)
        self.client.force_authenticate(user=user)

        response = self.client.get(reverse('preferences'))
        self.assertEqual(response.data['theme'], 'teal')
        self.assertFalse(response.data['onboarding_complete'])

        response = self.client.patch(reverse('preferences'), {
            'theme': 'purple', 'language': 'te', 'onboarding_complete': True
        }, format='json')
        self.assertEqual(response.status_code, 200)
        prefs = UserPreference.objects.get(user=user)
        self.assertEqual((prefs.theme, prefs.language, prefs.onboarding_complete), ('purple', 'te', True))

        response = self.client.patch(reverse('preferences'), {'theme': 'neon'}, format='json')
        self.assertEqual(response.status_code, 400)

    def test_current_account(self):
        account = Account.objects.create(name='Ravi')
        user = User.objects.create_user(username='owner@example.com', password='secret1',
                                        account=account, role=UserRole.OWNER)
        Account.objects.create(name='Someone Else')
        self.client.force_authenticate(user=user)

        response = self.client.get(reverse('account-current'))
        self.assertEqual(response.data['name'], 'Ravi')
        response = self.client.patch(reverse('account-current'), {'hostel_details': '2 floors'}, format='json')
        self.assertEqual(response.data['hostel_details'], '2 floors')
        self.assertEqual(len(self.client.get(reverse('account-list')).data), 1)
