"""
Account Service Layer
Handles sign-up, sign-in and sign-out for owners.
Follows Service Layer pattern for separation of concerns.
"""
from typing import Optional
from django.contrib.auth import authenticate, login, logout
from django.db import transaction
from rest_framework_simplejwt.tokens import RefreshToken
from core.constants import UserRole
from core.exceptions import NotAuthenticatedError, ValidationError
from core.services import BaseService
from core.validators import RequiredFieldsValidator
from .models import Account
from users.models import User, UserPreference
import logging

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AuthService(BaseService):
    """
    Service for owner authentication.
    Email is the login identifier and doubles as the username.
    """

    @staticmethod
    def _normalize_email(email) -> str:
        return (email or '').strip().lower()

    @staticmethod
    def issue_tokens(user) -> dict:
        """JWT access/refresh pair for user"""
        refresh = RefreshToken.for_user(user)
        return {'refresh': str(refresh), 'access': str(refresh.access_token)}

    def sign_up(self, email: str, password: str, name: str, hostel_details: str = '', phone: str = '') -> User:
        """
        Create an owner account and its user.

        Raises:
            ValidationError: If fields are missing, the password is too short
                or the email is already registered
        """
        RequiredFieldsValidator.validate(
            {'email': email, 'password': password, 'name': name},
            ['email', 'password', 'name']
        )
        email = self._normalize_email(email)
        if '@' not in email:
            raise ValidationError(message="Enter a valid email address", code="INVALID_EMAIL")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                message=f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                code="WEAK_PASSWORD"
            )
        if User.objects.filter(username=email).exists():
            raise ValidationError(message="Email already registered", code="EMAIL_IN_USE")

        with transaction.atomic():
            account = Account.objects.create(name=name.strip(), phone=phone, hostel_details=hostel_details)
            user = User.objects.create_user(
                username=email,
                email=email,
                password=password,
                first_name=name.strip(),
                account=account,
                role=UserRole.OWNER,
                phone=phone,
            )
            UserPreference.objects.create(user=user)

        self.log_info("Owner signed up", user_id=user.id, account_id=account.id)
        return user

    def sign_in(self, email: str, password: str, request=None) -> User:
        """
        Authenticate by email and password.

        A failed attempt leaves the request fully signed out.

        Raises:
            NotAuthenticatedError: On bad credentials or an inactive account
        """
        user = authenticate(request, username=self._normalize_email(email), password=password or '')
        if user is None or (user.account_id and not user.account.is_active):
            if request is not None and hasattr(request, 'session'):
                logout(request)
            self.log_warning("Sign-in failed", email=self._normalize_email(email))
            raise NotAuthenticatedError("Invalid email or password", code="INVALID_CREDENTIALS")

        if request is not None and hasattr(request, 'session'):
            login(request, user)
        self.log_info("User signed in", user_id=user.id)
        return user

    @staticmethod
    def current_user(request) -> Optional[User]:
        """Signed-in user for the request, or None"""
        user = getattr(request, 'user', None)
        if user is not None and user.is_authenticated:
            return user
        return None

    def sign_out(self, request) -> None:
        """Clear the session"""
        user = self.current_user(request)
        if hasattr(request, 'session'):
            logout(request)
        if user is not None:
            self.log_info("User signed out", user_id=user.id)
