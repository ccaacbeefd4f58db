"""
Owner context.

Every repository call takes an explicit OwnerContext instead of reading a
global "current user". All data is scoped by the owner's account.
"""
from dataclasses import dataclass
from typing import Any, Optional

from core.constants import UserRole
from core.exceptions import NotAuthenticatedError


@dataclass(frozen=True)
class OwnerContext:
    """Scope for owner-filtered data access"""
    account_id: int
    user: Optional[Any] = None

    @classmethod
    def from_user(cls, user) -> 'OwnerContext':
        """
        Build a context from an authenticated user.

        Raises:
            NotAuthenticatedError: If the user is anonymous or has no account
        """
        if user is None or not getattr(user, 'is_authenticated', False):
            raise NotAuthenticatedError()
        account_id = getattr(user, 'account_id', None)
        if not account_id:
            raise NotAuthenticatedError("User account not found", code="NO_ACCOUNT")
        return cls(account_id=account_id, user=user)

    @classmethod
    def from_request(cls, request) -> 'OwnerContext':
        return cls.from_user(getattr(request, 'user', None))

    @property
    def is_owner(self) -> bool:
        return getattr(self.user, 'role', UserRole.OWNER) == UserRole.OWNER

    @property
    def user_id(self) -> Optional[int]:
        return getattr(self.user, 'id', None)
