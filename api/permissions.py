"""
Multi-tenant permissions - ensure users can only access their own account data
"""
from rest_framework import permissions
from accounts.models import Account
from core.constants import UserRole


class IsAccountOwner(permissions.BasePermission):
    """
    Permission to only allow users to access data belonging to their account.
    """

    def has_permission(self, request, view):
        """Check if user is authenticated"""
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj):
        """Check if object belongs to user's account"""
        account_id = obj.id if isinstance(obj, Account) else getattr(obj, 'account_id', None)
        return account_id is not None and account_id == request.user.account_id


class IsOwner(permissions.BasePermission):
    """
    Permission to allow the hostel owner role only
    """
    message = 'Only the hostel owner can do this.'

    def has_permission(self, request, view):
        """Check if user is authenticated, has an account and is an owner"""
        if not (request.user and request.user.is_authenticated):
            return False
        return request.user.role == UserRole.OWNER and bool(request.user.account_id)
