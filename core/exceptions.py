"""
Custom exceptions for the application.
Following domain-driven design principles with specific exception types.
"""


class BaseApplicationException(Exception):
    """Base exception for all application-specific exceptions"""
    default_message = "An application error occurred"
    default_code = None

    def __init__(self, message=None, code=None, details=None):
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(BaseApplicationException):
    """Raised when validation fails"""
    default_message = "Validation failed"
    default_code = "VALIDATION_ERROR"


class NotAuthenticatedError(BaseApplicationException):
    """Raised when no signed-in owner is available for an operation"""
    default_message = "You must be logged in"
    default_code = "NOT_AUTHENTICATED"


class StorageError(BaseApplicationException):
    """Raised when the backing store fails (network, permission, database)"""
    default_message = "Storage backend failure"
    default_code = "STORAGE_ERROR"


class NotFoundError(BaseApplicationException):
    """Raised when a resource is not found"""
    default_message = "Resource not found"
    default_code = "NOT_FOUND"

    def __init__(self, resource_type=None, resource_id=None, **kwargs):
        self.resource_type = resource_type
        self.resource_id = resource_id
        if 'message' not in kwargs and resource_type:
            kwargs['message'] = f"{resource_type} not found"
        super().__init__(**kwargs)


class PermissionDeniedError(BaseApplicationException):
    """Raised when user doesn't have permission"""
    default_message = "Permission denied"
    default_code = "PERMISSION_DENIED"


class BusinessLogicError(BaseApplicationException):
    """Raised when business rule is violated"""
    default_message = "Business rule violation"
    default_code = "BUSINESS_RULE"


class RoomFullError(BusinessLogicError):
    """Raised when a student would push a room past its capacity"""
    default_message = "Room is full"
    default_code = "ROOM_FULL"


class DuplicatePaymentError(BusinessLogicError):
    """Raised when a payment already exists for the student and month"""
    default_message = "Payment already recorded for this month"
    default_code = "DUPLICATE_PAYMENT"
