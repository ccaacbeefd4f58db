"""
Validation utilities and validators.
Centralized validation logic following single responsibility principle.
"""
from decimal import Decimal, InvalidOperation
from typing import Optional
from core.constants import FieldFormat
from core.exceptions import ValidationError as AppValidationError


class RequiredFieldsValidator:
    """Validates presence of required form fields"""

    @staticmethod
    def validate(data: dict, fields):
        """Raise if any of fields is missing or blank"""
        missing = [
            field for field in fields
            if data.get(field) is None or str(data.get(field)).strip() == ''
        ]
        if missing:
            raise AppValidationError(
                message="Please fill in required fields",
                code="REQUIRED_FIELDS",
                details={"missing": missing}
            )


class ContactValidator:
    """Validates phone numbers and identity numbers"""

    @staticmethod
    def _digits(value, length: int, field: str, label: str):
        value = (value or '').strip()
        if not (value.isdigit() and len(value) == length):
            raise AppValidationError(
                message=f"{label} must be exactly {length} digits",
                code="INVALID_FORMAT",
                details={"field": field}
            )
        return value

    @classmethod
    def validate_phone(cls, value, field: str = 'phone'):
        """Validate a 10-digit phone number"""
        return cls._digits(value, FieldFormat.PHONE_DIGITS, field, "Phone number")

    @classmethod
    def validate_national_id(cls, value, field: str = 'national_id'):
        """Validate a 12-digit identity number"""
        return cls._digits(value, FieldFormat.NATIONAL_ID_DIGITS, field, "ID number")


class AmountValidator:
    """Validates money amounts"""

    MAX_AMOUNT = Decimal('9999999.99')

    @classmethod
    def validate_amount(cls, amount, field: str = 'amount') -> Decimal:
        """Validate a positive amount was entered"""
        if amount is None or str(amount).strip() == '':
            raise AppValidationError(
                message="Please enter an amount",
                code="AMOUNT_REQUIRED",
                details={"field": field}
            )
        try:
            value = Decimal(str(amount))
        except (InvalidOperation, ValueError):
            raise AppValidationError(
                message="Amount must be a number",
                code="INVALID_AMOUNT",
                details={"field": field}
            )
        if not value.is_finite() or value <= 0:
            raise AppValidationError(
                message="Amount must be greater than zero",
                code="INVALID_AMOUNT",
                details={"field": field}
            )
        if value > cls.MAX_AMOUNT:
            raise AppValidationError(
                message="Amount exceeds maximum allowed",
                code="AMOUNT_TOO_LARGE",
                details={"field": field}
            )
        return value

    @classmethod
    def validate_rent(cls, rent) -> Decimal:
        """Rent may be zero but never negative"""
        try:
            value = Decimal(str(rent))
        except (InvalidOperation, ValueError):
            raise AppValidationError(message="Rent must be a number", code="INVALID_RENT_AMOUNT")
        if not value.is_finite() or value < 0:
            raise AppValidationError(message="Rent amount cannot be negative", code="INVALID_RENT_AMOUNT")
        if value > cls.MAX_AMOUNT:
            raise AppValidationError(message="Rent amount exceeds maximum allowed", code="RENT_AMOUNT_TOO_LARGE")
        return value


class CapacityValidator:
    """Validates capacities"""

    @staticmethod
    def validate_capacity(capacity, minimum: int = 1, field: str = 'capacity') -> int:
        try:
            value = int(capacity)
        except (TypeError, ValueError):
            raise AppValidationError(
                message="Capacity must be a whole number",
                code="INVALID_CAPACITY",
                details={"field": field}
            )
        if value < minimum:
            raise AppValidationError(
                message=f"Capacity must be at least {minimum}",
                code="INVALID_CAPACITY",
                details={"field": field, "min": minimum}
            )
        return value


class IdentifierValidator:
    """Validates record ids arriving from forms and query strings"""

    @staticmethod
    def validate_id(value, field: str, code: str, message: str) -> int:
        try:
            value = int(value)
        except (TypeError, ValueError):
            raise AppValidationError(message=message, code=code, details={"field": field})
        if value < 1:
            raise AppValidationError(message=message, code=code, details={"field": field})
        return value

    @classmethod
    def validate_hostel(cls, value) -> Optional[int]:
        """Optional hostel filter or grouping; blank means none"""
        if value in (None, ''):
            return None
        return cls.validate_id(value, 'hostel', 'INVALID_HOSTEL', "Select a valid hostel")
