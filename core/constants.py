"""
Application-wide constants.
Centralized constants following DRY principle.
"""

# User Roles
class UserRole:
    OWNER = 'OWNER'
    STUDENT = 'STUDENT'

    CHOICES = [
        (OWNER, 'Owner'),
        (STUDENT, 'Student'),
    ]


# Student Status
class StudentStatus:
    ACTIVE = 'Active'
    INACTIVE = 'Inactive'

    CHOICES = [
        (ACTIVE, 'Active'),
        (INACTIVE, 'Inactive'),
    ]

    @classmethod
    def flipped(cls, status):
        """Status a toggle moves to"""
        return cls.ACTIVE if status == cls.INACTIVE else cls.INACTIVE


# Room Status (derived, never stored)
class RoomStatus:
    FULL = 'Full'
    VACANT = 'Vacant'
    BEDS_FREE = '{free} Beds Free'


# Payment Status (derived by reconciliation)
class PaymentStatus:
    PAID = 'Paid'
    UNPAID = 'Unpaid'


# Reconciliation tabs
class PaymentTab:
    ALL = 'All'
    PAID = 'Paid'
    UNPAID = 'Unpaid'

    CHOICES = [ALL, PAID, UNPAID]


# Payment Methods
class PaymentMethod:
    CASH = 'Cash'
    UPI = 'UPI'
    OTHER = 'Other'

    CHOICES = [
        (CASH, 'Cash'),
        (UPI, 'UPI'),
        (OTHER, 'Other'),
    ]


# Expense Categories
class ExpenseCategory:
    ELECTRICITY = 'Electricity'
    KITCHEN = 'Kitchen'
    MAINTENANCE = 'Maintenance'
    STAFF_SALARY = 'Staff Salary'
    INTERNET = 'Internet'
    OTHER = 'Other'

    CHOICES = [
        (ELECTRICITY, 'Electricity'),
        (KITCHEN, 'Kitchen'),
        (MAINTENANCE, 'Maintenance'),
        (STAFF_SALARY, 'Staff Salary'),
        (INTERNET, 'Internet'),
        (OTHER, 'Other'),
    ]

    # Display metadata: icon name, foreground colour, background colour
    META = {
        ELECTRICITY: {'icon': 'flash', 'color': '#fbbf24', 'bg': '#fffbeb'},
        KITCHEN: {'icon': 'restaurant', 'color': '#f87171', 'bg': '#fef2f2'},
        MAINTENANCE: {'icon': 'construct', 'color': '#60a5fa', 'bg': '#eff6ff'},
        STAFF_SALARY: {'icon': 'people', 'color': '#34d399', 'bg': '#ecfdf5'},
        INTERNET: {'icon': 'wifi', 'color': '#818cf8', 'bg': '#eef2ff'},
        OTHER: {'icon': 'ellipsis-horizontal', 'color': '#9ca3af', 'bg': '#f3f4f6'},
    }

    @classmethod
    def catalogue(cls):
        """Categories with their display metadata, in display order"""
        return [
            {'name': value, **cls.META[value]}
            for value, _ in cls.CHOICES
        ]


# Mess Menu
class Weekday:
    MONDAY = 'Monday'
    TUESDAY = 'Tuesday'
    WEDNESDAY = 'Wednesday'
    THURSDAY = 'Thursday'
    FRIDAY = 'Friday'
    SATURDAY = 'Saturday'
    SUNDAY = 'Sunday'

    ORDER = [MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY]
    CHOICES = [(day, day) for day in ORDER]


class Meal:
    BREAKFAST = 'breakfast'
    LUNCH = 'lunch'
    SNACKS = 'snacks'
    DINNER = 'dinner'

    ORDER = [BREAKFAST, LUNCH, SNACKS, DINNER]
    CHOICES = [
        (BREAKFAST, 'Breakfast'),
        (LUNCH, 'Lunch'),
        (SNACKS, 'Snacks'),
        (DINNER, 'Dinner'),
    ]


# User Preferences
class Theme:
    TEAL = 'teal'

    CHOICES = [
        ('teal', 'Teal'),
        ('purple', 'Purple'),
        ('blue', 'Blue'),
        ('orange', 'Orange'),
        ('pink', 'Pink'),
        ('green', 'Green'),
        ('indigo', 'Indigo'),
        ('red', 'Red'),
        ('amber', 'Amber'),
    ]


class Language:
    ENGLISH = 'en'
    TELUGU = 'te'

    CHOICES = [
        (ENGLISH, 'English'),
        (TELUGU, 'Telugu'),
    ]


# Field formats
class FieldFormat:
    PHONE_DIGITS = 10
    NATIONAL_ID_DIGITS = 12

