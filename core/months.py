"""
Month-string keys.

Payments and expenses are partitioned by a "<MonthName> <Year>" key such as
"March 2025". Every key in the system must come from format_month() so that
joins never depend on the server locale (strftime('%B') is locale-aware).
"""
from datetime import date, datetime

from django.utils import timezone

from core.exceptions import ValidationError

MONTH_NAMES = (
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
)

_MONTH_INDEX = {name.lower(): index for index, name in enumerate(MONTH_NAMES, start=1)}


# Years a month key may carry; date() itself stops at 9999
MIN_YEAR = 1
MAX_YEAR = 9998


def _invalid_month(key) -> ValidationError:
    return ValidationError(
        message=f"Invalid month '{key}'. Expected e.g. 'March 2025'",
        code="INVALID_MONTH",
    )


def format_month(value) -> str:
    """Canonical month key for a date or datetime"""
    if isinstance(value, datetime) and timezone.is_aware(value):
        value = timezone.localtime(value)
    return f"{MONTH_NAMES[value.month - 1]} {value.year}"


def current_month() -> str:
    return format_month(timezone.localdate())


def parse_month(key: str) -> date:
    """
    Parse a month key back into the first day of that month.

    Raises:
        ValidationError: If the key is not "<MonthName> <Year>" or the year
            is outside MIN_YEAR..MAX_YEAR
    """
    try:
        name, year = key.strip().split(' ')
        year = int(year)
        month = _MONTH_INDEX[name.lower()]
    except (AttributeError, KeyError, ValueError):
        raise _invalid_month(key)
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise _invalid_month(key)
    return date(year, month, 1)


def normalize_month(key: str) -> str:
    """Validate a client-supplied key and return its canonical spelling"""
    return format_month(parse_month(key))


def shift_month(key: str, delta: int) -> str:
    """
    Move a month key forwards or backwards by delta months.

    Raises:
        ValidationError: If the result falls outside MIN_YEAR..MAX_YEAR
    """
    first = parse_month(key)
    index = first.year * 12 + (first.month - 1) + delta
    year, month = divmod(index, 12)
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationError(
            message=f"'{key}' moved by {delta} months is out of range",
            code="INVALID_MONTH",
        )
    return format_month(date(year, month + 1, 1))
