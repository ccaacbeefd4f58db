"""
Data Transfer Objects (DTOs).
Used for passing data between layers without exposing domain models.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from decimal import Decimal

from core.constants import PaymentMethod, ExpenseCategory


@dataclass
class HostelDTO:
    """Data Transfer Object for Hostel"""
    id: Optional[int] = None
    name: str = ""
    address: str = ""
    contact: str = ""
    capacity: int = 0


@dataclass
class RoomDTO:
    """Data Transfer Object for Room"""
    id: Optional[int] = None
    number: str = ""
    floor: str = ""
    capacity: int = 1
    hostel_id: Optional[int] = None


@dataclass
class StudentDTO:
    """Data Transfer Object for Student"""
    id: Optional[int] = None
    name: str = ""
    phone: str = ""
    parent_phone: str = ""
    national_id: str = ""
    room_id: Optional[int] = None
    bed: str = ""
    rent: Decimal = Decimal('0')
    images: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PaymentDTO:
    """Data Transfer Object for Payment"""
    student_id: int = None
    month: str = ""
    amount: Decimal = None
    method: str = PaymentMethod.CASH
    notes: str = ""


@dataclass
class ExpenseDTO:
    """Data Transfer Object for Expense"""
    amount: Decimal = None
    category: str = ExpenseCategory.OTHER
    note: str = ""
    month: Optional[str] = None
