"""
Payment reconciler.

Joins an owner's students with the payments of one month and derives a
Paid/Unpaid status per student. The join key is (student id, month key);
month keys come from core.months.format_month only.

Everything here is pure: inputs are never mutated and the same inputs always
give the same reconciliation. Students and payments may arrive in any order.
"""
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Iterable, Optional, Tuple
import logging

from core.constants import PaymentStatus, PaymentTab, StudentStatus
from occupancy.calculator import percentage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconciledStudent:
    """One student's row in a month's reconciliation"""
    student_id: int
    name: str
    phone: str
    room_id: Optional[int]
    room_number: str
    rent: Decimal
    status: str
    payment_status: str
    payment: Optional[Any] = None

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID

    @property
    def is_active(self) -> bool:
        return self.status != StudentStatus.INACTIVE


@dataclass(frozen=True)
class Reconciliation:
    """Reconciled rows for one month plus fee-collection aggregates"""
    month: str
    rows: Tuple[ReconciledStudent, ...]

    @property
    def total_active(self) -> int:
        return sum(1 for row in self.rows if row.is_active)

    @property
    def paid_count(self) -> int:
        return sum(1 for row in self.rows if row.is_active and row.is_paid)

    @property
    def unpaid_count(self) -> int:
        return self.total_active - self.paid_count

    @property
    def collection_percentage(self) -> float:
        return percentage(self.paid_count, self.total_active)

    @property
    def collected_amount(self) -> Decimal:
        return sum((row.payment.amount for row in self.rows if row.is_paid), Decimal('0'))

    def get(self, student_id) -> Optional[ReconciledStudent]:
        for row in self.rows:
            if row.student_id == student_id:
                return row
        return None

    def _patch(self, student_id, **changes) -> 'Reconciliation':
        return replace(self, rows=tuple(
            replace(row, **changes) if row.student_id == student_id else row
            for row in self.rows
        ))

    def mark_paid(self, student_id, payment) -> 'Reconciliation':
        """Copy with student_id patched to Paid after a payment was recorded"""
        return self._patch(student_id, payment_status=PaymentStatus.PAID, payment=payment)

    def mark_unpaid(self, student_id) -> 'Reconciliation':
        """Copy with student_id patched back to Unpaid after its payment was deleted"""
        return self._patch(student_id, payment_status=PaymentStatus.UNPAID, payment=None)


class ReconciliationView:
    """
    The reconciliation a screen is showing. A payment mutation patches it
    on success instead of re-reconciling the whole month.
    """

    def __init__(self, reconciliation: Reconciliation):
        self.reconciliation = reconciliation

    def paid(self, payment):
        self.reconciliation = self.reconciliation.mark_paid(payment.student_id, payment)

    def unpaid(self, payment):
        self.reconciliation = self.reconciliation.mark_unpaid(payment.student_id)

    def row(self, student_id) -> Optional[ReconciledStudent]:
        return self.reconciliation.get(student_id)


def _room_number(student) -> str:
    number = getattr(student, 'room_number', None)
    if number is None:
        room = getattr(student, 'room', None)
        number = getattr(room, 'number', '') if room is not None else ''
    return number or ''


def index_payments(payments: Iterable, month: str) -> dict:
    """
    student id -> payment for month.

    At most one payment per student and month is expected. When there are
    more, the lowest id wins and the anomaly is logged.
    """
    lookup = {}
    for payment in sorted(payments, key=lambda p: p.id):
        if payment.month != month:
            continue
        kept = lookup.get(payment.student_id)
        if kept is None:
            lookup[payment.student_id] = payment
        else:
            logger.warning(
                f"Duplicate payment for student {payment.student_id} in {month}: "
                f"keeping #{kept.id}, ignoring #{payment.id}"
            )
    return lookup


def reconcile(students: Iterable, payments: Iterable, month: str) -> Reconciliation:
    """
    Attach Paid/Unpaid status for month to every student.

    Args:
        students: Students of one owner
        payments: Payments of the same owner; entries for other months are ignored
        month: Canonical month key, e.g. "March 2025"
    """
    lookup = index_payments(payments, month)
    rows = []
    for student in students:
        payment = lookup.get(student.id)
        rows.append(ReconciledStudent(
            student_id=student.id,
            name=student.name,
            phone=getattr(student, 'phone', ''),
            room_id=student.room_id,
            room_number=_room_number(student),
            rent=student.rent,
            status=student.status,
            payment_status=PaymentStatus.PAID if payment is not None else PaymentStatus.UNPAID,
            payment=payment,
        ))
    return Reconciliation(month=month, rows=tuple(rows))


def filter_reconciled(rows: Iterable[ReconciledStudent], tab: str = PaymentTab.ALL,
                      search: str = '') -> Tuple[ReconciledStudent, ...]:
    """
    View projection over reconciled rows: tab (All/Paid/Unpaid) and a
    case-insensitive substring search on name and room number.
    """
    needle = (search or '').strip().lower()
    result = []
    for row in rows:
        if needle and needle not in row.name.lower() and needle not in row.room_number.lower():
            continue
        if tab == PaymentTab.PAID and not row.is_paid:
            continue
        if tab == PaymentTab.UNPAID and row.is_paid:
            continue
        result.append(row)
    return tuple(result)
