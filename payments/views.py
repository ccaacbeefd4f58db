from django.http import HttpResponse
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from core.constants import PaymentTab
from core.context import OwnerContext
from core.dto import PaymentDTO
from core.exceptions import ValidationError
from core.months import shift_month
from .reconciler import filter_reconciled, ReconciliationView
from .serializers import (
    PaymentSerializer, RecordPaymentSerializer,
    ReconciledStudentSerializer, ReconciliationStatsSerializer
)
from .services import PaymentService
from .utils import export_reconciliation_csv, generate_payment_receipt_pdf
from api.permissions import IsOwner

IN_FLIGHT_DETAIL = 'A payment change for this student and month is already in progress'


def _neighbour(month: str, delta: int):
    """Adjacent month key for navigation, None past the first or last supported month"""
    try:
        return shift_month(month, delta)
    except ValidationError:
        return None


class PaymentViewSet(viewsets.ViewSet):
    """
    ViewSet for rent payments
    Paid/Unpaid status is always derived by reconciling students with the
    month's payments; nothing is stored on the student.
    """
    permission_classes = [IsAuthenticated, IsOwner]
    lookup_value_regex = r'\d+'

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.service = PaymentService()

    def _month(self, request) -> str:
        return self.service.resolve_month(
            request.query_params.get('month'),
            request.query_params.get('offset', 0),
        )

    def list(self, request):
        ctx = OwnerContext.from_request(request)
        payments = self.service.list_payments(ctx, self._month(request))
        return Response(PaymentSerializer(payments, many=True).data)

    def retrieve(self, request, pk=None):
        ctx = OwnerContext.from_request(request)
        return Response(PaymentSerializer(self.service.get_payment(ctx, pk)).data)

    def create(self, request):
        """Record a payment"""
        ctx = OwnerContext.from_request(request)
        serializer = RecordPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        view = ReconciliationView(self.service.reconcile_month(ctx, data['month']))
        result = self.service.record_payment(ctx, PaymentDTO(
            student_id=data['student'],
            month=data['month'],
            amount=data['amount'],
            method=data['method'],
            notes=data['notes'],
        ), apply=view.paid)
        return self._patched(view, result, status.HTTP_201_CREATED)

    def destroy(self, request, pk=None):
        """Delete a payment; the student becomes Unpaid for that month"""
        ctx = OwnerContext.from_request(request)
        payment = self.service.get_payment(ctx, pk)
        view = ReconciliationView(self.service.reconcile_month(ctx, payment.month))
        result = self.service.delete_payment(ctx, payment.id, apply=view.unpaid)
        return self._patched(view, result, status.HTTP_200_OK)

    @staticmethod
    def _patched(view, result, success_status):
        if result is None:
            return Response({'applied': False, 'detail': IN_FLIGHT_DETAIL}, status=status.HTTP_202_ACCEPTED)
        if not result.ok:
            raise result.error
        reconciliation = view.reconciliation
        return Response({
            'applied': True,
            'month': reconciliation.month,
            'student': ReconciledStudentSerializer(view.row(result.value.student_id)).data,
            'stats': ReconciliationStatsSerializer(reconciliation).data,
        }, status=success_status)

    @action(detail=False, methods=['get'])
    def reconcile(self, request):
        """
        Month reconciliation.

        Query params: month ("March 2025", default current), offset (months
        to move from month), tab (All/Paid/Unpaid), search.
        """
        ctx = OwnerContext.from_request(request)
        tab = request.query_params.get('tab', PaymentTab.ALL)
        if tab not in PaymentTab.CHOICES:
            raise ValidationError(message=f"Unknown tab '{tab}'", code="INVALID_TAB")

        reconciliation = self.service.reconcile_month(ctx, self._month(request))
        rows = filter_reconciled(reconciliation.rows, tab, request.query_params.get('search', ''))
        return Response({
            'month': reconciliation.month,
            'previous_month': _neighbour(reconciliation.month, -1),
            'next_month': _neighbour(reconciliation.month, 1),
            'tab': tab,
            'stats': ReconciliationStatsSerializer(reconciliation).data,
            'count': len(rows),
            'results': ReconciledStudentSerializer(rows, many=True).data,
        })

    @action(detail=False, methods=['get'])
    def export(self, request):
        """CSV of the month's reconciliation (honours tab and search)"""
        ctx = OwnerContext.from_request(request)
        reconciliation = self.service.reconcile_month(ctx, self._month(request))
        rows = filter_reconciled(
            reconciliation.rows,
            request.query_params.get('tab', PaymentTab.ALL),
            request.query_params.get('search', ''),
        )
        return export_reconciliation_csv(reconciliation, rows)

    @action(detail=True, methods=['get'])
    def receipt(self, request, pk=None):
        """PDF receipt for one payment"""
        ctx = OwnerContext.from_request(request)
        payment = self.service.get_payment(ctx, pk)
        room_number = payment.student.room_number if payment.student_id else ''
        buffer = generate_payment_receipt_pdf(payment, account_name=request.user.account.name, room_number=room_number)
        response = HttpResponse(buffer.getvalue(), content_type='application/pdf')
        month_slug = payment.month.replace(' ', '_')
        response['Content-Disposition'] = f'attachment; filename="receipt_{payment.id}_{month_slug}.pdf"'
        return response
