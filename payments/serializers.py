from rest_framework import serializers
from core.constants import PaymentMethod
from .models import Payment


class PaymentSerializer(serializers.ModelSerializer):
    """Serializer for Payment"""

    class Meta:
        model = Payment
        fields = ['id', 'student', 'student_name', 'month', 'amount', 'method', 'notes', 'date']
        read_only_fields = fields


class RecordPaymentSerializer(serializers.Serializer):
    """
    Record payment form. Amount is validated by the service so that a missing
    amount and a non-positive one report the same way everywhere.
    """
    student = serializers.IntegerField()
    month = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    amount = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    method = serializers.ChoiceField(choices=PaymentMethod.CHOICES, default=PaymentMethod.CASH)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class ReconciledStudentSerializer(serializers.Serializer):
    """One row of a month's reconciliation"""
    student_id = serializers.IntegerField()
    name = serializers.CharField()
    phone = serializers.CharField()
    room = serializers.IntegerField(source='room_id', allow_null=True)
    room_number = serializers.CharField()
    rent = serializers.DecimalField(max_digits=10, decimal_places=2)
    status = serializers.CharField()
    payment_status = serializers.CharField()
    payment = PaymentSerializer(allow_null=True)


class ReconciliationStatsSerializer(serializers.Serializer):
    """Fee-collection aggregates of a reconciliation"""
    paid_count = serializers.IntegerField()
    unpaid_count = serializers.IntegerField()
    total_active = serializers.IntegerField()
    collection_percentage = serializers.FloatField()
    collected_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
