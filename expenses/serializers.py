from rest_framework import serializers
from core.constants import ExpenseCategory
from .models import Expense


class ExpenseSerializer(serializers.ModelSerializer):
    """Serializer for Expense with category display metadata"""
    category_meta = serializers.ReadOnlyField()

    class Meta:
        model = Expense
        fields = ['id', 'amount', 'category', 'category_meta', 'note', 'date', 'month']
        read_only_fields = fields


class ExpenseWriteSerializer(serializers.Serializer):
    amount = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    category = serializers.ChoiceField(choices=ExpenseCategory.CHOICES, default=ExpenseCategory.OTHER)
    note = serializers.CharField(required=False, allow_blank=True, default='')
    month = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
