from rest_framework import serializers
from .models import Student


class StudentSerializer(serializers.ModelSerializer):
    """Serializer for Student"""
    room_number = serializers.ReadOnlyField()
    is_active = serializers.ReadOnlyField()

    class Meta:
        model = Student
        fields = [
            'id', 'name', 'phone', 'parent_phone', 'national_id',
            'room', 'room_number', 'bed', 'rent', 'status', 'is_active',
            'profile_image', 'id_front_image', 'id_back_image',
            'created_at', 'updated_at'
        ]
        read_only_fields = fields


class StudentWriteSerializer(serializers.Serializer):
    """
    Add/edit student form. Format checks (10-digit phone, 12-digit ID)
    happen in StudentService so they apply to every caller.
    """
    name = serializers.CharField(max_length=255)
    phone = serializers.CharField(max_length=20)
    parent_phone = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    national_id = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    room = serializers.IntegerField()
    bed = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    rent = serializers.DecimalField(max_digits=10, decimal_places=2)
    profile_image = serializers.ImageField(required=False, write_only=True)
    id_front_image = serializers.ImageField(required=False, write_only=True)
    id_back_image = serializers.ImageField(required=False, write_only=True)
