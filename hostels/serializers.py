from rest_framework import serializers
from .models import Hostel


class HostelSerializer(serializers.ModelSerializer):
    """Serializer for Hostel"""
    room_count = serializers.IntegerField(read_only=True, required=False)
    room_capacity = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = Hostel
        fields = [
            'id', 'name', 'address', 'contact', 'capacity',
            'room_count', 'room_capacity', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        extra_kwargs = {
            'name': {'required': False},
            'address': {'required': False},
            'contact': {'required': False},
            'capacity': {'required': False},
        }
