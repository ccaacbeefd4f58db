from rest_framework import serializers
from .models import Room


class RoomSerializer(serializers.ModelSerializer):
    """Serializer for a stored Room"""
    status = serializers.ReadOnlyField()
    hostel_name = serializers.CharField(source='hostel.name', read_only=True, default=None)

    class Meta:
        model = Room
        fields = [
            'id', 'number', 'floor', 'capacity', 'occupied', 'status',
            'hostel', 'hostel_name', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class RoomOccupancySerializer(serializers.Serializer):
    """Room with occupancy recomputed from active students"""
    id = serializers.IntegerField(source='room_id')
    number = serializers.CharField()
    floor = serializers.CharField()
    hostel = serializers.IntegerField(source='hostel_id', allow_null=True)
    capacity = serializers.IntegerField()
    occupied = serializers.IntegerField()
    beds_free = serializers.IntegerField()
    status = serializers.CharField()
