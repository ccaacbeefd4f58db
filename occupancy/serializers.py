from rest_framework import serializers
from rooms.serializers import RoomOccupancySerializer


class OccupancySummarySerializer(serializers.Serializer):
    """Aggregate occupancy with per-room breakdown"""
    total_rooms = serializers.IntegerField()
    full_rooms = serializers.IntegerField()
    full_rooms_percentage = serializers.FloatField()
    total_capacity = serializers.IntegerField()
    total_occupied = serializers.IntegerField()
    vacancy = serializers.IntegerField()
    active_students = serializers.IntegerField()
    occupancy_percentage = serializers.FloatField()
    rooms = RoomOccupancySerializer(many=True)
