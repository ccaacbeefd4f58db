from rest_framework import serializers
from core.constants import Meal, Weekday


class SetMealSerializer(serializers.Serializer):
    """Update one meal of one day"""
    day = serializers.ChoiceField(choices=Weekday.CHOICES)
    meal = serializers.ChoiceField(choices=Meal.CHOICES)
    content = serializers.CharField(allow_blank=True)
