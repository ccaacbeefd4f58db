from rest_framework import serializers
from .models import Account
from users.models import User, UserPreference


class AccountSerializer(serializers.ModelSerializer):
    """Serializer for Account"""

    class Meta:
        model = Account
        fields = ['id', 'name', 'phone', 'hostel_details', 'is_active', 'created_at', 'updated_at']
        read_only_fields = ['id', 'is_active', 'created_at', 'updated_at']


class SignUpSerializer(serializers.Serializer):
    """Owner sign-up form"""
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    name = serializers.CharField(max_length=255)
    phone = serializers.CharField(max_length=15, required=False, allow_blank=True, default='')
    hostel_details = serializers.CharField(required=False, allow_blank=True, default='')


class SignInSerializer(serializers.Serializer):
    """Email + password sign-in form"""
    email = serializers.CharField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class UserSerializer(serializers.ModelSerializer):
    """Signed-in user"""
    account = AccountSerializer(read_only=True)

    class Meta:
        model = User
        fields = ['id', 'email', 'first_name', 'role', 'phone', 'account']
        read_only_fields = fields


class UserPreferenceSerializer(serializers.ModelSerializer):
    """Theme, language and first-run flag"""

    class Meta:
        model = UserPreference
        fields = ['theme', 'language', 'onboarding_complete', 'updated_at']
        read_only_fields = ['updated_at']
