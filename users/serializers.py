"""
Users — Serializers

JWT claims and the read-only user representation. The role claim in the
token is informational for the floor terminals; permission checks always
re-read the role from the User row.

@file users/serializers.py
"""

from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from .models import User


class PlantTokenObtainPairSerializer(TokenObtainPairSerializer):

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token['email'] = user.email
        token['role'] = user.role
        return token

    def validate(self, attrs):
        data = super().validate(attrs)
        data['user'] = UserReadSerializer(self.user).data
        return data


class UserReadSerializer(serializers.ModelSerializer):
    role_display = serializers.CharField(source='get_role_display', read_only=True)
    capabilities = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id', 'email', 'first_name', 'last_name',
            'role', 'role_display', 'capabilities', 'is_active', 'date_joined',
        ]
        read_only_fields = fields

    def get_capabilities(self, obj) -> dict[str, bool]:
        """What the floor terminal should offer this user."""
        return {
            'adjust_stock': obj.can_adjust_stock,
            'record_runs': obj.can_record_runs,
            'view_ledger': obj.is_plant_admin,
            'edit_catalog': obj.is_plant_admin,
        }
