"""
Users — Views

Token login for floor terminals and back-office staff, token rotation,
and the current user with the operations their role unlocks.

@file users/views.py
"""

from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from .serializers import PlantTokenObtainPairSerializer, UserReadSerializer


class LoginView(TokenObtainPairView):
    """POST /v1/auth/login/ — email + password for an access/refresh pair."""
    permission_classes = [AllowAny]
    serializer_class = PlantTokenObtainPairSerializer


class RefreshView(TokenRefreshView):
    """POST /v1/auth/refresh/ — rotate; the old refresh token is blacklisted."""
    permission_classes = [AllowAny]


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(UserReadSerializer(request.user).data)
