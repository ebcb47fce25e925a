"""
Users — DRF Permission Classes

Role checks for ViewSets. Roles come from the User row, so a client can
never elevate itself by sending a role claim.

@file users/permissions.py
"""

from rest_framework.permissions import SAFE_METHODS, BasePermission


class HasRole(BasePermission):
    """
    Checks that the user holds one of the roles listed in
    ``view.required_roles``. Superusers always pass.

    Usage::

        class MyView(APIView):
            permission_classes = [IsAuthenticated, HasRole]
            required_roles = ['ADMIN', 'SUPERVISOR']
    """

    def has_permission(self, request, view):
        required = getattr(view, 'required_roles', [])
        if not required:
            return True
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if user.is_superuser:
            return True
        return user.has_role(*required)


class IsAdmin(BasePermission):
    """User must be superuser or hold the ADMIN role."""

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return user.is_plant_admin


class IsAdminOrReadOnly(BasePermission):
    """Read is open to authenticated users; writes require ADMIN."""

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if request.method in SAFE_METHODS:
            return True
        return user.is_plant_admin
