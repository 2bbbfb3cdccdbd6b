from rest_framework import permissions

from .models import user_is_admin


class IsAdminRole(permissions.BasePermission):
    """Back-office access: authenticated users whose role claim is ``admin``."""

    message = "Admin access required."

    def has_permission(self, request, view):
        return user_is_admin(request.user)
