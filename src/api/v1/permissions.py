"""Custom DRF permissions for the incentive desk."""
from rest_framework.permissions import SAFE_METHODS, BasePermission


class IsStaffUser(BasePermission):
    message = "관리자만 수행할 수 있습니다."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return bool(user.is_staff or user.is_superuser)


class IsStaffOrReadOnly(IsStaffUser):
    """Any authenticated user may read; only staff may change settings."""

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return bool(request.user and request.user.is_authenticated)
        return super().has_permission(request, view)
