from rest_framework.permissions import BasePermission

from it_assets.selectors.user_selector import is_admin


class IsAdminRole(BasePermission):
    """Chỉ user có role admin (hoặc superuser)."""
    message = "Admin role required."

    def has_permission(self, request, view):
        return is_admin(request.user)
