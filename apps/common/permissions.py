from rest_framework.permissions import SAFE_METHODS, BasePermission


def user_is_treasury_admin(user) -> bool:
    if not user or not user.is_authenticated:
        return False
    if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
        return True
    return bool(getattr(user, "is_treasurer", False))


class IsAdminRole(BasePermission):
    """Allow only staff, superusers or users flagged as treasurer."""

    def has_permission(self, request, view):
        return user_is_treasury_admin(request.user)


class IsAdminOrReadOnly(BasePermission):
    """Authenticated users may read; only treasury admins may write/delete."""

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if request.method in SAFE_METHODS:
            return True
        return user_is_treasury_admin(user)
