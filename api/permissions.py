"""
Role-based permission classes for the back-office API.
"""

from rest_framework.permissions import BasePermission

from core.domain.value_objects import Role


class IsAuthenticatedUser(BasePermission):
    """Any signed-in user with a live session."""

    message = "Authentication required"

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated)


class HasRole(BasePermission):
    """Signed-in user whose role is one of ``allowed_roles``."""

    allowed_roles = ()
    message = "Insufficient permissions"

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        return getattr(user, "role", None) in {role.value for role in self.allowed_roles}


class IsAdmin(HasRole):
    """Administrators only."""

    allowed_roles = (Role.ADMIN,)


class IsAdminOrDeveloper(HasRole):
    """Administrators and developers."""

    allowed_roles = (Role.ADMIN, Role.DEVELOPER)
