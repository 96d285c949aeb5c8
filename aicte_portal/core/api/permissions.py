"""
Permission classes for API controllers.
"""

from typing import Any

from django.http import HttpRequest
from ninja_extra import permissions

from aicte_portal.core.roles import Role
from aicte_portal.core.roles import is_admin
from aicte_portal.core.roles import user_has_role


class IsAuthenticated(permissions.BasePermission):
    """
    Permission class that requires authentication.

    Checks if the user is authenticated before allowing access.
    """

    message = "Unauthorized"

    def has_permission(self, request: HttpRequest, controller: Any) -> bool:
        """Check if the user is authenticated."""
        return bool(request.user and request.user.is_authenticated)


class HasRole(permissions.BasePermission):
    """
    Base permission granting access to users holding ``role``.

    Subclasses only set ``role`` and ``message``.
    """

    role: Role
    message = "Forbidden"

    def has_permission(self, request: HttpRequest, controller: Any) -> bool:
        return user_has_role(request.user, self.role)


class IsInstitution(HasRole):
    """Access reserved to institution accounts."""

    role = Role.INSTITUTION
    message = "Access reserved to institutions."


class IsEvaluator(HasRole):
    """Access reserved to evaluators."""

    role = Role.EVALUATOR
    message = "Access reserved to evaluators."


class IsAdmin(permissions.BasePermission):
    """
    Permission class that requires admin privileges.

    Superusers are treated as admins regardless of their role.
    """

    message = "Access reserved to administrators."

    def has_permission(self, request: HttpRequest, controller: Any) -> bool:
        return is_admin(request.user)


class AllowAny(permissions.BasePermission):
    """
    Permission class that allows any access.

    Used for public endpoints that don't require authentication.
    """

    def has_permission(self, request: HttpRequest, controller: Any) -> bool:
        """Always return True."""
        return True
