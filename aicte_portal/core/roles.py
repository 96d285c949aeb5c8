"""
Role definitions for the approval portal.

Defines the 3 roles used across the platform:
- Institution: submits approval applications and uploads documents
- Evaluator: reviews assigned applications and files evaluations
- Admin: assigns evaluators, manages users and drives the workflow
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Role(models.TextChoices):
    """
    Enum of available roles.

    Values are stored as-is in ``User.role``.
    """

    INSTITUTION = "institution", _("Institution")
    EVALUATOR = "evaluator", _("Evaluator")
    ADMIN = "admin", _("Admin")


# Role descriptions for documentation and admin interfaces
ROLE_DESCRIPTIONS = {
    Role.INSTITUTION: "Institution - Creates and submits approval applications",
    Role.EVALUATOR: "Evaluator - Reviews assigned applications, files evaluations",
    Role.ADMIN: "Admin - Assigns evaluators, manages users and application status",
}


def user_has_role(user, role: Role | str) -> bool:
    """
    Check if a user has a specific role.

    Args:
        user: Django User instance
        role: Role enum value or role name string

    Returns:
        True if user has the role
    """
    if not user or not user.is_authenticated:
        return False

    return user.role == Role(role)


def user_has_any_role(user, roles: list[Role | str]) -> bool:
    """
    Check if a user has any of the specified roles.

    Args:
        user: Django User instance
        roles: List of Role enum values or role name strings

    Returns:
        True if user has at least one of the roles
    """
    if not user or not user.is_authenticated:
        return False

    return user.role in [Role(r) for r in roles]


# ============================================================================
# Convenience functions for common permission checks
# ============================================================================


def is_admin(user) -> bool:
    """
    Check if user has admin privileges.

    Returns True for superusers or users with the admin role.
    """
    if not user or not user.is_authenticated:
        return False
    if user.is_superuser:
        return True
    return user_has_role(user, Role.ADMIN)


def is_institution(user) -> bool:
    return user_has_role(user, Role.INSTITUTION)


def is_evaluator(user) -> bool:
    return user_has_role(user, Role.EVALUATOR)
