"""
Authentication schemas for login, registration and session checks.
"""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from ninja import Schema
from pydantic import EmailStr
from pydantic import field_validator

from aicte_portal.core.schemas import check_not_blank

if TYPE_CHECKING:
    from aicte_portal.users.models import User

MIN_PASSWORD_LENGTH = 8


def check_password_length(v: str) -> str:
    if len(v) < MIN_PASSWORD_LENGTH:
        msg = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        raise ValueError(msg)
    return v


class LoginSchema(Schema):
    """Login request schema."""

    email: EmailStr
    password: str

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        return check_password_length(v)


class InstitutionDetailsSchema(Schema):
    """Institution profile captured at registration."""

    name: str
    address: str
    state: str
    phone: str | None = None

    @field_validator("name", "address", "state")
    @classmethod
    def not_blank(cls, v: str, info) -> str:
        return check_not_blank(v, info.field_name.capitalize())


class RegisterSchema(Schema):
    """Registration request schema. Self-registration is for institutions only."""

    email: EmailStr
    password: str
    name: str
    role: str = "institution"
    institution_details: InstitutionDetailsSchema | None = None

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        return check_password_length(v)

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        return check_not_blank(v, "Name")

    @field_validator("role")
    @classmethod
    def institution_only(cls, v: str) -> str:
        if v != "institution":
            msg = "Only institution accounts can self-register"
            raise ValueError(msg)
        return v


class UserSchema(Schema):
    """User response schema. Never carries the password hash."""

    id: UUID
    email: str
    name: str
    role: str
    is_active: bool
    date_joined: datetime

    @staticmethod
    def from_user(user: "User") -> "UserSchema":
        """Create schema from User model."""
        return UserSchema(
            id=user.id,
            email=user.email,
            name=user.name,
            role=user.role,
            is_active=user.is_active,
            date_joined=user.date_joined,
        )


class UserResponseSchema(Schema):
    """Envelope used by login, session and profile endpoints."""

    user: UserSchema


class CSRFTokenSchema(Schema):
    """CSRF token response."""

    csrf_token: str


class ProfileUpdateSchema(Schema):
    """Profile update for the authenticated user."""

    name: str | None = None
    email: EmailStr | None = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return check_not_blank(v, "Name")


class PasswordChangeSchema(Schema):
    """Password change schema for authenticated users."""

    current_password: str
    new_password: str

    @field_validator("new_password")
    @classmethod
    def password_length(cls, v: str) -> str:
        return check_password_length(v)
