"""
Admin user management schemas.
"""

from ninja import Schema
from pydantic import EmailStr
from pydantic import field_validator

from aicte_portal.core.roles import Role
from aicte_portal.core.schemas import check_not_blank
from aicte_portal.users.schemas.auth import check_password_length


class UserCreateSchema(Schema):
    """Schema for admin creating a user of any role."""

    email: EmailStr
    password: str
    name: str
    role: str

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
    def valid_role(cls, v: str) -> str:
        if v not in Role.values:
            msg = f"Role must be one of: {', '.join(Role.values)}"
            raise ValueError(msg)
        return v


class UserUpdateSchema(Schema):
    """
    Schema for updating a user. Omitted fields are left unchanged.

    The role is fixed at creation and cannot be updated.
    """

    email: EmailStr | None = None
    name: str | None = None
    is_active: bool | None = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return check_not_blank(v, "Name")
