"""
User schemas for API requests and responses.
"""

from aicte_portal.users.schemas.admin import UserCreateSchema
from aicte_portal.users.schemas.admin import UserUpdateSchema
from aicte_portal.users.schemas.auth import CSRFTokenSchema
from aicte_portal.users.schemas.auth import InstitutionDetailsSchema
from aicte_portal.users.schemas.auth import LoginSchema
from aicte_portal.users.schemas.auth import PasswordChangeSchema
from aicte_portal.users.schemas.auth import ProfileUpdateSchema
from aicte_portal.users.schemas.auth import RegisterSchema
from aicte_portal.users.schemas.auth import UserResponseSchema
from aicte_portal.users.schemas.auth import UserSchema

__all__ = [
    # Auth schemas
    "LoginSchema",
    "RegisterSchema",
    "InstitutionDetailsSchema",
    "UserSchema",
    "UserResponseSchema",
    "CSRFTokenSchema",
    "ProfileUpdateSchema",
    "PasswordChangeSchema",
    # Admin schemas
    "UserCreateSchema",
    "UserUpdateSchema",
]
