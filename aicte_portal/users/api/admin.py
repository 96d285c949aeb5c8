"""
Admin API controller for user management.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.db.models import ProtectedError
from django.http import HttpRequest
from ninja_extra import api_controller
from ninja_extra import http_delete
from ninja_extra import http_get
from ninja_extra import http_patch
from ninja_extra import http_post

from aicte_portal.activity.services import record_audit
from aicte_portal.core.api import BaseAPI
from aicte_portal.core.api import IsAdmin
from aicte_portal.core.exceptions import AlreadyExistsError
from aicte_portal.core.exceptions import BadRequestError
from aicte_portal.core.exceptions import ErrorSchema
from aicte_portal.core.exceptions import NotFoundError
from aicte_portal.core.exceptions import PermissionDeniedError
from aicte_portal.core.schemas import MessageSchema
from aicte_portal.users.models import User
from aicte_portal.users.schemas import UserCreateSchema
from aicte_portal.users.schemas import UserResponseSchema
from aicte_portal.users.schemas import UserSchema
from aicte_portal.users.schemas import UserUpdateSchema

logger = logging.getLogger(__name__)


@api_controller("/admin/users", tags=["Users (Admin)"], permissions=[IsAdmin])
class UserAdminController(BaseAPI):
    """Admin endpoints for user management. Requires the admin role."""

    @http_get(
        "/",
        response={200: list[UserSchema], 401: ErrorSchema, 403: ErrorSchema},
        url_name="admin_users_list",
    )
    def list_users(self, request: HttpRequest, role: str | None = None):
        """List all users, newest first. Optionally filter by role."""
        users = User.objects.order_by("-date_joined")
        if role:
            users = users.filter(role=role)
        return 200, [UserSchema.from_user(user) for user in users]

    @http_post(
        "/",
        response={201: UserResponseSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 409: ErrorSchema},
        url_name="admin_users_create",
    )
    def create_user(self, request: HttpRequest, data: UserCreateSchema):
        """Create a user account with any role."""
        if User.objects.filter(email__iexact=data.email).exists():
            return AlreadyExistsError("Email already registered").to_response()

        user = User.objects.create_user(
            email=data.email,
            password=data.password,
            name=data.name,
            role=data.role,
        )
        record_audit(request.user, "user.create", user, {"role": user.role})

        return 201, UserResponseSchema(user=UserSchema.from_user(user))

    @http_patch(
        "/{user_id}",
        response={200: UserResponseSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema, 409: ErrorSchema},
        url_name="admin_users_update",
    )
    def update_user(self, request: HttpRequest, user_id: UUID, data: UserUpdateSchema):
        """Update user details."""
        updates = data.model_dump(exclude_none=True)
        if not updates:
            return BadRequestError("No updates provided").to_response()

        try:
            user = User.objects.get(id=user_id)
        except User.DoesNotExist:
            return NotFoundError("User not found").to_response()

        if data.email is not None:
            if User.objects.filter(email__iexact=data.email).exclude(id=user.id).exists():
                return AlreadyExistsError("Email already in use").to_response()
            user.email = User.objects.normalize_email(data.email)
        if data.name is not None:
            user.name = data.name
        if data.is_active is not None:
            user.is_active = data.is_active

        user.save()
        record_audit(request.user, "user.update", user, {"fields": sorted(updates)})

        return 200, UserResponseSchema(user=UserSchema.from_user(user))

    @http_delete(
        "/{user_id}",
        response={200: MessageSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema, 409: ErrorSchema},
        url_name="admin_users_delete",
    )
    def delete_user(self, request: HttpRequest, user_id: UUID):
        """Delete a user. Admins cannot delete their own account."""
        try:
            user = User.objects.get(id=user_id)
        except User.DoesNotExist:
            return NotFoundError("User not found").to_response()

        if user.id == request.user.id:
            return PermissionDeniedError(
                "Cannot delete your own account",
                code="CANNOT_DELETE_SELF",
            ).to_response()

        email = user.email
        try:
            with transaction.atomic():
                record_audit(request.user, "user.delete", user, {"email": email})
                user.delete()
        except ProtectedError:
            return AlreadyExistsError(
                "User still owns applications, assignments or messages",
                code="USER_IN_USE",
            ).to_response()

        logger.info("User %s deleted by %s", email, request.user.email)
        return 200, MessageSchema(message="User deleted successfully")
