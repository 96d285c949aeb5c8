"""
Account settings API controller: profile and password for the current user.
"""

import logging

from django.contrib.auth import update_session_auth_hash
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import HttpRequest
from ninja_extra import api_controller
from ninja_extra import http_put

from aicte_portal.core.api import BaseAPI
from aicte_portal.core.api import IsAuthenticated
from aicte_portal.core.exceptions import AlreadyExistsError
from aicte_portal.core.exceptions import BadRequestError
from aicte_portal.core.exceptions import ErrorSchema
from aicte_portal.core.exceptions import InvalidCredentialsError
from aicte_portal.core.schemas import MessageSchema
from aicte_portal.users.api.auth import password_errors_response
from aicte_portal.users.models import User
from aicte_portal.users.schemas import PasswordChangeSchema
from aicte_portal.users.schemas import ProfileUpdateSchema
from aicte_portal.users.schemas import UserResponseSchema
from aicte_portal.users.schemas import UserSchema

logger = logging.getLogger(__name__)


@api_controller("/settings", tags=["Settings"], permissions=[IsAuthenticated])
class SettingsController(BaseAPI):
    """Profile and password management for the authenticated user."""

    @http_put(
        "/profile",
        response={200: UserResponseSchema, 400: ErrorSchema, 401: ErrorSchema, 409: ErrorSchema},
        url_name="settings_profile",
    )
    def update_profile(self, request: HttpRequest, data: ProfileUpdateSchema):
        """Update name and/or email. The role can never be changed here."""
        if data.name is None and data.email is None:
            return BadRequestError("No updates provided").to_response()

        user = request.user

        if data.email is not None:
            taken = User.objects.filter(email__iexact=data.email).exclude(id=user.id).exists()
            if taken:
                return AlreadyExistsError("Email already in use").to_response()
            user.email = User.objects.normalize_email(data.email)
        if data.name is not None:
            user.name = data.name

        user.save()

        return 200, UserResponseSchema(user=UserSchema.from_user(user))

    @http_put(
        "/password",
        response={200: MessageSchema, 400: ErrorSchema, 401: ErrorSchema},
        url_name="settings_password",
    )
    def change_password(self, request: HttpRequest, data: PasswordChangeSchema):
        """Change password after checking the current one."""
        user = request.user

        if not user.check_password(data.current_password):
            return InvalidCredentialsError("Current password is incorrect").to_response()

        try:
            validate_password(data.new_password, user=user)
        except DjangoValidationError as e:
            return password_errors_response(e)

        user.set_password(data.new_password)
        user.save()

        # Keep the current session valid after the hash change
        update_session_auth_hash(request, user)

        logger.info("Password changed for %s", user.email)
        return 200, MessageSchema(message="Password updated successfully")
