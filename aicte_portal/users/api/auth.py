"""
Authentication API controller.
"""

import logging

from django.contrib.auth import authenticate
from django.contrib.auth import login
from django.contrib.auth import logout
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.http import HttpRequest
from django.middleware.csrf import get_token
from ninja_extra import api_controller
from ninja_extra import http_get
from ninja_extra import http_post

from aicte_portal.core.api import AllowAny
from aicte_portal.core.api import BaseAPI
from aicte_portal.core.exceptions import AccountDisabledError
from aicte_portal.core.exceptions import AlreadyExistsError
from aicte_portal.core.exceptions import ErrorSchema
from aicte_portal.core.exceptions import InvalidCredentialsError
from aicte_portal.core.exceptions import NotAuthenticatedError
from aicte_portal.core.exceptions import ValidationError
from aicte_portal.core.roles import Role
from aicte_portal.core.schemas import MessageSchema
from aicte_portal.institutions.models import Institution
from aicte_portal.users.models import User
from aicte_portal.users.schemas import CSRFTokenSchema
from aicte_portal.users.schemas import LoginSchema
from aicte_portal.users.schemas import RegisterSchema
from aicte_portal.users.schemas import UserResponseSchema
from aicte_portal.users.schemas import UserSchema

logger = logging.getLogger(__name__)


def password_errors_response(error: DjangoValidationError):
    return ValidationError(
        message=" ".join(error.messages),
        details={"password_errors": error.messages},
    ).to_response()


@api_controller("/auth", tags=["Authentication"], permissions=[AllowAny])
class AuthController(BaseAPI):
    """Authentication endpoints for registration, login, logout and session checks."""

    @http_get("/csrf", response=CSRFTokenSchema, url_name="auth_csrf")
    def get_csrf_token(self, request: HttpRequest):
        """Get a CSRF token for subsequent POST requests."""
        return CSRFTokenSchema(csrf_token=get_token(request))

    @http_post(
        "/register",
        response={201: MessageSchema, 400: ErrorSchema, 409: ErrorSchema},
        url_name="auth_register",
    )
    def register_view(self, request: HttpRequest, data: RegisterSchema):
        """
        Register a new institution account.

        When institution details are given, the institution profile is
        created together with the user.
        """
        if User.objects.filter(email__iexact=data.email).exists():
            return AlreadyExistsError("Email already registered").to_response()

        try:
            validate_password(data.password)
        except DjangoValidationError as e:
            return password_errors_response(e)

        with transaction.atomic():
            user = User.objects.create_user(
                email=data.email,
                password=data.password,
                name=data.name,
                role=Role.INSTITUTION,
            )
            details = data.institution_details
            if details:
                Institution.objects.create(
                    user=user,
                    name=details.name,
                    address=details.address,
                    state=details.state,
                    contact_email=user.email,
                    contact_phone=details.phone or "",
                )

        logger.info("Registered institution account %s", user.email)
        return 201, MessageSchema(message="Registration successful")

    @http_post(
        "/login",
        response={200: UserResponseSchema, 400: ErrorSchema, 401: ErrorSchema},
        url_name="auth_login",
    )
    def login_view(self, request: HttpRequest, data: LoginSchema):
        """Authenticate user with email and password."""
        user = authenticate(request, username=data.email, password=data.password)

        if user is None:
            inactive = User.objects.filter(email__iexact=data.email, is_active=False).first()
            if inactive is not None and inactive.check_password(data.password):
                return AccountDisabledError().to_response()
            return InvalidCredentialsError().to_response()

        login(request, user)

        return 200, UserResponseSchema(user=UserSchema.from_user(user))

    @http_post("/logout", response={200: MessageSchema}, url_name="auth_logout")
    def logout_view(self, request: HttpRequest):
        """Logout the current user and clear session."""
        logout(request)
        return 200, MessageSchema(message="Logout successful")

    @http_get(
        "/session",
        response={200: UserResponseSchema, 401: ErrorSchema},
        url_name="auth_session",
    )
    def session_view(self, request: HttpRequest):
        """Return the user attached to the current session."""
        if not request.user.is_authenticated:
            return NotAuthenticatedError("Not authenticated").to_response()

        return 200, UserResponseSchema(user=UserSchema.from_user(request.user))
