"""
Custom exceptions for the AICTE approval portal API.
Every error response shares the ErrorSchema body.
"""

from ninja import Schema


class ErrorSchema(Schema):
    """Standard error response schema."""

    code: str
    message: str
    details: dict | None = None


class APIException(Exception):
    """Base exception for API errors."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred."

    def __init__(
        self,
        message: str | None = None,
        code: str | None = None,
        details: dict | None = None,
    ):
        self.message = message or self.__class__.message
        self.code = code or self.__class__.code
        self.details = details
        super().__init__(self.message)

    def to_response(self) -> tuple[int, ErrorSchema]:
        """Convert exception to API response tuple."""
        return self.status_code, ErrorSchema(
            code=self.code,
            message=self.message,
            details=self.details,
        )


# Authentication Exceptions
class NotAuthenticatedError(APIException):
    """User is not authenticated."""

    status_code = 401
    code = "NOT_AUTHENTICATED"
    message = "Unauthorized"


class InvalidCredentialsError(APIException):
    """Invalid login credentials."""

    status_code = 401
    code = "INVALID_CREDENTIALS"
    message = "Invalid credentials"


class AccountDisabledError(APIException):
    """User account is disabled."""

    status_code = 401
    code = "ACCOUNT_DISABLED"
    message = "This account is disabled."


# Authorization Exceptions
class PermissionDeniedError(APIException):
    """User doesn't have required permissions."""

    status_code = 403
    code = "PERMISSION_DENIED"
    message = "Forbidden"


class NotOwnerError(APIException):
    """User is not the owner of the resource."""

    status_code = 403
    code = "NOT_OWNER"
    message = "You do not own this resource."


# Resource Exceptions
class NotFoundError(APIException):
    """Resource not found."""

    status_code = 404
    code = "NOT_FOUND"
    message = "Resource not found."


class AlreadyExistsError(APIException):
    """Resource already exists."""

    status_code = 409
    code = "ALREADY_EXISTS"
    message = "This resource already exists."


# Validation Exceptions
class ValidationError(APIException):
    """Invalid input data."""

    status_code = 400
    code = "VALIDATION_ERROR"
    message = "Invalid data."


class BadRequestError(APIException):
    """Bad request."""

    status_code = 400
    code = "BAD_REQUEST"
    message = "Bad request."


# Workflow Exceptions
class InvalidTransitionError(APIException):
    """Application status change not allowed from the current status."""

    status_code = 400
    code = "INVALID_TRANSITION"
    message = "This status change is not allowed."
