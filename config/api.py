"""
Main API configuration for Django Ninja Extra.
All API controllers are automatically registered here.
Every error leaves the API with the ``ErrorSchema`` body.
"""

import importlib
import inspect
import logging

from django.db import transaction
from django.http import Http404
from django.http import HttpRequest
from ninja.errors import ValidationError as NinjaValidationError
from ninja_extra import NinjaExtraAPI
from ninja_extra import exceptions as extra_exceptions

from aicte_portal.core.api.base import BaseAPI
from aicte_portal.core.exceptions import APIException
from aicte_portal.core.exceptions import ErrorSchema
from aicte_portal.core.exceptions import NotAuthenticatedError
from aicte_portal.core.exceptions import NotFoundError
from aicte_portal.core.exceptions import PermissionDeniedError
from aicte_portal.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

api = NinjaExtraAPI(
    title="AICTE Approval Portal API",
    version="1.0.0",
    description="Backend API for institution approval applications",
    docs_url="/docs",
    openapi_url="/openapi.json",
)


def error_response(request: HttpRequest, error: APIException):
    status, body = error.to_response()
    return api.create_response(request, body.model_dump(), status=status)


def _field_name(loc) -> str:
    # body errors are located as ("body", <param name>, <field>, ...)
    parts = loc[2:] if len(loc) > 2 and loc[0] == "body" else loc[1:]
    return ".".join(str(part) for part in parts)


def discard_request_writes() -> None:
    """Roll back what the failed request wrote under ATOMIC_REQUESTS."""
    if transaction.get_connection().in_atomic_block:
        transaction.set_rollback(True)


def _clean_message(message: str) -> str:
    # pydantic prefixes messages raised from validators
    return message.removeprefix("Value error, ")


@api.exception_handler(APIException)
def handle_api_exception(request: HttpRequest, exc: APIException):
    discard_request_writes()
    return error_response(request, exc)


@api.exception_handler(NinjaValidationError)
def handle_validation_error(request: HttpRequest, exc: NinjaValidationError):
    errors = [
        {
            "field": _field_name(error.get("loc", ())),
            "message": _clean_message(error.get("msg", "")),
        }
        for error in exc.errors
    ]
    message = "; ".join(
        f"{e['field']}: {e['message']}" if e["field"] else e["message"] for e in errors
    )
    return error_response(request, ValidationError(message or None, details={"errors": errors}))


@api.exception_handler(extra_exceptions.APIException)
def handle_extra_exception(request: HttpRequest, exc: extra_exceptions.APIException):
    """
    Permission refusals raised by ninja-extra.

    Anonymous callers get 401, authenticated ones 403 with the permission message.
    """
    user = getattr(request, "user", None)
    anonymous = user is None or not user.is_authenticated
    if isinstance(exc, extra_exceptions.NotAuthenticated) or (
        isinstance(exc, extra_exceptions.PermissionDenied) and anonymous
    ):
        return error_response(request, NotAuthenticatedError())
    if isinstance(exc, extra_exceptions.PermissionDenied):
        return error_response(request, PermissionDeniedError(str(exc.detail)))

    return api.create_response(
        request,
        ErrorSchema(code=str(exc.default_code).upper(), message=str(exc.detail)).model_dump(),
        status=exc.status_code,
    )


@api.exception_handler(Http404)
def handle_not_found(request: HttpRequest, exc: Http404):
    return error_response(request, NotFoundError(str(exc) or None))


@api.exception_handler(Exception)
def handle_unexpected_error(request: HttpRequest, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.path)
    discard_request_writes()
    return error_response(request, APIException())


def register_controllers_from_module(api_instance: NinjaExtraAPI, module_path: str) -> None:
    """
    Dynamically import and register API controllers from a module.

    Controllers must inherit from BaseAPI to be registered.
    """
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as e:
        if e.name != module_path:
            raise
        logger.debug("Module %s not found, skipping", module_path)
        return

    for attr_name in dir(module):
        attr = getattr(module, attr_name)
        if inspect.isclass(attr) and issubclass(attr, BaseAPI) and attr is not BaseAPI:
            logger.debug("Registering controller: %s.%s", module_path, attr_name)
            api_instance.register_controllers(attr)


# Register controllers from each local app
LOCAL_APPS = [
    "aicte_portal.users",
    "aicte_portal.institutions",
    "aicte_portal.applications",
    "aicte_portal.evaluations",
    "aicte_portal.messaging",
    "aicte_portal.activity",
]

for app in LOCAL_APPS:
    register_controllers_from_module(api, f"{app}.api")
