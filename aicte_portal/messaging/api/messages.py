"""
Messaging API controller.
"""

from uuid import UUID

from django.http import HttpRequest
from ninja_extra import api_controller
from ninja_extra import http_get
from ninja_extra import http_post

from aicte_portal.applications.models import Application
from aicte_portal.applications.services import can_access_application
from aicte_portal.core.api import BaseAPI
from aicte_portal.core.api import IsAuthenticated
from aicte_portal.core.exceptions import ErrorSchema
from aicte_portal.core.exceptions import NotFoundError
from aicte_portal.core.exceptions import PermissionDeniedError
from aicte_portal.messaging.models import Message
from aicte_portal.messaging.schemas import MessageOutSchema
from aicte_portal.messaging.schemas import MessageSentSchema
from aicte_portal.messaging.schemas import SendMessageSchema
from aicte_portal.messaging.services import post_message


@api_controller("/messages", tags=["Messages"], permissions=[IsAuthenticated])
class MessageController(BaseAPI):
    """Application-scoped message threads."""

    @http_get(
        "/{application_id}",
        response={200: list[MessageOutSchema], 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="messages_list",
    )
    def list_messages(self, request: HttpRequest, application_id: UUID):
        """List the messages of an application, oldest first."""
        try:
            application = Application.objects.select_related("institution").get(id=application_id)
        except Application.DoesNotExist:
            return NotFoundError("Application not found").to_response()

        if not can_access_application(request.user, application):
            return PermissionDeniedError("Access denied to this application's messages").to_response()

        messages = Message.objects.filter(application=application).select_related("sender")
        return 200, list(messages)

    @http_post(
        "/",
        response={201: MessageSentSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="messages_send",
    )
    def send_message(self, request: HttpRequest, data: SendMessageSchema):
        """Post a message on an application thread."""
        try:
            application = Application.objects.select_related("institution").get(id=data.application_id)
        except Application.DoesNotExist:
            return NotFoundError("Application not found").to_response()

        if not can_access_application(request.user, application):
            return PermissionDeniedError("Access denied to send messages for this application").to_response()

        message = post_message(request.user, application, data.content)
        return 201, {"message": message}
