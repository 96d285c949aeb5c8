"""
Notifications API controller.
"""

from uuid import UUID

from django.http import HttpRequest
from ninja_extra import api_controller
from ninja_extra import http_get
from ninja_extra import http_patch

from aicte_portal.activity.models import Notification
from aicte_portal.activity.schemas import NotificationSchema
from aicte_portal.core.api import BaseAPI
from aicte_portal.core.api import IsAuthenticated
from aicte_portal.core.exceptions import ErrorSchema
from aicte_portal.core.exceptions import NotFoundError


@api_controller("/notifications", tags=["Notifications"], permissions=[IsAuthenticated])
class NotificationController(BaseAPI):
    """Notifications of the current user."""

    @http_get(
        "/",
        response={200: list[NotificationSchema], 401: ErrorSchema},
        url_name="notifications_list",
    )
    def list_notifications(self, request: HttpRequest, unread: bool = False):
        """List notifications, newest first."""
        notifications = Notification.objects.filter(user=request.user)
        if unread:
            notifications = notifications.filter(is_read=False)
        return 200, list(notifications)

    @http_patch(
        "/{notification_id}/read",
        response={200: NotificationSchema, 401: ErrorSchema, 404: ErrorSchema},
        url_name="notifications_mark_read",
    )
    def mark_read(self, request: HttpRequest, notification_id: UUID):
        """Mark one notification as read. Other users' notifications are not found."""
        try:
            notification = Notification.objects.get(id=notification_id, user=request.user)
        except Notification.DoesNotExist:
            return NotFoundError("Notification not found").to_response()

        if not notification.is_read:
            notification.is_read = True
            notification.save(update_fields=["is_read", "modified"])

        return 200, notification
