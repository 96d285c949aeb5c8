"""
Audit log API controller (admin only).
"""

from uuid import UUID

from django.http import HttpRequest
from ninja_extra import api_controller
from ninja_extra import http_get

from aicte_portal.activity.models import AuditLog
from aicte_portal.activity.schemas import AuditLogSchema
from aicte_portal.core.api import BaseAPI
from aicte_portal.core.api import IsAdmin
from aicte_portal.core.exceptions import ErrorSchema

DEFAULT_AUDIT_LIMIT = 100


@api_controller("/admin/audit-logs", tags=["Audit (Admin)"], permissions=[IsAdmin])
class AuditLogController(BaseAPI):

    @http_get(
        "/",
        response={200: list[AuditLogSchema], 401: ErrorSchema, 403: ErrorSchema},
        url_name="admin_audit_logs",
    )
    def list_audit_logs(
        self,
        request: HttpRequest,
        entity_id: str | None = None,
        user_id: UUID | None = None,
        limit: int = DEFAULT_AUDIT_LIMIT,
    ):
        """
        List audit entries, newest first.

        Filter by the touched record (``entity_id``) or by the acting user
        (``user_id``). Returns the last 100 entries unless ``limit`` says otherwise.
        """
        logs = AuditLog.objects.select_related("actor")
        if entity_id:
            logs = logs.filter(entity_id=entity_id)
        if user_id:
            logs = logs.filter(actor_id=user_id)
        limit = max(1, min(limit, 1000))
        return 200, list(logs[:limit])
