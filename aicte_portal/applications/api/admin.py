"""
Admin workflow API controller.

Application status changes, evaluator assignment, dashboard figures and
alerts. Requires the admin role.
"""

from datetime import timedelta

from django.contrib.auth import get_user_model
from django.db.models import Count
from django.http import HttpRequest
from django.utils import timezone
from ninja_extra import api_controller
from ninja_extra import http_get
from ninja_extra import http_post
from ninja_extra import http_put

import aicte_portal.applications.converters  # noqa: F401
from aicte_portal.applications import services
from aicte_portal.applications.models import Application
from aicte_portal.applications.schemas import AdminDashboardSchema
from aicte_portal.applications.schemas import AdminStatsSchema
from aicte_portal.applications.schemas import AlertSchema
from aicte_portal.applications.schemas import AlertsSchema
from aicte_portal.applications.schemas import ApplicationResponseSchema
from aicte_portal.applications.schemas import ApplicationSchema
from aicte_portal.applications.schemas import AssignEvaluatorSchema
from aicte_portal.applications.schemas import StatusUpdateSchema
from aicte_portal.applications.schemas import WorkflowStageCountSchema
from aicte_portal.applications.workflow import ApplicationStatus
from aicte_portal.core.api import BaseAPI
from aicte_portal.core.api import IsAdmin
from aicte_portal.core.exceptions import ErrorSchema
from aicte_portal.core.exceptions import NotFoundError
from aicte_portal.core.roles import Role
from aicte_portal.evaluations.models import EvaluatorAssignment
from aicte_portal.evaluations.schemas import AssignmentResponseSchema
from aicte_portal.evaluations.schemas import AssignmentSchema

User = get_user_model()

UPCOMING_WINDOW = timedelta(days=7)
NEAR_DEADLINE_WINDOW = timedelta(days=3)


def average_processing_days() -> int:
    """Mean days from submission to the last update of approved applications."""
    durations = [
        (modified - submitted_at).total_seconds() / 86400
        for submitted_at, modified in Application.objects.filter(
            status=ApplicationStatus.APPROVED,
            submitted_at__isnull=False,
        ).values_list("submitted_at", "modified")
    ]
    if not durations:
        return 0
    return round(sum(durations) / len(durations))


@api_controller("/admin", tags=["Workflow (Admin)"], permissions=[IsAdmin])
class AdminWorkflowController(BaseAPI):
    """Admin endpoints driving the application workflow."""

    @http_get(
        "/applications",
        response={200: list[ApplicationSchema], 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema},
        url_name="admin_applications_list",
    )
    def list_applications(self, request: HttpRequest, status: ApplicationStatus | None = None):
        """List every application, newest first. Optionally filter by status."""
        applications = Application.objects.all()
        if status:
            applications = applications.filter(status=status)
        return 200, list(applications)

    @http_put(
        "/applications/{appnum:number}/status",
        response={200: ApplicationResponseSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="admin_applications_status",
    )
    def update_status(self, request: HttpRequest, number: str, data: StatusUpdateSchema):
        """Move an application forward. Backward moves are refused."""
        application = Application.objects.select_related("institution__user").filter(number=number).first()
        if application is None:
            return NotFoundError("Application not found").to_response()

        services.change_status(application, data.status, request.user)

        return 200, ApplicationResponseSchema(application=ApplicationSchema.from_orm(application))

    @http_post(
        "/assign-evaluator",
        response={201: AssignmentResponseSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema, 409: ErrorSchema},
        url_name="admin_assign_evaluator",
    )
    def assign_evaluator(self, request: HttpRequest, data: AssignEvaluatorSchema):
        """Assign an evaluator and put the application under evaluation."""
        application = Application.objects.select_related("institution__user").filter(id=data.application_id).first()
        if application is None:
            return NotFoundError("Application not found").to_response()

        evaluator = User.objects.filter(id=data.evaluator_id).first()
        if evaluator is None:
            return NotFoundError("Evaluator not found").to_response()

        assignment = services.assign_evaluator(
            application,
            evaluator,
            request.user,
            priority=data.priority,
            deadline=data.deadline,
        )

        return 201, AssignmentResponseSchema(assignment=AssignmentSchema.from_orm(assignment))

    @http_get(
        "/dashboard",
        response={200: AdminDashboardSchema, 401: ErrorSchema, 403: ErrorSchema},
        url_name="admin_dashboard",
    )
    def dashboard(self, request: HttpRequest):
        """Headline figures and the distribution of applications per status."""
        total = Application.objects.count()
        approved = Application.objects.filter(status=ApplicationStatus.APPROVED).count()
        evaluators = User.objects.filter(role=Role.EVALUATOR, is_active=True).count()

        distribution = (
            Application.objects.values("status")
            .annotate(count=Count("id"))
            .order_by("status")
        )

        return 200, AdminDashboardSchema(
            stats=AdminStatsSchema(
                total_applications=total,
                active_evaluators=evaluators,
                approval_rate=round(approved / total * 100) if total else 0,
                avg_processing_time=f"{average_processing_days()} days",
            ),
            workflow_stages=[
                WorkflowStageCountSchema(stage=row["status"], count=row["count"])
                for row in distribution
            ],
        )

    @http_get(
        "/alerts",
        response={200: AlertsSchema, 401: ErrorSchema, 403: ErrorSchema},
        url_name="admin_alerts",
    )
    def alerts(self, request: HttpRequest):
        """Items needing admin attention. Empty categories are left out."""
        now = timezone.now()
        open_assignments = EvaluatorAssignment.objects.open().filter(deadline__isnull=False)
        alerts = []

        unassigned = Application.objects.filter(
            status=ApplicationStatus.UNDER_EVALUATION,
            assignments__isnull=True,
        ).count()
        if unassigned:
            alerts.append(
                AlertSchema(
                    type="warning",
                    message=f"{unassigned} applications pending evaluator assignment",
                    action="Assign Evaluators",
                    action_url="/admin/applications",
                )
            )

        due_soon = open_assignments.filter(deadline__gte=now, deadline__lte=now + UPCOMING_WINDOW).count()
        if due_soon:
            alerts.append(
                AlertSchema(
                    type="info",
                    message=f"{due_soon} evaluations due in next week",
                    action="View Schedule",
                    action_url="/admin/evaluations",
                )
            )

        nearing = open_assignments.filter(deadline__lte=now + NEAR_DEADLINE_WINDOW).count()
        if nearing:
            alerts.append(
                AlertSchema(
                    type="warning",
                    message=f"{nearing} evaluations nearing deadline",
                    action="Review",
                    action_url="/admin/applications",
                )
            )

        awaiting = Application.objects.filter(status=ApplicationStatus.SUBMITTED).count()
        if awaiting:
            alerts.append(
                AlertSchema(
                    type="info",
                    message=f"{awaiting} new applications awaiting initial review",
                    action="Review",
                    action_url="/admin/applications",
                )
            )

        return 200, AlertsSchema(alerts=alerts)
