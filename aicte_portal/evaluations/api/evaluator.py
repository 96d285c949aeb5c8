"""
Evaluator workspace API controller.
"""

from datetime import timedelta

from django.db.models import Q
from django.http import HttpRequest
from django.utils import timezone
from ninja_extra import api_controller
from ninja_extra import http_get

from aicte_portal.applications.models import Application
from aicte_portal.applications.schemas import ApplicationSchema
from aicte_portal.core.api import BaseAPI
from aicte_portal.core.api import IsEvaluator
from aicte_portal.core.exceptions import ErrorSchema
from aicte_portal.evaluations.models import EvaluatorAssignment
from aicte_portal.evaluations.schemas import AssignmentDetailSchema
from aicte_portal.evaluations.schemas import EvaluatorDashboardSchema
from aicte_portal.evaluations.schemas import EvaluatorStatsSchema
from aicte_portal.evaluations.schemas import EvaluatorTaskSchema

UPCOMING_WINDOW = timedelta(days=7)


@api_controller("/evaluator", tags=["Evaluator"], permissions=[IsEvaluator])
class EvaluatorController(BaseAPI):
    """Dashboard and work lists of the signed-in evaluator."""

    @http_get(
        "/dashboard",
        response={200: EvaluatorDashboardSchema, 401: ErrorSchema, 403: ErrorSchema},
        url_name="evaluator_dashboard",
    )
    def dashboard(self, request: HttpRequest):
        """
        Open assignments with counters.

        ``pending`` counts assignments not yet past their deadline (or
        without one), ``upcoming`` those due within a week, overdue included.
        """
        now = timezone.now()
        assignments = (
            EvaluatorAssignment.objects.open()
            .filter(evaluator=request.user)
            .select_related("application")
        )

        stats = EvaluatorStatsSchema(
            assigned=assignments.count(),
            pending=assignments.filter(Q(deadline__isnull=True) | Q(deadline__gt=now)).count(),
            upcoming=assignments.filter(deadline__lt=now + UPCOMING_WINDOW).count(),
        )

        tasks = [
            EvaluatorTaskSchema(
                number=a.application.number,
                institution_name=a.application.institution_name,
                application_type=a.application.application_type,
                location=a.application.location,
                deadline=a.deadline,
                priority=a.priority,
                course_name=a.application.course_name,
            )
            for a in assignments
        ]

        return 200, EvaluatorDashboardSchema(stats=stats, assignments=tasks)

    @http_get(
        "/applications",
        response={200: list[ApplicationSchema], 401: ErrorSchema, 403: ErrorSchema},
        url_name="evaluator_applications",
    )
    def list_applications(self, request: HttpRequest):
        """Every application the evaluator was ever assigned to."""
        applications = Application.objects.filter(assignments__evaluator=request.user).distinct()
        return 200, list(applications)

    @http_get(
        "/assignments",
        response={200: list[AssignmentDetailSchema], 401: ErrorSchema, 403: ErrorSchema},
        url_name="evaluator_assignments",
    )
    def list_assignments(self, request: HttpRequest, open_only: bool = False):
        """Assignments of the evaluator, most recent first."""
        assignments = EvaluatorAssignment.objects.filter(evaluator=request.user).select_related("application")
        if open_only:
            assignments = assignments.open()
        return 200, list(assignments)
