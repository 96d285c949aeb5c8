"""
Evaluations API controller.
"""

import logging

from django.db import transaction
from django.http import HttpRequest
from django.utils import timezone
from ninja_extra import api_controller
from ninja_extra import http_get
from ninja_extra import http_post

import aicte_portal.applications.converters  # noqa: F401
from aicte_portal.activity.models import NotificationType
from aicte_portal.activity.services import notify_admins
from aicte_portal.activity.services import record_audit
from aicte_portal.applications.models import Application
from aicte_portal.applications.services import is_assigned_evaluator
from aicte_portal.core.api import BaseAPI
from aicte_portal.core.api import IsAuthenticated
from aicte_portal.core.api import IsEvaluator
from aicte_portal.core.exceptions import AlreadyExistsError
from aicte_portal.core.exceptions import BadRequestError
from aicte_portal.core.exceptions import ErrorSchema
from aicte_portal.core.exceptions import NotFoundError
from aicte_portal.core.exceptions import NotOwnerError
from aicte_portal.core.exceptions import PermissionDeniedError
from aicte_portal.core.roles import is_admin
from aicte_portal.evaluations.models import Evaluation
from aicte_portal.evaluations.models import EvaluatorAssignment
from aicte_portal.evaluations.schemas import EvaluationCreateSchema
from aicte_portal.evaluations.schemas import EvaluationResponseSchema
from aicte_portal.evaluations.schemas import EvaluationSchema

logger = logging.getLogger(__name__)


@api_controller("/evaluations", tags=["Evaluations"], permissions=[IsAuthenticated])
class EvaluationController(BaseAPI):

    @http_post(
        "/",
        response={201: EvaluationResponseSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema, 409: ErrorSchema},
        permissions=[IsEvaluator],
        url_name="evaluations_submit",
    )
    def submit_evaluation(self, request: HttpRequest, data: EvaluationCreateSchema):
        """File the evaluation of an open assignment and close the assignment."""
        assignment = (
            EvaluatorAssignment.objects.select_related("application")
            .filter(id=data.assignment_id)
            .first()
        )
        if assignment is None:
            return NotFoundError("Assignment not found").to_response()

        if assignment.evaluator_id != request.user.id:
            return NotOwnerError("This assignment belongs to another evaluator").to_response()
        if data.application_id is not None and data.application_id != assignment.application_id:
            return BadRequestError("Application does not match the assignment").to_response()
        if assignment.is_completed:
            return AlreadyExistsError("Evaluation already submitted for this assignment").to_response()

        application = assignment.application
        with transaction.atomic():
            evaluation = Evaluation.objects.create(
                assignment=assignment,
                application=application,
                evaluator=request.user,
                score=data.score,
                recommendation=data.recommendation,
                comments=data.comments,
                site_visit_notes=data.site_visit_notes,
            )

            assignment.completed_at = timezone.now()
            assignment.save(update_fields=["completed_at", "modified"])

            profile = getattr(request.user, "evaluator_profile", None)
            if profile is not None and profile.current_workload > 0:
                profile.current_workload -= 1
                profile.save(update_fields=["current_workload", "modified"])

            record_audit(request.user, "evaluation.submit", evaluation, {"application": application.number})
            notify_admins(
                title="Evaluation submitted",
                message=f"{request.user.name} submitted an evaluation for {application.number}.",
                kind=NotificationType.INFO,
            )

        logger.info("Evaluation filed for %s by %s", application.number, request.user.email)
        return 201, EvaluationResponseSchema(evaluation=EvaluationSchema.from_orm(evaluation))

    @http_get(
        "/application/{appnum:number}",
        response={200: list[EvaluationSchema], 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="evaluations_for_application",
    )
    def list_for_application(self, request: HttpRequest, number: str):
        """Evaluations filed for an application. Admins and assigned evaluators only."""
        application = Application.objects.filter(number=number).first()
        if application is None:
            return NotFoundError("Application not found").to_response()

        if not is_admin(request.user) and not is_assigned_evaluator(request.user, application):
            return PermissionDeniedError("Access denied to these evaluations").to_response()

        return 200, list(application.evaluations.all())
