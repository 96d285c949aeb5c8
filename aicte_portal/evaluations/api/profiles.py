"""
Evaluator profiles API controller.
"""

from uuid import UUID

from django.contrib.auth import get_user_model
from django.http import HttpRequest
from ninja_extra import api_controller
from ninja_extra import http_get
from ninja_extra import http_patch
from ninja_extra import http_post

from aicte_portal.activity.services import record_audit
from aicte_portal.core.api import BaseAPI
from aicte_portal.core.api import IsAdmin
from aicte_portal.core.api import IsAuthenticated
from aicte_portal.core.exceptions import AlreadyExistsError
from aicte_portal.core.exceptions import BadRequestError
from aicte_portal.core.exceptions import ErrorSchema
from aicte_portal.core.exceptions import NotFoundError
from aicte_portal.core.exceptions import PermissionDeniedError
from aicte_portal.core.roles import is_admin
from aicte_portal.core.roles import is_evaluator
from aicte_portal.evaluations.models import EvaluatorProfile
from aicte_portal.evaluations.schemas import EvaluatorProfileCreateSchema
from aicte_portal.evaluations.schemas import EvaluatorProfileResponseSchema
from aicte_portal.evaluations.schemas import EvaluatorProfileSchema
from aicte_portal.evaluations.schemas import EvaluatorProfileUpdateSchema

User = get_user_model()


@api_controller("/evaluators", tags=["Evaluators"], permissions=[IsAdmin])
class EvaluatorProfileController(BaseAPI):
    """Evaluator expertise and availability."""

    @http_get(
        "/",
        response={200: list[EvaluatorProfileSchema], 401: ErrorSchema, 403: ErrorSchema},
        url_name="evaluators_list",
    )
    def list_profiles(self, request: HttpRequest):
        return 200, list(EvaluatorProfile.objects.select_related("user"))

    @http_get(
        "/available",
        response={200: list[EvaluatorProfileSchema], 401: ErrorSchema, 403: ErrorSchema},
        url_name="evaluators_available",
    )
    def list_available(self, request: HttpRequest):
        """Available evaluators, least loaded first."""
        profiles = (
            EvaluatorProfile.objects.filter(available=True, user__is_active=True)
            .select_related("user")
            .order_by("current_workload", "created")
        )
        return 200, list(profiles)

    @http_post(
        "/",
        response={201: EvaluatorProfileResponseSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 409: ErrorSchema},
        url_name="evaluators_create",
    )
    def create_profile(self, request: HttpRequest, data: EvaluatorProfileCreateSchema):
        """Create the profile of an evaluator account. One profile per user."""
        user = User.objects.filter(id=data.user_id).first()
        if user is None or not is_evaluator(user):
            return BadRequestError("User must have evaluator role").to_response()

        if EvaluatorProfile.objects.filter(user=user).exists():
            return AlreadyExistsError("Evaluator profile already exists").to_response()

        profile = EvaluatorProfile.objects.create(
            user=user,
            expertise=data.expertise.strip(),
            department=data.department.strip(),
            current_workload=user.assignments.filter(completed_at__isnull=True).count(),
        )
        record_audit(request.user, "evaluator_profile.create", profile, {"user_id": str(user.id)})

        return 201, {"evaluator": profile}

    @http_patch(
        "/{uuid:profile_id}",
        response={200: EvaluatorProfileResponseSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        permissions=[IsAuthenticated],
        url_name="evaluators_update",
    )
    def update_profile(self, request: HttpRequest, profile_id: UUID, data: EvaluatorProfileUpdateSchema):
        """Update a profile. Admins may edit any, evaluators only their own."""
        updates = data.model_dump(exclude_none=True)
        if not updates:
            return BadRequestError("No updates provided").to_response()

        profile = EvaluatorProfile.objects.select_related("user").filter(id=profile_id).first()
        if profile is None:
            return NotFoundError("Evaluator not found").to_response()

        if not is_admin(request.user) and profile.user_id != request.user.id:
            return PermissionDeniedError().to_response()

        for field, value in updates.items():
            setattr(profile, field, value)
        profile.save()
        record_audit(request.user, "evaluator_profile.update", profile, {"fields": sorted(updates)})

        return 200, {"evaluator": profile}
