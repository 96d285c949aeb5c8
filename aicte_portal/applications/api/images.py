"""
Infrastructure images API controller: deletion and CV analysis.
"""

from uuid import UUID

from django.db import transaction
from django.http import HttpRequest
from ninja_extra import api_controller
from ninja_extra import http_delete
from ninja_extra import http_get
from ninja_extra import http_post

from aicte_portal.activity.services import record_audit
from aicte_portal.applications import services
from aicte_portal.applications.models import CVAnalysis
from aicte_portal.applications.models import InfrastructureImage
from aicte_portal.applications.schemas import CVAnalysisCreateSchema
from aicte_portal.applications.schemas import CVAnalysisResponseSchema
from aicte_portal.core.api import BaseAPI
from aicte_portal.core.api import IsAdmin
from aicte_portal.core.api import IsAuthenticated
from aicte_portal.core.api import IsInstitution
from aicte_portal.core.exceptions import AlreadyExistsError
from aicte_portal.core.exceptions import ErrorSchema
from aicte_portal.core.exceptions import NotFoundError
from aicte_portal.core.exceptions import NotOwnerError
from aicte_portal.core.exceptions import PermissionDeniedError
from aicte_portal.core.schemas import MessageSchema


def find_image(image_id: UUID) -> InfrastructureImage | None:
    return InfrastructureImage.objects.select_related("application__institution").filter(id=image_id).first()


@api_controller("/infrastructure-images", tags=["Infrastructure images"], permissions=[IsAuthenticated])
class InfrastructureImageController(BaseAPI):

    @http_delete(
        "/{image_id}",
        response={200: MessageSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        permissions=[IsInstitution],
        url_name="infrastructure_images_delete",
    )
    def delete_image(self, request: HttpRequest, image_id: UUID):
        """Delete an image from one of the caller's applications."""
        image = find_image(image_id)
        if image is None:
            return NotFoundError("Image not found").to_response()

        if not services.is_owner(request.user, image.application):
            return NotOwnerError("You can only delete images from your own applications").to_response()

        with transaction.atomic():
            record_audit(
                request.user,
                "infrastructure_image.delete",
                image,
                {"application": image.application.number, "facility_type": image.facility_type},
            )
            image.delete()

        return 200, MessageSchema(message="Image deleted successfully")

    @http_get(
        "/{image_id}/cv-analysis",
        response={200: CVAnalysisResponseSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="infrastructure_images_analysis_get",
    )
    def get_analysis(self, request: HttpRequest, image_id: UUID):
        image = find_image(image_id)
        if image is None:
            return NotFoundError("Image not found").to_response()

        if not services.can_access_application(request.user, image.application):
            return PermissionDeniedError("Access denied to this image").to_response()

        analysis = CVAnalysis.objects.filter(image=image).first()
        if analysis is None:
            return NotFoundError("CV analysis not found").to_response()

        return 200, {"analysis": analysis}

    @http_post(
        "/{image_id}/cv-analysis",
        response={201: CVAnalysisResponseSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema, 409: ErrorSchema},
        permissions=[IsAdmin],
        url_name="infrastructure_images_analysis_create",
    )
    def create_analysis(self, request: HttpRequest, image_id: UUID, data: CVAnalysisCreateSchema):
        """Record the analysis of an image. One analysis per image."""
        image = find_image(image_id)
        if image is None:
            return NotFoundError("Image not found").to_response()

        if CVAnalysis.objects.filter(image=image).exists():
            return AlreadyExistsError("Image already analysed").to_response()

        with transaction.atomic():
            analysis = CVAnalysis.objects.create(image=image, **data.model_dump())
            record_audit(
                request.user,
                "infrastructure_image.analyse",
                image,
                {"meets_standards": data.meets_standards, "accuracy_score": data.accuracy_score},
            )

        return 201, {"analysis": analysis}
