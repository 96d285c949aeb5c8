"""
Applications API controller.

Institutions create, edit and submit their applications; admins and
assigned evaluators read them and record the final decision.
"""

import logging

from django.db import transaction
from django.http import HttpRequest
from ninja_extra import api_controller
from ninja_extra import http_delete
from ninja_extra import http_get
from ninja_extra import http_post
from ninja_extra import http_put

import aicte_portal.applications.converters  # noqa: F401
from aicte_portal.activity.services import record_audit
from aicte_portal.applications import services
from aicte_portal.applications.models import Application
from aicte_portal.applications.models import DocumentStatus
from aicte_portal.applications.schemas import ApplicationCreateSchema
from aicte_portal.applications.schemas import ApplicationDetailSchema
from aicte_portal.applications.schemas import ApplicationResponseSchema
from aicte_portal.applications.schemas import ApplicationSchema
from aicte_portal.applications.schemas import ApplicationUpdateSchema
from aicte_portal.applications.schemas import DecisionSchema
from aicte_portal.applications.schemas import DocumentCreateSchema
from aicte_portal.applications.schemas import DocumentResponseSchema
from aicte_portal.applications.schemas import DocumentSchema
from aicte_portal.applications.schemas import InfrastructureImageCreateSchema
from aicte_portal.applications.schemas import InfrastructureImageResponseSchema
from aicte_portal.applications.schemas import InfrastructureImageSchema
from aicte_portal.applications.schemas import TrackerEntrySchema
from aicte_portal.core.api import BaseAPI
from aicte_portal.core.api import IsAuthenticated
from aicte_portal.core.api import IsInstitution
from aicte_portal.core.exceptions import BadRequestError
from aicte_portal.core.exceptions import ErrorSchema
from aicte_portal.core.exceptions import NotFoundError
from aicte_portal.core.exceptions import NotOwnerError
from aicte_portal.core.exceptions import PermissionDeniedError
from aicte_portal.core.roles import is_admin
from aicte_portal.core.schemas import MessageSchema
from aicte_portal.institutions.services import get_institution_for
from aicte_portal.messaging.schemas import MessageContentSchema
from aicte_portal.messaging.schemas import MessageSentSchema
from aicte_portal.messaging.services import post_message

logger = logging.getLogger(__name__)


def find_application(number: str) -> Application | None:
    return Application.objects.select_related("institution").filter(number=number).first()


def application_not_found():
    return NotFoundError("Application not found").to_response()


@api_controller("/applications", tags=["Applications"], permissions=[IsAuthenticated])
class ApplicationController(BaseAPI):
    """API endpoints for approval applications."""

    @http_post(
        "/",
        response={201: ApplicationResponseSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        permissions=[IsInstitution],
        url_name="applications_create",
    )
    def create_application(self, request: HttpRequest, data: ApplicationCreateSchema):
        """Create a draft application together with its six timeline stages."""
        institution = get_institution_for(request.user)
        if institution is None:
            return NotFoundError("Institution profile not found").to_response()

        application = services.create_application(
            institution,
            request.user,
            application_type=data.application_type,
            institution_name=data.institution_name,
            address=data.address,
            state=data.state,
            course_name=data.course_name,
            intake=data.intake,
            description=data.description,
        )

        return 201, ApplicationResponseSchema(application=ApplicationSchema.from_orm(application))

    @http_get(
        "/tracker",
        response={200: list[TrackerEntrySchema], 401: ErrorSchema},
        url_name="applications_tracker",
    )
    def tracker(self, request: HttpRequest):
        """
        Applications with their documents and verification progress.

        Institutions see their own, evaluators those assigned to them,
        admins every application.
        """
        applications = services.applications_visible_to(request.user).prefetch_related("documents")

        result = []
        for application in applications:
            documents = list(application.documents.all())
            approved = sum(1 for d in documents if d.status == DocumentStatus.APPROVED)
            rejected = sum(1 for d in documents if d.status == DocumentStatus.REJECTED)
            pending = sum(1 for d in documents if d.status == DocumentStatus.PENDING)
            progress = round((approved + rejected) / len(documents) * 100) if documents else 0

            result.append(
                TrackerEntrySchema(
                    **ApplicationSchema.from_orm(application).model_dump(),
                    documents=[DocumentSchema.from_orm(d) for d in documents],
                    approved_docs=approved,
                    rejected_docs=rejected,
                    pending_docs=pending,
                    evaluation_progress=progress,
                )
            )

        return 200, result

    @http_get(
        "/{appnum:number}",
        response={200: ApplicationDetailSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="applications_detail",
    )
    def get_application(self, request: HttpRequest, number: str):
        """Get an application with its documents, messages and timeline."""
        application = find_application(number)
        if application is None:
            return application_not_found()

        if not services.can_access_application(request.user, application):
            return PermissionDeniedError("Access denied to this application").to_response()

        return 200, {
            "application": application,
            "documents": application.documents.all(),
            "messages": application.messages.select_related("sender"),
            "timeline": application.timeline_stages.all(),
        }

    @http_put(
        "/{appnum:number}",
        response={200: ApplicationResponseSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="applications_update",
    )
    def update_application(self, request: HttpRequest, number: str, data: ApplicationUpdateSchema):
        """Edit an application. Institutions may only edit their own drafts."""
        application = find_application(number)
        if application is None:
            return application_not_found()

        admin = is_admin(request.user)
        if not admin and not services.is_owner(request.user, application):
            return NotOwnerError("You can only edit your own applications").to_response()
        if not admin and not application.is_draft:
            return BadRequestError(
                "Only draft applications can be edited",
                code="APPLICATION_LOCKED",
            ).to_response()

        updates = data.model_dump(exclude_none=True)
        if not updates:
            return BadRequestError("No updates provided").to_response()

        with transaction.atomic():
            for field, value in updates.items():
                setattr(application, field, value)
            application.save()
            record_audit(request.user, "application.update", application, {"fields": sorted(updates)})

        return 200, ApplicationResponseSchema(application=ApplicationSchema.from_orm(application))

    @http_delete(
        "/{appnum:number}",
        response={200: MessageSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="applications_delete",
    )
    def delete_application(self, request: HttpRequest, number: str):
        """Delete a draft application along with its stages and documents."""
        application = find_application(number)
        if application is None:
            return application_not_found()

        if not is_admin(request.user) and not services.is_owner(request.user, application):
            return NotOwnerError("You can only delete your own applications").to_response()
        if not application.is_draft:
            return BadRequestError(
                "Only draft applications can be deleted",
                code="APPLICATION_LOCKED",
            ).to_response()

        with transaction.atomic():
            record_audit(request.user, "application.delete", application, {"number": application.number})
            application.delete()

        logger.info("Application %s deleted by %s", number, request.user.email)
        return 200, MessageSchema(message="Application deleted successfully")

    @http_post(
        "/{appnum:number}/submit",
        response={200: ApplicationResponseSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        permissions=[IsInstitution],
        url_name="applications_submit",
    )
    def submit_application(self, request: HttpRequest, number: str):
        """Submit a draft for review."""
        application = find_application(number)
        if application is None:
            return application_not_found()

        if not services.is_owner(request.user, application):
            return NotOwnerError("You can only submit your own applications").to_response()

        services.submit_application(application, request.user)

        return 200, ApplicationResponseSchema(application=ApplicationSchema.from_orm(application))

    @http_post(
        "/{appnum:number}/decision",
        response={200: ApplicationResponseSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="applications_decision",
    )
    def record_decision(self, request: HttpRequest, number: str, data: DecisionSchema):
        """Approve, reject or conditionally approve. Admins and assigned evaluators only."""
        application = find_application(number)
        if application is None:
            return application_not_found()

        if not is_admin(request.user) and not services.is_assigned_evaluator(request.user, application):
            return PermissionDeniedError("Only admins and assigned evaluators can decide").to_response()

        services.decide(application, data.decision, request.user, remarks=data.remarks)

        return 200, ApplicationResponseSchema(application=ApplicationSchema.from_orm(application))

    @http_get(
        "/{appnum:number}/documents",
        response={200: list[DocumentSchema], 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="applications_documents_list",
    )
    def list_documents(self, request: HttpRequest, number: str):
        application = find_application(number)
        if application is None:
            return application_not_found()

        if not services.can_access_application(request.user, application):
            return PermissionDeniedError("Access denied to this application").to_response()

        return 200, list(application.documents.all())

    @http_post(
        "/{appnum:number}/documents",
        response={201: DocumentResponseSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        permissions=[IsInstitution],
        url_name="applications_documents_upload",
    )
    def upload_document(self, request: HttpRequest, number: str, data: DocumentCreateSchema):
        """Attach document metadata to one of the caller's applications."""
        application = find_application(number)
        if application is None:
            return application_not_found()

        if not services.is_owner(request.user, application):
            return NotOwnerError("You can only upload documents to your own applications").to_response()
        if application.is_terminal:
            return BadRequestError(
                "Documents cannot be added once a decision is recorded",
                code="APPLICATION_LOCKED",
            ).to_response()

        with transaction.atomic():
            document = application.documents.create(
                category=data.category,
                file_name=data.file_name,
                file_size=data.file_size,
                file_url=data.file_url,
            )
            record_audit(request.user, "document.upload", document, {"application": application.number})

        return 201, DocumentResponseSchema(document=DocumentSchema.from_orm(document))

    @http_post(
        "/{appnum:number}/messages",
        response={201: MessageSentSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="applications_messages_send",
    )
    def send_message(self, request: HttpRequest, number: str, data: MessageContentSchema):
        """Post a message on the thread of an application."""
        application = find_application(number)
        if application is None:
            return application_not_found()

        if not services.can_access_application(request.user, application):
            return PermissionDeniedError("Access denied to send messages for this application").to_response()

        message = post_message(request.user, application, data.content)
        return 201, {"message": message}

    @http_get(
        "/{appnum:number}/infrastructure-images",
        response={200: list[InfrastructureImageSchema], 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="applications_images_list",
    )
    def list_images(self, request: HttpRequest, number: str):
        """Infrastructure images of an application, newest first."""
        application = find_application(number)
        if application is None:
            return application_not_found()

        if not services.can_access_application(request.user, application):
            return PermissionDeniedError("Access denied to this application").to_response()

        return 200, list(application.infrastructure_images.all())

    @http_post(
        "/{appnum:number}/infrastructure-images",
        response={201: InfrastructureImageResponseSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        permissions=[IsInstitution],
        url_name="applications_images_upload",
    )
    def upload_image(self, request: HttpRequest, number: str, data: InfrastructureImageCreateSchema):
        application = find_application(number)
        if application is None:
            return application_not_found()

        if not services.is_owner(request.user, application):
            return NotOwnerError("You can only upload images to your own applications").to_response()
        if application.is_terminal:
            return BadRequestError(
                "Images cannot be added once a decision is recorded",
                code="APPLICATION_LOCKED",
            ).to_response()

        with transaction.atomic():
            image = application.infrastructure_images.create(
                image_url=data.image_url,
                facility_type=data.facility_type,
                geo_coordinates=data.geo_coordinates,
            )
            record_audit(
                request.user,
                "infrastructure_image.upload",
                image,
                {"application": application.number, "facility_type": image.facility_type},
            )

        return 201, {"image": image}
