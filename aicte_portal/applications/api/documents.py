"""
Documents API controller: deletion and verification results.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.http import HttpRequest
from ninja_extra import api_controller
from ninja_extra import http_delete
from ninja_extra import http_get
from ninja_extra import http_post

from aicte_portal.activity.services import record_audit
from aicte_portal.applications import services
from aicte_portal.applications.models import Document
from aicte_portal.applications.models import DocumentStatus
from aicte_portal.applications.schemas import VerificationCreateSchema
from aicte_portal.applications.schemas import VerificationResponseSchema
from aicte_portal.applications.schemas import VerificationSchema
from aicte_portal.core.api import BaseAPI
from aicte_portal.core.api import IsAdmin
from aicte_portal.core.api import IsAuthenticated
from aicte_portal.core.api import IsInstitution
from aicte_portal.core.exceptions import BadRequestError
from aicte_portal.core.exceptions import ErrorSchema
from aicte_portal.core.exceptions import NotFoundError
from aicte_portal.core.exceptions import NotOwnerError
from aicte_portal.core.exceptions import PermissionDeniedError
from aicte_portal.core.schemas import MessageSchema

logger = logging.getLogger(__name__)


def find_document(document_id: UUID) -> Document | None:
    return Document.objects.select_related("application__institution").filter(id=document_id).first()


@api_controller("/documents", tags=["Documents"], permissions=[IsAuthenticated])
class DocumentController(BaseAPI):

    @http_delete(
        "/{document_id}",
        response={200: MessageSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        permissions=[IsInstitution],
        url_name="documents_delete",
    )
    def delete_document(self, request: HttpRequest, document_id: UUID):
        """Delete a pending document from one of the caller's applications."""
        document = find_document(document_id)
        if document is None:
            return NotFoundError("Document not found").to_response()

        if not services.is_owner(request.user, document.application):
            return NotOwnerError("You can only delete documents from your own applications").to_response()
        if document.status != DocumentStatus.PENDING:
            return BadRequestError(
                "Only pending documents can be deleted",
                code="DOCUMENT_LOCKED",
            ).to_response()

        with transaction.atomic():
            record_audit(
                request.user,
                "document.delete",
                document,
                {"application": document.application.number, "file_name": document.file_name},
            )
            document.delete()

        return 200, MessageSchema(message="Document deleted successfully")

    @http_get(
        "/{document_id}/verification",
        response={200: VerificationResponseSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="documents_verification_get",
    )
    def get_verification(self, request: HttpRequest, document_id: UUID):
        """Latest verification result of a document."""
        document = find_document(document_id)
        if document is None:
            return NotFoundError("Document not found").to_response()

        if not services.can_access_application(request.user, document.application):
            return PermissionDeniedError("Access denied to this document").to_response()

        verification = document.verifications.first()
        if verification is None:
            return NotFoundError("Verification result not found").to_response()

        return 200, VerificationResponseSchema(verification=VerificationSchema.from_orm(verification))

    @http_post(
        "/{document_id}/verification",
        response={201: VerificationResponseSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        permissions=[IsAdmin],
        url_name="documents_verification_create",
    )
    def create_verification(self, request: HttpRequest, document_id: UUID, data: VerificationCreateSchema):
        """Record a verification and update the document status accordingly."""
        document = find_document(document_id)
        if document is None:
            return NotFoundError("Document not found").to_response()

        with transaction.atomic():
            verification = document.verifications.create(
                verification_type=data.verification_type,
                confidence_score=data.confidence_score,
                extracted_data=data.extracted_data,
                is_compliant=data.is_compliant,
                remarks=data.remarks,
            )

            document.verified = bool(data.is_compliant)
            if data.is_compliant is True:
                document.status = DocumentStatus.APPROVED
            elif data.is_compliant is False:
                document.status = DocumentStatus.REJECTED
            document.save(update_fields=["verified", "status", "modified"])

            record_audit(
                request.user,
                "document.verify",
                document,
                {"verification_type": data.verification_type, "is_compliant": data.is_compliant},
            )

        logger.info("Document %s verified as %s", document.id, document.status)
        return 201, VerificationResponseSchema(verification=VerificationSchema.from_orm(verification))
