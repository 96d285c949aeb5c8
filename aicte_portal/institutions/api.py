"""
Institution API controller.
"""

from django.http import HttpRequest
from ninja_extra import api_controller
from ninja_extra import http_get
from ninja_extra import http_put

from aicte_portal.activity.services import record_audit
from aicte_portal.applications.models import Application
from aicte_portal.applications.schemas import ApplicationSchema
from aicte_portal.applications.schemas import ApplicationSummarySchema
from aicte_portal.applications.workflow import IN_PROGRESS_STATUSES
from aicte_portal.applications.workflow import ApplicationStatus
from aicte_portal.core.api import BaseAPI
from aicte_portal.core.api import IsInstitution
from aicte_portal.core.exceptions import ErrorSchema
from aicte_portal.core.exceptions import NotFoundError
from aicte_portal.institutions.models import Institution
from aicte_portal.institutions.schemas import InstitutionDashboardSchema
from aicte_portal.institutions.schemas import InstitutionProfileSchema
from aicte_portal.institutions.schemas import InstitutionResponseSchema
from aicte_portal.institutions.schemas import InstitutionSchema
from aicte_portal.institutions.schemas import InstitutionStatsSchema
from aicte_portal.institutions.services import get_institution_for

RECENT_APPLICATIONS = 10


def institution_not_found():
    return NotFoundError("Institution not found").to_response()


@api_controller("/institution", tags=["Institution"], permissions=[IsInstitution])
class InstitutionController(BaseAPI):
    """Profile, dashboard and applications of the signed-in institution."""

    @http_get(
        "/profile",
        response={200: InstitutionResponseSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="institution_profile",
    )
    def get_profile(self, request: HttpRequest):
        institution = get_institution_for(request.user)
        if institution is None:
            return institution_not_found()

        return 200, InstitutionResponseSchema(institution=InstitutionSchema.from_orm(institution))

    @http_put(
        "/profile",
        response={200: InstitutionResponseSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema},
        url_name="institution_profile_update",
    )
    def update_profile(self, request: HttpRequest, data: InstitutionProfileSchema):
        """Create the profile on first call, update it afterwards."""
        institution, created = Institution.objects.update_or_create(
            user=request.user,
            defaults={
                "name": data.name,
                "address": data.address,
                "state": data.state,
                "contact_email": data.contact_email or request.user.email,
                "contact_phone": data.contact_phone.strip(),
            },
        )
        record_audit(
            request.user,
            "institution.create" if created else "institution.update",
            institution,
        )

        return 200, InstitutionResponseSchema(institution=InstitutionSchema.from_orm(institution))

    @http_get(
        "/dashboard",
        response={200: InstitutionDashboardSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="institution_dashboard",
    )
    def dashboard(self, request: HttpRequest):
        """Application counters and the ten most recent applications."""
        institution = get_institution_for(request.user)
        if institution is None:
            return institution_not_found()

        applications = Application.objects.filter(institution=institution)

        stats = InstitutionStatsSchema(
            total=applications.count(),
            in_progress=applications.filter(status__in=IN_PROGRESS_STATUSES).count(),
            approved=applications.filter(status=ApplicationStatus.APPROVED).count(),
            rejected=applications.filter(status=ApplicationStatus.REJECTED).count(),
        )
        recent = [ApplicationSummarySchema.from_orm(a) for a in applications[:RECENT_APPLICATIONS]]

        return 200, InstitutionDashboardSchema(stats=stats, applications=recent)

    @http_get(
        "/applications",
        response={200: list[ApplicationSchema], 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="institution_applications",
    )
    def list_applications(self, request: HttpRequest):
        """All applications of the institution, newest first."""
        institution = get_institution_for(request.user)
        if institution is None:
            return institution_not_found()

        return 200, list(Application.objects.filter(institution=institution))
