"""
Application schemas for API requests and responses.
"""

from datetime import datetime
from uuid import UUID

from ninja import Field
from ninja import Schema
from pydantic import field_validator

from aicte_portal.applications.models import ApplicationType
from aicte_portal.applications.schemas.documents import DocumentSchema
from aicte_portal.applications.workflow import ApplicationStatus
from aicte_portal.applications.workflow import TERMINAL_STATUSES
from aicte_portal.messaging.schemas import MessageOutSchema


class ApplicationSchema(Schema):
    """Full application record."""

    id: UUID
    number: str
    institution_id: UUID
    application_type: str
    status: str
    institution_name: str
    address: str
    state: str
    course_name: str
    intake: int | None
    description: str
    submitted_at: datetime | None
    created: datetime
    modified: datetime


class ApplicationSummarySchema(Schema):
    """Compact row for dashboards."""

    number: str
    institution_name: str
    application_type: str
    status: str
    submitted_at: datetime | None
    location: str
    course_name: str


class ApplicationResponseSchema(Schema):
    application: ApplicationSchema


class ApplicationCreateSchema(Schema):
    """
    Schema for creating a draft application.

    Omitted name, address and state default to the institution profile.
    """

    application_type: ApplicationType
    institution_name: str | None = None
    address: str | None = None
    state: str | None = None
    course_name: str = ""
    intake: int | None = Field(None, gt=0)
    description: str = ""


class ApplicationUpdateSchema(Schema):
    """Partial update of the editable application fields."""

    institution_name: str | None = None
    address: str | None = None
    state: str | None = None
    course_name: str | None = None
    intake: int | None = Field(None, gt=0)
    description: str | None = None

    @field_validator("institution_name", "address", "state")
    @classmethod
    def not_blank_when_given(cls, v: str | None, info) -> str | None:
        if v is not None and not v.strip():
            msg = f"{info.field_name.replace('_', ' ').capitalize()} cannot be blank"
            raise ValueError(msg)
        return v.strip() if v is not None else v


class TimelineStageSchema(Schema):
    id: UUID
    position: int
    title: str
    description: str
    status: str
    assigned_to: str
    completed_at: datetime | None


class ApplicationDetailSchema(Schema):
    """Application with everything displayed on its detail page."""

    application: ApplicationSchema
    documents: list[DocumentSchema]
    messages: list[MessageOutSchema]
    timeline: list[TimelineStageSchema]


class TrackerEntrySchema(ApplicationSchema):
    """Application with document verification progress."""

    documents: list[DocumentSchema]
    approved_docs: int
    rejected_docs: int
    pending_docs: int
    evaluation_progress: int


class DecisionSchema(Schema):
    """Final decision on an application."""

    decision: ApplicationStatus
    remarks: str = ""

    @field_validator("decision")
    @classmethod
    def final_status_only(cls, v: ApplicationStatus) -> ApplicationStatus:
        if v not in TERMINAL_STATUSES:
            msg = "Decision must be approved, rejected or conditional_approval"
            raise ValueError(msg)
        return v
