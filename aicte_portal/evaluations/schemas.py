"""
Evaluation API schemas.
"""

from datetime import datetime
from uuid import UUID

from ninja import Field
from ninja import Schema
from pydantic import field_validator


class AssignmentSchema(Schema):
    id: UUID
    application_id: UUID
    evaluator_id: UUID
    priority: str
    deadline: datetime | None
    assigned_at: datetime
    completed_at: datetime | None


class AssignmentResponseSchema(Schema):
    assignment: AssignmentSchema


class AssignmentDetailSchema(AssignmentSchema):
    """Assignment with the application fields an evaluator works from."""

    application_number: str
    institution_name: str
    application_type: str
    application_status: str
    location: str
    course_name: str
    is_completed: bool

    @staticmethod
    def resolve_application_number(obj) -> str:
        return obj.application.number

    @staticmethod
    def resolve_institution_name(obj) -> str:
        return obj.application.institution_name

    @staticmethod
    def resolve_application_type(obj) -> str:
        return obj.application.application_type

    @staticmethod
    def resolve_application_status(obj) -> str:
        return obj.application.status

    @staticmethod
    def resolve_location(obj) -> str:
        return obj.application.location

    @staticmethod
    def resolve_course_name(obj) -> str:
        return obj.application.course_name


class EvaluatorTaskSchema(Schema):
    """Open assignment row on the evaluator dashboard."""

    number: str
    institution_name: str
    application_type: str
    location: str
    deadline: datetime | None
    priority: str
    course_name: str


class EvaluatorStatsSchema(Schema):
    assigned: int
    pending: int
    upcoming: int


class EvaluatorDashboardSchema(Schema):
    stats: EvaluatorStatsSchema
    assignments: list[EvaluatorTaskSchema]


class EvaluationSchema(Schema):
    id: UUID
    assignment_id: UUID
    application_id: UUID
    evaluator_id: UUID
    score: int | None
    recommendation: str
    comments: str
    site_visit_notes: str
    created: datetime
    modified: datetime


class EvaluationResponseSchema(Schema):
    evaluation: EvaluationSchema


class EvaluationCreateSchema(Schema):
    """
    Evaluation filed against one of the caller's open assignments.

    ``application_id`` is optional; when given it must match the assignment.
    """

    assignment_id: UUID
    application_id: UUID | None = None
    score: int | None = Field(None, ge=0, le=100)
    recommendation: str = ""
    comments: str = ""
    site_visit_notes: str = ""


class EvaluatorProfileSchema(Schema):
    id: UUID
    user_id: UUID
    name: str
    email: str
    expertise: str
    department: str
    available: bool
    current_workload: int
    created: datetime

    @staticmethod
    def resolve_name(obj) -> str:
        return obj.user.name

    @staticmethod
    def resolve_email(obj) -> str:
        return obj.user.email


class EvaluatorProfileResponseSchema(Schema):
    evaluator: EvaluatorProfileSchema


class EvaluatorProfileCreateSchema(Schema):
    user_id: UUID
    expertise: str = ""
    department: str = ""


class EvaluatorProfileUpdateSchema(Schema):
    expertise: str | None = None
    department: str | None = None
    available: bool | None = None

    @field_validator("expertise", "department")
    @classmethod
    def strip(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else v
