"""
Institution API schemas.
"""

from datetime import datetime
from uuid import UUID

from ninja import Schema
from pydantic import EmailStr
from pydantic import field_validator

from aicte_portal.applications.schemas import ApplicationSummarySchema
from aicte_portal.core.schemas import check_not_blank


class InstitutionSchema(Schema):
    id: UUID
    user_id: UUID
    name: str
    address: str
    state: str
    contact_email: str
    contact_phone: str
    created: datetime
    modified: datetime


class InstitutionResponseSchema(Schema):
    institution: InstitutionSchema


class InstitutionProfileSchema(Schema):
    """
    Create-or-update payload for the institution profile.

    ``contact_email`` defaults to the account email.
    """

    name: str
    address: str
    state: str
    contact_email: EmailStr | None = None
    contact_phone: str = ""

    @field_validator("name", "address", "state")
    @classmethod
    def not_blank(cls, v: str, info) -> str:
        return check_not_blank(v, info.field_name.capitalize())


class InstitutionStatsSchema(Schema):
    total: int
    in_progress: int
    approved: int
    rejected: int


class InstitutionDashboardSchema(Schema):
    stats: InstitutionStatsSchema
    applications: list[ApplicationSummarySchema]
