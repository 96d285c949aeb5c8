"""
Infrastructure image and CV analysis schemas.
"""

from datetime import datetime
from uuid import UUID

from ninja import Field
from ninja import Schema
from pydantic import field_validator

from aicte_portal.core.schemas import check_not_blank


class InfrastructureImageSchema(Schema):
    id: UUID
    application_id: UUID
    image_url: str
    facility_type: str
    geo_coordinates: dict | None
    created: datetime


class InfrastructureImageResponseSchema(Schema):
    image: InfrastructureImageSchema


class InfrastructureImageCreateSchema(Schema):
    """Image metadata. ``geo_coordinates`` is free-form, e.g. ``{"lat": .., "lng": ..}``."""

    image_url: str
    facility_type: str
    geo_coordinates: dict | None = None

    @field_validator("image_url", "facility_type")
    @classmethod
    def not_blank(cls, v: str, info) -> str:
        return check_not_blank(v, info.field_name.replace("_", " ").capitalize())


class CVAnalysisSchema(Schema):
    id: UUID
    image_id: UUID
    dimensions: dict | None
    detected_features: list | dict | None
    meets_standards: bool | None
    accuracy_score: int | None
    remarks: str
    created: datetime


class CVAnalysisResponseSchema(Schema):
    analysis: CVAnalysisSchema


class CVAnalysisCreateSchema(Schema):
    dimensions: dict | None = None
    detected_features: list | dict | None = None
    meets_standards: bool | None = None
    accuracy_score: int | None = Field(None, ge=0, le=100)
    remarks: str = ""
