"""
Document and verification schemas.
"""

from datetime import datetime
from uuid import UUID

from ninja import Field
from ninja import Schema
from pydantic import field_validator

from aicte_portal.core.schemas import check_not_blank


class DocumentSchema(Schema):
    id: UUID
    application_id: UUID
    category: str
    file_name: str
    file_size: str
    file_url: str
    status: str
    verified: bool
    created: datetime


class DocumentResponseSchema(Schema):
    document: DocumentSchema


class DocumentCreateSchema(Schema):
    """Metadata of an uploaded file. All fields are required."""

    category: str
    file_name: str
    file_size: str
    file_url: str

    @field_validator("category", "file_name", "file_size", "file_url")
    @classmethod
    def not_blank(cls, v: str, info) -> str:
        return check_not_blank(v, info.field_name.replace("_", " ").capitalize())


class VerificationSchema(Schema):
    id: UUID
    document_id: UUID
    verification_type: str
    confidence_score: int | None
    extracted_data: dict | None
    is_compliant: bool | None
    remarks: str
    created: datetime


class VerificationResponseSchema(Schema):
    verification: VerificationSchema


class VerificationCreateSchema(Schema):
    """
    Verification outcome recorded by an admin.

    ``is_compliant`` drives the document status: true approves, false
    rejects, and leaving it out keeps the document pending.
    """

    verification_type: str
    confidence_score: int | None = Field(None, ge=0, le=100)
    extracted_data: dict | None = None
    is_compliant: bool | None = None
    remarks: str = ""

    @field_validator("verification_type")
    @classmethod
    def type_not_blank(cls, v: str) -> str:
        return check_not_blank(v, "Verification type")
