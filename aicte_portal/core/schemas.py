"""
Base schemas for the API.
"""

from datetime import datetime
from uuid import UUID

from ninja import Schema


class BaseSchema(Schema):
    """
    Base schema with common fields.

    Provides standard fields for models inheriting from BaseModel.
    """

    id: UUID
    created: datetime
    modified: datetime


class MessageSchema(Schema):
    """Schema for simple message responses."""

    success: bool = True
    message: str | None = None


def check_not_blank(v: str, label: str) -> str:
    """Reject empty or whitespace-only strings, return the stripped value."""
    if not v or not v.strip():
        msg = f"{label} is required"
        raise ValueError(msg)
    return v.strip()
