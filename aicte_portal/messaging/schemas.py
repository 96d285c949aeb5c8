"""
Messaging API schemas.
"""

from datetime import datetime
from uuid import UUID

from ninja import Schema
from pydantic import field_validator

from aicte_portal.core.schemas import check_not_blank


class MessageOutSchema(Schema):
    """Schema for a message on an application thread."""

    id: UUID
    application_id: UUID
    sender_id: UUID
    sender_name: str
    sender_role: str
    content: str
    created: datetime

    @staticmethod
    def resolve_sender_name(obj) -> str:
        return obj.sender.name

    @staticmethod
    def resolve_sender_role(obj) -> str:
        return obj.sender.role


class MessageContentSchema(Schema):
    """Body of a message posted on a known application."""

    content: str

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        return check_not_blank(v, "Message content")


class SendMessageSchema(MessageContentSchema):
    """Schema for sending a message."""

    application_id: UUID


class MessageSentSchema(Schema):
    """Schema for sent message response."""

    success: bool = True
    message: MessageOutSchema
