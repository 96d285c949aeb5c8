"""
Activity API schemas.
"""

from datetime import datetime
from uuid import UUID

from ninja import Schema
from pydantic import field_validator

from aicte_portal.core.schemas import check_not_blank


class NotificationSchema(Schema):
    id: UUID
    type: str
    title: str
    message: str
    is_read: bool
    created: datetime


class AuditLogSchema(Schema):
    id: UUID
    actor_id: UUID | None = None
    actor_email: str | None = None
    action: str
    entity_type: str
    entity_id: str
    details: dict
    created: datetime

    @staticmethod
    def resolve_actor_email(obj) -> str | None:
        return obj.actor.email if obj.actor else None


class AnalyticsMetricSchema(Schema):
    id: UUID
    metric_type: str
    value: float | None
    data: dict | list | None
    created: datetime


class AnalyticsMetricResponseSchema(Schema):
    metric: AnalyticsMetricSchema


class AnalyticsMetricCreateSchema(Schema):
    metric_type: str
    value: float | None = None
    data: dict | list | None = None

    @field_validator("metric_type")
    @classmethod
    def type_not_blank(cls, v: str) -> str:
        return check_not_blank(v, "Metric type")
