"""
Admin workflow schemas: status changes, evaluator assignment and analytics.
"""

from datetime import datetime
from uuid import UUID

from ninja import Schema

from aicte_portal.applications.workflow import ApplicationStatus
from aicte_portal.evaluations.models import Priority


class StatusUpdateSchema(Schema):
    status: ApplicationStatus


class AssignEvaluatorSchema(Schema):
    application_id: UUID
    evaluator_id: UUID
    priority: Priority = Priority.MEDIUM
    deadline: datetime | None = None


class AdminStatsSchema(Schema):
    total_applications: int
    active_evaluators: int
    approval_rate: int
    avg_processing_time: str


class WorkflowStageCountSchema(Schema):
    stage: str
    count: int


class AdminDashboardSchema(Schema):
    stats: AdminStatsSchema
    workflow_stages: list[WorkflowStageCountSchema]


class AlertSchema(Schema):
    type: str
    message: str
    action: str
    action_url: str


class AlertsSchema(Schema):
    alerts: list[AlertSchema]
