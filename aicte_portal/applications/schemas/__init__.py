"""
Application API schemas.
"""

from aicte_portal.applications.schemas.admin import AdminDashboardSchema
from aicte_portal.applications.schemas.admin import AdminStatsSchema
from aicte_portal.applications.schemas.admin import AlertSchema
from aicte_portal.applications.schemas.admin import AlertsSchema
from aicte_portal.applications.schemas.admin import AssignEvaluatorSchema
from aicte_portal.applications.schemas.admin import StatusUpdateSchema
from aicte_portal.applications.schemas.admin import WorkflowStageCountSchema
from aicte_portal.applications.schemas.applications import ApplicationCreateSchema
from aicte_portal.applications.schemas.applications import ApplicationDetailSchema
from aicte_portal.applications.schemas.applications import ApplicationResponseSchema
from aicte_portal.applications.schemas.applications import ApplicationSchema
from aicte_portal.applications.schemas.applications import ApplicationSummarySchema
from aicte_portal.applications.schemas.applications import ApplicationUpdateSchema
from aicte_portal.applications.schemas.applications import DecisionSchema
from aicte_portal.applications.schemas.applications import TimelineStageSchema
from aicte_portal.applications.schemas.applications import TrackerEntrySchema
from aicte_portal.applications.schemas.documents import DocumentCreateSchema
from aicte_portal.applications.schemas.documents import DocumentResponseSchema
from aicte_portal.applications.schemas.documents import DocumentSchema
from aicte_portal.applications.schemas.documents import VerificationCreateSchema
from aicte_portal.applications.schemas.documents import VerificationResponseSchema
from aicte_portal.applications.schemas.documents import VerificationSchema
from aicte_portal.applications.schemas.images import CVAnalysisCreateSchema
from aicte_portal.applications.schemas.images import CVAnalysisResponseSchema
from aicte_portal.applications.schemas.images import CVAnalysisSchema
from aicte_portal.applications.schemas.images import InfrastructureImageCreateSchema
from aicte_portal.applications.schemas.images import InfrastructureImageResponseSchema
from aicte_portal.applications.schemas.images import InfrastructureImageSchema

__all__ = [
    "AdminDashboardSchema",
    "AdminStatsSchema",
    "AlertSchema",
    "AlertsSchema",
    "ApplicationCreateSchema",
    "ApplicationDetailSchema",
    "ApplicationResponseSchema",
    "ApplicationSchema",
    "ApplicationSummarySchema",
    "ApplicationUpdateSchema",
    "AssignEvaluatorSchema",
    "CVAnalysisCreateSchema",
    "CVAnalysisResponseSchema",
    "CVAnalysisSchema",
    "DecisionSchema",
    "DocumentCreateSchema",
    "DocumentResponseSchema",
    "DocumentSchema",
    "InfrastructureImageCreateSchema",
    "InfrastructureImageResponseSchema",
    "InfrastructureImageSchema",
    "StatusUpdateSchema",
    "TimelineStageSchema",
    "TrackerEntrySchema",
    "VerificationCreateSchema",
    "VerificationResponseSchema",
    "VerificationSchema",
    "WorkflowStageCountSchema",
]
