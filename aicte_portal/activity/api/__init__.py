"""
Activity API controllers.
"""

from aicte_portal.activity.api.analytics import AnalyticsController
from aicte_portal.activity.api.audit import AuditLogController
from aicte_portal.activity.api.notifications import NotificationController

__all__ = ["AnalyticsController", "AuditLogController", "NotificationController"]
