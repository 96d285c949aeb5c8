"""
Application API controllers.
"""

from aicte_portal.applications.api.admin import AdminWorkflowController
from aicte_portal.applications.api.applications import ApplicationController
from aicte_portal.applications.api.documents import DocumentController
from aicte_portal.applications.api.images import InfrastructureImageController

__all__ = [
    "AdminWorkflowController",
    "ApplicationController",
    "DocumentController",
    "InfrastructureImageController",
]
