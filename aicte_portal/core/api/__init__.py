from aicte_portal.core.api.base import BaseAPI
from aicte_portal.core.api.permissions import AllowAny
from aicte_portal.core.api.permissions import IsAdmin
from aicte_portal.core.api.permissions import IsAuthenticated
from aicte_portal.core.api.permissions import IsEvaluator
from aicte_portal.core.api.permissions import IsInstitution

__all__ = ["BaseAPI", "IsAuthenticated", "IsInstitution", "IsEvaluator", "IsAdmin", "AllowAny"]
