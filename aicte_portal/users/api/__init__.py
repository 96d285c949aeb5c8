"""
User API controllers.
"""

from aicte_portal.users.api.admin import UserAdminController
from aicte_portal.users.api.auth import AuthController
from aicte_portal.users.api.settings import SettingsController

__all__ = ["AuthController", "SettingsController", "UserAdminController"]
