"""
Messaging API controllers.
"""

from aicte_portal.messaging.api.messages import MessageController

__all__ = ["MessageController"]
