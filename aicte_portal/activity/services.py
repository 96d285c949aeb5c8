"""
Helpers writing audit entries and notifications.

Called from controllers and workflow services inside their transaction.
"""

import logging

from django.contrib.auth import get_user_model
from django.db.models import Q

from aicte_portal.core.roles import Role

from .models import AuditLog
from .models import Notification
from .models import NotificationType

logger = logging.getLogger(__name__)


def record_audit(actor, action: str, entity=None, details: dict | None = None) -> AuditLog:
    """
    Append an audit entry.

    Args:
        actor: user performing the action (None for system actions)
        action: dotted action name, e.g. ``application.submit``
        entity: model instance the action applies to
        details: extra JSON-serialisable context
    """
    if actor is not None and not actor.is_authenticated:
        actor = None

    entry = AuditLog.objects.create(
        actor=actor,
        action=action,
        entity_type=entity._meta.model_name if entity is not None else "",
        entity_id=str(entity.pk) if entity is not None else "",
        details=details or {},
    )
    logger.info("Audit %s on %s:%s", action, entry.entity_type, entry.entity_id)
    return entry


def notify(user, title: str, message: str, kind: str = NotificationType.INFO) -> Notification:
    """Create a notification for a single user."""
    return Notification.objects.create(user=user, type=kind, title=title, message=message)


def notify_admins(title: str, message: str, kind: str = NotificationType.INFO) -> list[Notification]:
    """Create the same notification for every active administrator."""
    admins = get_user_model().objects.filter(is_active=True).filter(
        Q(role=Role.ADMIN) | Q(is_superuser=True)
    )
    return Notification.objects.bulk_create(
        [Notification(user=admin, type=kind, title=title, message=message) for admin in admins]
    )
