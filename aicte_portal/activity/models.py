"""
Models for the activity trail of the portal.

Contains:
- Notification: per-user message raised by workflow events
- AuditLog: append-only record of who changed what
- AnalyticsMetric: figures recorded for the admin analytics page
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from aicte_portal.core.models import BaseModel


class NotificationType(models.TextChoices):
    """Kinds of notification shown to users."""

    INFO = "info", _("Information")
    STATUS_CHANGE = "status_change", _("Status change")
    ASSIGNMENT = "assignment", _("Assignment")
    SUBMISSION = "submission", _("Submission")
    MESSAGE = "message", _("Message")


class Notification(BaseModel):
    """A message addressed to one user, flagged once read."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
        verbose_name=_("user"),
    )
    type = models.CharField(
        _("type"),
        max_length=30,
        choices=NotificationType.choices,
        default=NotificationType.INFO,
    )
    title = models.CharField(_("title"), max_length=255)
    message = models.TextField(_("message"))
    is_read = models.BooleanField(_("read"), default=False)

    class Meta:
        verbose_name = _("notification")
        verbose_name_plural = _("notifications")
        ordering = ["-created"]

    def __str__(self) -> str:
        return f"{self.user} - {self.title}"


class AuditLog(BaseModel):
    """
    Audit trail entry.

    ``entity_type``/``entity_id`` identify the touched record without a
    foreign key so entries survive the deletion of what they describe.
    """

    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="audit_logs",
        verbose_name=_("actor"),
    )
    action = models.CharField(_("action"), max_length=100)
    entity_type = models.CharField(_("entity type"), max_length=50, blank=True)
    entity_id = models.CharField(_("entity id"), max_length=64, blank=True)
    details = models.JSONField(_("details"), default=dict, blank=True)

    class Meta:
        verbose_name = _("audit log")
        verbose_name_plural = _("audit logs")
        ordering = ["-created"]
        indexes = [
            models.Index(fields=["entity_type", "entity_id"], name="activity_au_entity__6b1f0e_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.action} {self.entity_type}:{self.entity_id}"


class AnalyticsMetric(BaseModel):
    """A recorded figure of the admin analytics page, e.g. a monthly total."""

    metric_type = models.CharField(_("metric type"), max_length=100, db_index=True)
    value = models.FloatField(_("value"), null=True, blank=True)
    data = models.JSONField(_("data"), null=True, blank=True)

    class Meta:
        verbose_name = _("analytics metric")
        verbose_name_plural = _("analytics metrics")
        ordering = ["-created"]

    def __str__(self) -> str:
        return f"{self.metric_type} = {self.value}"
