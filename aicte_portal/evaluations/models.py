"""
Models for evaluator work.

Contains:
- EvaluatorAssignment: an evaluator's task on an application
- Evaluation: the result filed for an assignment
- EvaluatorProfile: expertise and availability of an evaluator
"""

from django.conf import settings
from django.core.validators import MaxValueValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from aicte_portal.core.models import BaseModel


class Priority(models.TextChoices):
    LOW = "low", _("Low")
    MEDIUM = "medium", _("Medium")
    HIGH = "high", _("High")


class AssignmentQuerySet(models.QuerySet):
    def open(self):
        return self.filter(completed_at__isnull=True)

    def completed(self):
        return self.filter(completed_at__isnull=False)


class EvaluatorAssignment(BaseModel):
    """
    Links an application to an evaluator.

    The assignment stays open until an evaluation sets ``completed_at``.
    """

    application = models.ForeignKey(
        "applications.Application",
        on_delete=models.CASCADE,
        related_name="assignments",
        verbose_name=_("application"),
    )
    evaluator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="assignments",
        verbose_name=_("evaluator"),
    )
    priority = models.CharField(
        _("priority"),
        max_length=10,
        choices=Priority.choices,
        default=Priority.MEDIUM,
    )
    deadline = models.DateTimeField(_("deadline"), null=True, blank=True)
    assigned_at = models.DateTimeField(_("assigned at"), default=timezone.now)
    completed_at = models.DateTimeField(_("completed at"), null=True, blank=True)

    objects = AssignmentQuerySet.as_manager()

    class Meta:
        verbose_name = _("evaluator assignment")
        verbose_name_plural = _("evaluator assignments")
        ordering = ["-assigned_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["application", "evaluator"],
                name="unique_application_evaluator",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.application.number} -> {self.evaluator}"

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None


class Evaluation(BaseModel):
    """Evaluation report filed by the assigned evaluator."""

    assignment = models.OneToOneField(
        EvaluatorAssignment,
        on_delete=models.CASCADE,
        related_name="evaluation",
        verbose_name=_("assignment"),
    )
    application = models.ForeignKey(
        "applications.Application",
        on_delete=models.CASCADE,
        related_name="evaluations",
        verbose_name=_("application"),
    )
    evaluator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="evaluations",
        verbose_name=_("evaluator"),
    )
    score = models.PositiveSmallIntegerField(
        _("score"),
        null=True,
        blank=True,
        validators=[MaxValueValidator(100)],
    )
    recommendation = models.TextField(_("recommendation"), blank=True)
    comments = models.TextField(_("comments"), blank=True)
    site_visit_notes = models.TextField(_("site visit notes"), blank=True)

    class Meta:
        verbose_name = _("evaluation")
        verbose_name_plural = _("evaluations")
        ordering = ["-created"]

    def __str__(self) -> str:
        return f"Evaluation of {self.application.number} by {self.evaluator}"


class EvaluatorProfile(BaseModel):
    """Expertise and availability of an evaluator account."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="evaluator_profile",
        verbose_name=_("user"),
    )
    expertise = models.CharField(_("expertise"), max_length=255, blank=True)
    department = models.CharField(_("department"), max_length=255, blank=True)
    available = models.BooleanField(_("available"), default=True)
    current_workload = models.PositiveIntegerField(_("current workload"), default=0)

    class Meta:
        verbose_name = _("evaluator profile")
        verbose_name_plural = _("evaluator profiles")
        ordering = ["-created"]

    def __str__(self) -> str:
        return f"{self.user} ({self.department or 'no department'})"
