"""
Models for approval applications.

Contains:
- Application: an approval request filed by an institution
- Document: file metadata attached to an application
- VerificationResult: admin verification of a document
- InfrastructureImage: facility photo attached to an application
- CVAnalysis: analysis result of an infrastructure image
- TimelineStage: ordered milestones shown to the institution
"""

import logging
import secrets

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from django_fsm import RETURN_VALUE
from django_fsm import FSMField
from django_fsm import TransitionNotAllowed
from django_fsm import transition

from aicte_portal.core.models import BaseModel

from . import workflow
from .workflow import ApplicationStatus

logger = logging.getLogger(__name__)


def generate_application_number() -> str:
    """Return a candidate number such as ``APP-2025-004217``."""
    return f"APP-{timezone.now().year}-{secrets.randbelow(1_000_000):06d}"


class ApplicationType(models.TextChoices):
    NEW_INSTITUTION = "new-institution", _("New institution")
    INTAKE_INCREASE = "intake-increase", _("Intake increase")
    NEW_COURSE = "new-course", _("New course")
    EOA = "eoa", _("Extension of approval")
    LOCATION_CHANGE = "location-change", _("Location change")


class DocumentStatus(models.TextChoices):
    PENDING = "pending", _("Pending")
    APPROVED = "approved", _("Approved")
    REJECTED = "rejected", _("Rejected")


class StageStatus(models.TextChoices):
    PENDING = "pending", _("Pending")
    CURRENT = "current", _("Current")
    COMPLETED = "completed", _("Completed")


class Application(BaseModel):
    """
    Approval application filed by an institution.

    ``status`` only moves through the transition methods below; the
    allowed moves are listed in ``applications.workflow``.
    """

    number = models.CharField(
        _("application number"),
        max_length=20,
        unique=True,
        editable=False,
    )
    institution = models.ForeignKey(
        "institutions.Institution",
        on_delete=models.PROTECT,
        related_name="applications",
        verbose_name=_("institution"),
    )
    application_type = models.CharField(
        _("application type"),
        max_length=30,
        choices=ApplicationType.choices,
    )
    status = FSMField(
        _("status"),
        default=ApplicationStatus.DRAFT,
        choices=ApplicationStatus.choices,
    )

    institution_name = models.CharField(_("institution name"), max_length=255)
    address = models.TextField(_("address"))
    state = models.CharField(_("state"), max_length=100)
    course_name = models.CharField(_("course name"), max_length=255, blank=True)
    intake = models.PositiveIntegerField(_("intake"), null=True, blank=True)
    description = models.TextField(_("description"), blank=True)

    submitted_at = models.DateTimeField(_("submitted at"), null=True, blank=True)

    class Meta:
        verbose_name = _("application")
        verbose_name_plural = _("applications")
        ordering = ["-created"]

    def __str__(self) -> str:
        return f"{self.number} ({self.institution_name})"

    @property
    def location(self) -> str:
        return f"{self.address}, {self.state}"

    @property
    def is_draft(self) -> bool:
        return self.status == ApplicationStatus.DRAFT

    @property
    def is_terminal(self) -> bool:
        return workflow.is_terminal(self.status)

    # FSM Transitions

    @transition(field=status, source=ApplicationStatus.DRAFT, target=ApplicationStatus.SUBMITTED)
    def submit(self):
        """Institution files the draft."""
        self.submitted_at = timezone.now()

    @transition(
        field=status,
        source=workflow.ASSIGNABLE_STATUSES,
        target=ApplicationStatus.UNDER_EVALUATION,
    )
    def start_evaluation(self):
        """
        An evaluator was assigned.

        Assigning another evaluator while under evaluation keeps the status.
        """

    @transition(
        field=status,
        source=workflow.ACTIVE_STATUSES,
        target=RETURN_VALUE(*workflow.ADMIN_TARGETS),
    )
    def advance(self, target: str) -> str:
        """Admin moves the application forward, or straight to a decision."""
        if not workflow.can_advance(self.status, target):
            raise TransitionNotAllowed(
                f"Cannot move application from {self.status} to {target}",
                object=self,
                method=self.advance,
            )
        return target

    @transition(
        field=status,
        source=workflow.ACTIVE_STATUSES,
        target=RETURN_VALUE(*workflow.TERMINAL_STATUSES),
    )
    def decide(self, decision: str) -> str:
        """Final disposition by an admin or an assigned evaluator."""
        if not workflow.can_decide(self.status, decision):
            raise TransitionNotAllowed(
                f"{decision} is not a final decision",
                object=self,
                method=self.decide,
            )
        return decision


class Document(BaseModel):
    """
    Document uploaded for an application.

    Only file metadata is stored; the file itself lives behind ``file_url``.
    """

    application = models.ForeignKey(
        Application,
        on_delete=models.CASCADE,
        related_name="documents",
        verbose_name=_("application"),
    )
    category = models.CharField(_("category"), max_length=100)
    file_name = models.CharField(_("file name"), max_length=255)
    file_size = models.CharField(
        _("file size"),
        max_length=50,
        help_text=_("Display string, e.g. '2.4 MB'"),
    )
    file_url = models.URLField(_("file URL"), max_length=1000)
    status = models.CharField(
        _("status"),
        max_length=20,
        choices=DocumentStatus.choices,
        default=DocumentStatus.PENDING,
    )
    verified = models.BooleanField(_("verified"), default=False)

    class Meta:
        verbose_name = _("document")
        verbose_name_plural = _("documents")
        ordering = ["created"]

    def __str__(self) -> str:
        return f"{self.file_name} ({self.category})"

    @property
    def uploaded_at(self):
        return self.created


class VerificationResult(BaseModel):
    """Outcome of an admin verification of a document."""

    document = models.ForeignKey(
        Document,
        on_delete=models.CASCADE,
        related_name="verifications",
        verbose_name=_("document"),
    )
    verification_type = models.CharField(_("verification type"), max_length=100)
    confidence_score = models.PositiveSmallIntegerField(
        _("confidence score"),
        null=True,
        blank=True,
        help_text=_("0 to 100"),
    )
    extracted_data = models.JSONField(_("extracted data"), null=True, blank=True)
    is_compliant = models.BooleanField(_("compliant"), null=True, blank=True)
    remarks = models.TextField(_("remarks"), blank=True)

    class Meta:
        verbose_name = _("verification result")
        verbose_name_plural = _("verification results")
        ordering = ["-created"]

    def __str__(self) -> str:
        return f"{self.verification_type} - {self.document}"


class InfrastructureImage(BaseModel):
    """Photo of a facility submitted as evidence of infrastructure."""

    application = models.ForeignKey(
        Application,
        on_delete=models.CASCADE,
        related_name="infrastructure_images",
        verbose_name=_("application"),
    )
    image_url = models.URLField(_("image URL"), max_length=1000)
    facility_type = models.CharField(
        _("facility type"),
        max_length=100,
        help_text=_("e.g. 'classroom', 'laboratory', 'library'"),
    )
    geo_coordinates = models.JSONField(_("geo coordinates"), null=True, blank=True)

    class Meta:
        verbose_name = _("infrastructure image")
        verbose_name_plural = _("infrastructure images")
        ordering = ["-created"]

    def __str__(self) -> str:
        return f"{self.facility_type} - {self.application.number}"


class CVAnalysis(BaseModel):
    """Result of the image analysis of an infrastructure image."""

    image = models.OneToOneField(
        InfrastructureImage,
        on_delete=models.CASCADE,
        related_name="cv_analysis",
        verbose_name=_("image"),
    )
    dimensions = models.JSONField(_("dimensions"), null=True, blank=True)
    detected_features = models.JSONField(_("detected features"), null=True, blank=True)
    meets_standards = models.BooleanField(_("meets standards"), null=True, blank=True)
    accuracy_score = models.PositiveSmallIntegerField(
        _("accuracy score"),
        null=True,
        blank=True,
        help_text=_("0 to 100"),
    )
    remarks = models.TextField(_("remarks"), blank=True)

    class Meta:
        verbose_name = _("CV analysis")
        verbose_name_plural = _("CV analyses")

    def __str__(self) -> str:
        return f"Analysis of {self.image}"


class TimelineStage(BaseModel):
    """A milestone of an application's timeline, ordered by ``position``."""

    application = models.ForeignKey(
        Application,
        on_delete=models.CASCADE,
        related_name="timeline_stages",
        verbose_name=_("application"),
    )
    position = models.PositiveSmallIntegerField(_("position"))
    title = models.CharField(_("title"), max_length=255)
    description = models.TextField(_("description"), blank=True)
    status = models.CharField(
        _("status"),
        max_length=20,
        choices=StageStatus.choices,
        default=StageStatus.PENDING,
    )
    assigned_to = models.CharField(_("assigned to"), max_length=255, blank=True)
    completed_at = models.DateTimeField(_("completed at"), null=True, blank=True)

    class Meta:
        verbose_name = _("timeline stage")
        verbose_name_plural = _("timeline stages")
        ordering = ["application", "position"]
        constraints = [
            models.UniqueConstraint(
                fields=["application", "position"],
                name="unique_application_stage_position",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.application.number} - {self.position}: {self.title}"
