import uuid

import django.db.models.deletion
import django.utils.timezone
import django_fsm
import model_utils.fields
from django.db import migrations
from django.db import models

STATUS_CHOICES = [
    ("draft", "Draft"),
    ("submitted", "Submitted"),
    ("scrutiny", "Scrutiny"),
    ("document_verification", "Document verification"),
    ("under_evaluation", "Under evaluation"),
    ("site_visit_scheduled", "Site visit scheduled"),
    ("site_visit_completed", "Site visit completed"),
    ("final_review", "Final review"),
    ("approved", "Approved"),
    ("rejected", "Rejected"),
    ("conditional_approval", "Conditional approval"),
]


def timestamps():
    return [
        (
            "created",
            model_utils.fields.AutoCreatedField(
                default=django.utils.timezone.now, editable=False, verbose_name="created"
            ),
        ),
        (
            "modified",
            model_utils.fields.AutoLastModifiedField(
                default=django.utils.timezone.now, editable=False, verbose_name="modified"
            ),
        ),
        ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
    ]


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("institutions", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Application",
            fields=[
                *timestamps(),
                (
                    "number",
                    models.CharField(editable=False, max_length=20, unique=True, verbose_name="application number"),
                ),
                (
                    "application_type",
                    models.CharField(
                        choices=[
                            ("new-institution", "New institution"),
                            ("intake-increase", "Intake increase"),
                            ("new-course", "New course"),
                            ("eoa", "Extension of approval"),
                            ("location-change", "Location change"),
                        ],
                        max_length=30,
                        verbose_name="application type",
                    ),
                ),
                (
                    "status",
                    django_fsm.FSMField(
                        choices=STATUS_CHOICES, default="draft", max_length=50, verbose_name="status"
                    ),
                ),
                ("institution_name", models.CharField(max_length=255, verbose_name="institution name")),
                ("address", models.TextField(verbose_name="address")),
                ("state", models.CharField(max_length=100, verbose_name="state")),
                ("course_name", models.CharField(blank=True, max_length=255, verbose_name="course name")),
                ("intake", models.PositiveIntegerField(blank=True, null=True, verbose_name="intake")),
                ("description", models.TextField(blank=True, verbose_name="description")),
                ("submitted_at", models.DateTimeField(blank=True, null=True, verbose_name="submitted at")),
                (
                    "institution",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="applications",
                        to="institutions.institution",
                        verbose_name="institution",
                    ),
                ),
            ],
            options={
                "verbose_name": "application",
                "verbose_name_plural": "applications",
                "ordering": ["-created"],
            },
        ),
        migrations.CreateModel(
            name="Document",
            fields=[
                *timestamps(),
                ("category", models.CharField(max_length=100, verbose_name="category")),
                ("file_name", models.CharField(max_length=255, verbose_name="file name")),
                (
                    "file_size",
                    models.CharField(help_text="Display string, e.g. '2.4 MB'", max_length=50, verbose_name="file size"),
                ),
                ("file_url", models.URLField(max_length=1000, verbose_name="file URL")),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("approved", "Approved"), ("rejected", "Rejected")],
                        default="pending",
                        max_length=20,
                        verbose_name="status",
                    ),
                ),
                ("verified", models.BooleanField(default=False, verbose_name="verified")),
                (
                    "application",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="documents",
                        to="applications.application",
                        verbose_name="application",
                    ),
                ),
            ],
            options={
                "verbose_name": "document",
                "verbose_name_plural": "documents",
                "ordering": ["created"],
            },
        ),
        migrations.CreateModel(
            name="VerificationResult",
            fields=[
                *timestamps(),
                ("verification_type", models.CharField(max_length=100, verbose_name="verification type")),
                (
                    "confidence_score",
                    models.PositiveSmallIntegerField(
                        blank=True, help_text="0 to 100", null=True, verbose_name="confidence score"
                    ),
                ),
                ("extracted_data", models.JSONField(blank=True, null=True, verbose_name="extracted data")),
                ("is_compliant", models.BooleanField(blank=True, null=True, verbose_name="compliant")),
                ("remarks", models.TextField(blank=True, verbose_name="remarks")),
                (
                    "document",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="verifications",
                        to="applications.document",
                        verbose_name="document",
                    ),
                ),
            ],
            options={
                "verbose_name": "verification result",
                "verbose_name_plural": "verification results",
                "ordering": ["-created"],
            },
        ),
        migrations.CreateModel(
            name="TimelineStage",
            fields=[
                *timestamps(),
                ("position", models.PositiveSmallIntegerField(verbose_name="position")),
                ("title", models.CharField(max_length=255, verbose_name="title")),
                ("description", models.TextField(blank=True, verbose_name="description")),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("current", "Current"), ("completed", "Completed")],
                        default="pending",
                        max_length=20,
                        verbose_name="status",
                    ),
                ),
                ("assigned_to", models.CharField(blank=True, max_length=255, verbose_name="assigned to")),
                ("completed_at", models.DateTimeField(blank=True, null=True, verbose_name="completed at")),
                (
                    "application",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="timeline_stages",
                        to="applications.application",
                        verbose_name="application",
                    ),
                ),
            ],
            options={
                "verbose_name": "timeline stage",
                "verbose_name_plural": "timeline stages",
                "ordering": ["application", "position"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("application", "position"), name="unique_application_stage_position"
                    ),
                ],
            },
        ),
    ]
