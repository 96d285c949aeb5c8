import uuid

import django.db.models.deletion
import django.utils.timezone
import model_utils.fields
from django.db import migrations
from django.db import models


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
    dependencies = [
        ("applications", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="InfrastructureImage",
            fields=[
                *timestamps(),
                ("image_url", models.URLField(max_length=1000, verbose_name="image URL")),
                (
                    "facility_type",
                    models.CharField(
                        help_text="e.g. 'classroom', 'laboratory', 'library'",
                        max_length=100,
                        verbose_name="facility type",
                    ),
                ),
                ("geo_coordinates", models.JSONField(blank=True, null=True, verbose_name="geo coordinates")),
                (
                    "application",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="infrastructure_images",
                        to="applications.application",
                        verbose_name="application",
                    ),
                ),
            ],
            options={
                "verbose_name": "infrastructure image",
                "verbose_name_plural": "infrastructure images",
                "ordering": ["-created"],
            },
        ),
        migrations.CreateModel(
            name="CVAnalysis",
            fields=[
                *timestamps(),
                ("dimensions", models.JSONField(blank=True, null=True, verbose_name="dimensions")),
                ("detected_features", models.JSONField(blank=True, null=True, verbose_name="detected features")),
                ("meets_standards", models.BooleanField(blank=True, null=True, verbose_name="meets standards")),
                (
                    "accuracy_score",
                    models.PositiveSmallIntegerField(
                        blank=True, help_text="0 to 100", null=True, verbose_name="accuracy score"
                    ),
                ),
                ("remarks", models.TextField(blank=True, verbose_name="remarks")),
                (
                    "image",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="cv_analysis",
                        to="applications.infrastructureimage",
                        verbose_name="image",
                    ),
                ),
            ],
            options={
                "verbose_name": "CV analysis",
                "verbose_name_plural": "CV analyses",
            },
        ),
    ]
