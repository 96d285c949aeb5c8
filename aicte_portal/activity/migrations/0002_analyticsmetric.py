import uuid

import django.utils.timezone
import model_utils.fields
from django.db import migrations
from django.db import models


class Migration(migrations.Migration):
    dependencies = [
        ("activity", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="AnalyticsMetric",
            fields=[
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
                ("metric_type", models.CharField(db_index=True, max_length=100, verbose_name="metric type")),
                ("value", models.FloatField(blank=True, null=True, verbose_name="value")),
                ("data", models.JSONField(blank=True, null=True, verbose_name="data")),
            ],
            options={
                "verbose_name": "analytics metric",
                "verbose_name_plural": "analytics metrics",
                "ordering": ["-created"],
            },
        ),
    ]
