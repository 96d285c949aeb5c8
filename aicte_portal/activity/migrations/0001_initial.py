import uuid

import django.db.models.deletion
import django.utils.timezone
import model_utils.fields
from django.conf import settings
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
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                *timestamps(),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("info", "Information"),
                            ("status_change", "Status change"),
                            ("assignment", "Assignment"),
                            ("submission", "Submission"),
                            ("message", "Message"),
                        ],
                        default="info",
                        max_length=30,
                        verbose_name="type",
                    ),
                ),
                ("title", models.CharField(max_length=255, verbose_name="title")),
                ("message", models.TextField(verbose_name="message")),
                ("is_read", models.BooleanField(default=False, verbose_name="read")),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="notifications",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="user",
                    ),
                ),
            ],
            options={
                "verbose_name": "notification",
                "verbose_name_plural": "notifications",
                "ordering": ["-created"],
            },
        ),
        migrations.CreateModel(
            name="AuditLog",
            fields=[
                *timestamps(),
                ("action", models.CharField(max_length=100, verbose_name="action")),
                ("entity_type", models.CharField(blank=True, max_length=50, verbose_name="entity type")),
                ("entity_id", models.CharField(blank=True, max_length=64, verbose_name="entity id")),
                ("details", models.JSONField(blank=True, default=dict, verbose_name="details")),
                (
                    "actor",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="audit_logs",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="actor",
                    ),
                ),
            ],
            options={
                "verbose_name": "audit log",
                "verbose_name_plural": "audit logs",
                "ordering": ["-created"],
                "indexes": [
                    models.Index(fields=["entity_type", "entity_id"], name="activity_au_entity__6b1f0e_idx"),
                ],
            },
        ),
    ]
