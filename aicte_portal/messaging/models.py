"""
Messages exchanged about an application.
"""

from django.conf import settings
from django.db import models

from aicte_portal.core.models import BaseModel


class Message(BaseModel):
    """
    A message on an application thread.

    Visible to the owning institution, assigned evaluators and admins.
    """

    application = models.ForeignKey(
        "applications.Application",
        on_delete=models.CASCADE,
        related_name="messages",
    )
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="sent_messages",
    )
    content = models.TextField()

    class Meta:
        ordering = ["created"]

    def __str__(self):
        return f"{self.sender}: {self.content[:50]}"
