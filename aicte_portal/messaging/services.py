"""
Posting messages on application threads.
"""

from aicte_portal.activity.models import NotificationType
from aicte_portal.activity.services import notify

from .models import Message


def post_message(sender, application, content: str) -> Message:
    """
    Append a message to the thread of ``application``.

    The owning institution is notified unless it wrote the message itself.
    """
    message = Message.objects.create(application=application, sender=sender, content=content)

    owner = application.institution.user
    if owner.id != sender.id:
        notify(
            owner,
            title="New message",
            message=f"New message from {sender.name} on application {application.number}.",
            kind=NotificationType.MESSAGE,
        )

    return message
