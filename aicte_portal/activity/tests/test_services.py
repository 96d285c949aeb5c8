"""
Tests for audit and notification helpers.
"""

import pytest
from django.contrib.auth.models import AnonymousUser

from aicte_portal.activity.models import AuditLog
from aicte_portal.activity.models import Notification
from aicte_portal.activity.models import NotificationType
from aicte_portal.activity.services import notify
from aicte_portal.activity.services import notify_admins
from aicte_portal.activity.services import record_audit
from aicte_portal.core.roles import Role
from aicte_portal.users.tests.factories import UserFactory


@pytest.mark.django_db
class TestRecordAudit:
    def test_records_entity(self, admin_user, evaluator_user):
        log = record_audit(admin_user, "user.update", evaluator_user, {"fields": ["name"]})

        assert log.actor == admin_user
        assert log.entity_type == "user"
        assert log.entity_id == str(evaluator_user.id)
        assert log.details == {"fields": ["name"]}

    def test_anonymous_actor_is_stored_as_null(self):
        log = record_audit(AnonymousUser(), "auth.failed")

        assert log.actor is None
        assert log.entity_type == ""
        assert log.details == {}

    def test_entry_survives_actor_deletion(self, evaluator_user):
        actor = UserFactory(role=Role.ADMIN)
        record_audit(actor, "user.update", evaluator_user)

        actor.delete()

        log = AuditLog.objects.get(action="user.update")
        assert log.actor is None


@pytest.mark.django_db
class TestNotify:
    def test_notify_user(self, institution_user):
        notification = notify(institution_user, "Hello", "Welcome aboard")

        assert notification.type == NotificationType.INFO
        assert notification.is_read is False

    def test_notify_admins_skips_inactive_and_other_roles(self, admin_user, evaluator_user):
        UserFactory(role=Role.ADMIN, is_active=False)
        superuser = UserFactory(role=Role.EVALUATOR, is_superuser=True)

        notify_admins("New submission", "APP-2025-000001 was submitted", kind=NotificationType.SUBMISSION)

        recipients = set(Notification.objects.values_list("user_id", flat=True))
        assert recipients == {admin_user.id, superuser.id}
