"""
Tests for the uniform error envelope returned by the API.
"""

import pytest

from aicte_portal.evaluations.tests.factories import AssignmentFactory
from aicte_portal.messaging import services as messaging_services
from aicte_portal.messaging.models import Message


@pytest.mark.django_db
class TestErrorEnvelope:
    def test_anonymous_caller_gets_401(self, anonymous_client):
        response = anonymous_client.get("/api/notifications/")

        assert response.status_code == 401
        assert response.json()["code"] == "NOT_AUTHENTICATED"

    def test_wrong_role_gets_403(self, institution_client):
        response = institution_client.get("/api/admin/users/")

        assert response.status_code == 403
        data = response.json()
        assert data["code"] == "PERMISSION_DENIED"
        assert data["message"] == "Access reserved to administrators."

    def test_schema_errors_are_reported_per_field(self, anonymous_client):
        response = anonymous_client.post(
            "/api/auth/register",
            data={"email": "not-an-email", "password": "short", "name": ""},
            content_type="application/json",
            HTTP_X_CSRFTOKEN=anonymous_client.csrf_token,
        )

        assert response.status_code == 400
        data = response.json()
        assert data["code"] == "VALIDATION_ERROR"
        fields = [error["field"] for error in data["details"]["errors"]]
        for name in ("email", "password", "name"):
            assert any(field.endswith(name) for field in fields)

    def test_crash_rolls_back_request_writes(self, monkeypatch, evaluator_client, evaluator_user):
        assignment = AssignmentFactory(evaluator=evaluator_user)

        def broken_notify(*args, **kwargs):
            raise RuntimeError("notification backend down")

        monkeypatch.setattr(messaging_services, "notify", broken_notify)

        response = evaluator_client.post(
            "/api/messages/",
            data={"application_id": str(assignment.application.id), "content": "Site visit on Monday."},
            content_type="application/json",
            HTTP_X_CSRFTOKEN=evaluator_client.csrf_token,
        )

        assert response.status_code == 500
        assert response.json()["code"] == "INTERNAL_ERROR"
        assert not Message.objects.filter(application=assignment.application).exists()
