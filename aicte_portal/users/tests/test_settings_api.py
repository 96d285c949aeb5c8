"""
Tests for the account settings endpoints.
"""

import pytest

from aicte_portal.core.roles import Role

PASSWORD = "testpass123"


def put(client, url, data):
    return client.put(
        url,
        data=data,
        content_type="application/json",
        HTTP_X_CSRFTOKEN=client.csrf_token,
    )


@pytest.mark.django_db
class TestProfileUpdate:
    """Tests for PUT /api/settings/profile."""

    def test_update_name(self, evaluator_client, evaluator_user):
        response = put(evaluator_client, "/api/settings/profile", {"name": "Dr. R. Kumar"})

        assert response.status_code == 200
        assert response.json()["user"]["name"] == "Dr. R. Kumar"
        evaluator_user.refresh_from_db()
        assert evaluator_user.name == "Dr. R. Kumar"

    def test_update_email(self, evaluator_client, evaluator_user):
        response = put(evaluator_client, "/api/settings/profile", {"email": "kumar@aicte.example.org"})

        assert response.status_code == 200
        evaluator_user.refresh_from_db()
        assert evaluator_user.email == "kumar@aicte.example.org"

    def test_email_taken_by_someone_else(self, evaluator_client, admin_user):
        response = put(evaluator_client, "/api/settings/profile", {"email": admin_user.email})

        assert response.status_code == 409
        assert response.json()["code"] == "ALREADY_EXISTS"

    def test_role_is_ignored(self, evaluator_client, evaluator_user):
        response = put(evaluator_client, "/api/settings/profile", {"name": "Still Evaluator", "role": "admin"})

        assert response.status_code == 200
        evaluator_user.refresh_from_db()
        assert evaluator_user.role == Role.EVALUATOR

    def test_empty_update(self, evaluator_client):
        response = put(evaluator_client, "/api/settings/profile", {})

        assert response.status_code == 400
        assert response.json()["code"] == "BAD_REQUEST"

    def test_blank_name(self, evaluator_client):
        response = put(evaluator_client, "/api/settings/profile", {"name": "   "})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_requires_login(self, anonymous_client):
        response = put(anonymous_client, "/api/settings/profile", {"name": "Ghost"})

        assert response.status_code == 401


@pytest.mark.django_db
class TestPasswordChange:
    """Tests for PUT /api/settings/password."""

    def test_change_password_keeps_session(self, institution_client, institution_user):
        response = put(
            institution_client,
            "/api/settings/password",
            {"current_password": PASSWORD, "new_password": "An0ther-Secret"},
        )

        assert response.status_code == 200
        institution_user.refresh_from_db()
        assert institution_user.check_password("An0ther-Secret")
        assert institution_client.get("/api/auth/session").status_code == 200

    def test_wrong_current_password(self, institution_client, institution_user):
        response = put(
            institution_client,
            "/api/settings/password",
            {"current_password": "not-my-password", "new_password": "An0ther-Secret"},
        )

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_CREDENTIALS"
        institution_user.refresh_from_db()
        assert institution_user.check_password(PASSWORD)

    def test_new_password_too_short(self, institution_client):
        response = put(
            institution_client,
            "/api/settings/password",
            {"current_password": PASSWORD, "new_password": "short"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
