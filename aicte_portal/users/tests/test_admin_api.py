"""
Tests for the admin user management endpoints.
"""

import pytest

from aicte_portal.activity.models import AuditLog
from aicte_portal.applications.tests.factories import ApplicationFactory
from aicte_portal.core.roles import Role
from aicte_portal.users.models import User
from aicte_portal.users.tests.factories import UserFactory

USERS_URL = "/api/admin/users/"


def send(client, method, url, data=None):
    return getattr(client, method)(
        url,
        data=data or {},
        content_type="application/json",
        HTTP_X_CSRFTOKEN=client.csrf_token,
    )


@pytest.mark.django_db
class TestListUsers:
    def test_lists_all_users(self, admin_client, admin_user, evaluator_user, institution_user):
        response = admin_client.get(USERS_URL)

        assert response.status_code == 200
        emails = {u["email"] for u in response.json()}
        assert {admin_user.email, evaluator_user.email, institution_user.email} <= emails

    def test_filter_by_role(self, admin_client, evaluator_user, institution_user):
        response = admin_client.get(USERS_URL, {"role": "evaluator"})

        assert response.status_code == 200
        assert [u["email"] for u in response.json()] == [evaluator_user.email]

    def test_evaluator_is_refused(self, evaluator_client):
        response = evaluator_client.get(USERS_URL)

        assert response.status_code == 403
        assert response.json()["code"] == "PERMISSION_DENIED"


@pytest.mark.django_db
class TestCreateUser:
    def test_create_evaluator(self, admin_client, admin_user):
        response = send(
            admin_client,
            "post",
            USERS_URL,
            {"email": "expert@aicte.example.org", "password": "Str0ng-Passw0rd", "name": "Expert", "role": "evaluator"},
        )

        assert response.status_code == 201
        data = response.json()["user"]
        assert data["role"] == "evaluator"
        assert "password" not in data
        user = User.objects.get(email="expert@aicte.example.org")
        assert AuditLog.objects.filter(action="user.create", entity_id=str(user.id), actor=admin_user).exists()

    def test_create_admin_is_staff(self, admin_client):
        send(
            admin_client,
            "post",
            USERS_URL,
            {"email": "second.admin@aicte.example.org", "password": "Str0ng-Passw0rd", "name": "Second", "role": "admin"},
        )

        assert User.objects.get(email="second.admin@aicte.example.org").is_staff is True

    def test_invalid_role(self, admin_client):
        response = send(
            admin_client,
            "post",
            USERS_URL,
            {"email": "x@aicte.example.org", "password": "Str0ng-Passw0rd", "name": "X", "role": "superhero"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_duplicate_email(self, admin_client, evaluator_user):
        response = send(
            admin_client,
            "post",
            USERS_URL,
            {"email": evaluator_user.email, "password": "Str0ng-Passw0rd", "name": "X", "role": "evaluator"},
        )

        assert response.status_code == 409


@pytest.mark.django_db
class TestUpdateUser:
    def test_deactivate_user(self, admin_client, evaluator_user):
        response = send(admin_client, "patch", f"{USERS_URL}{evaluator_user.id}", {"is_active": False})

        assert response.status_code == 200
        assert response.json()["user"]["is_active"] is False
        evaluator_user.refresh_from_db()
        assert evaluator_user.is_active is False

    def test_role_cannot_be_changed(self, admin_client, evaluator_user):
        response = send(admin_client, "patch", f"{USERS_URL}{evaluator_user.id}", {"name": "Renamed", "role": "admin"})

        assert response.status_code == 200
        evaluator_user.refresh_from_db()
        assert evaluator_user.name == "Renamed"
        assert evaluator_user.role == Role.EVALUATOR

    def test_unknown_user(self, admin_client):
        response = send(admin_client, "patch", f"{USERS_URL}00000000-0000-0000-0000-000000000000", {"name": "Nobody"})

        assert response.status_code == 404

    def test_empty_update(self, admin_client, evaluator_user):
        response = send(admin_client, "patch", f"{USERS_URL}{evaluator_user.id}", {})

        assert response.status_code == 400


@pytest.mark.django_db
class TestDeleteUser:
    def test_delete_user(self, admin_client):
        user = UserFactory(role=Role.EVALUATOR)

        response = send(admin_client, "delete", f"{USERS_URL}{user.id}")

        assert response.status_code == 200
        assert not User.objects.filter(id=user.id).exists()

    def test_cannot_delete_self(self, admin_client, admin_user):
        response = send(admin_client, "delete", f"{USERS_URL}{admin_user.id}")

        assert response.status_code == 403
        assert response.json()["code"] == "CANNOT_DELETE_SELF"

    def test_user_owning_applications_is_kept(self, admin_client):
        application = ApplicationFactory()
        owner = application.institution.user

        response = send(admin_client, "delete", f"{USERS_URL}{owner.id}")

        assert response.status_code == 409
        assert response.json()["code"] == "USER_IN_USE"
        assert User.objects.filter(id=owner.id).exists()
