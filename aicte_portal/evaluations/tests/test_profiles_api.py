"""
Tests for evaluator profile management.
"""

import pytest

from aicte_portal.core.roles import Role
from aicte_portal.evaluations.models import EvaluatorProfile
from aicte_portal.evaluations.tests.factories import AssignmentFactory
from aicte_portal.evaluations.tests.factories import EvaluatorProfileFactory
from aicte_portal.users.tests.factories import UserFactory

EVALUATORS_URL = "/api/evaluators/"


def send(client, method, url, data=None):
    return getattr(client, method)(
        url,
        data=data or {},
        content_type="application/json",
        HTTP_X_CSRFTOKEN=client.csrf_token,
    )


@pytest.mark.django_db
class TestCreateProfile:
    def test_create_counts_open_assignments(self, admin_client, evaluator_user):
        AssignmentFactory(evaluator=evaluator_user)
        AssignmentFactory(evaluator=evaluator_user)

        response = send(
            admin_client,
            "post",
            EVALUATORS_URL,
            {"user_id": str(evaluator_user.id), "expertise": "Civil Engineering", "department": "Technical"},
        )

        assert response.status_code == 201
        data = response.json()["evaluator"]
        assert data["current_workload"] == 2
        assert data["email"] == evaluator_user.email
        assert data["name"] == evaluator_user.name
        assert data["available"] is True

    def test_user_must_be_evaluator(self, admin_client, institution_user):
        response = send(admin_client, "post", EVALUATORS_URL, {"user_id": str(institution_user.id)})

        assert response.status_code == 400
        assert response.json()["message"] == "User must have evaluator role"

    def test_one_profile_per_user(self, admin_client):
        profile = EvaluatorProfileFactory()

        response = send(admin_client, "post", EVALUATORS_URL, {"user_id": str(profile.user_id)})

        assert response.status_code == 409

    def test_evaluator_cannot_create(self, evaluator_client, evaluator_user):
        response = send(evaluator_client, "post", EVALUATORS_URL, {"user_id": str(evaluator_user.id)})

        assert response.status_code == 403


@pytest.mark.django_db
class TestListProfiles:
    def test_available_sorted_by_workload(self, admin_client):
        busy = EvaluatorProfileFactory(current_workload=5)
        free = EvaluatorProfileFactory(current_workload=0)
        EvaluatorProfileFactory(available=False)
        EvaluatorProfileFactory(user=UserFactory(role=Role.EVALUATOR, is_active=False))

        response = admin_client.get("/api/evaluators/available")

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [str(free.id), str(busy.id)]

    def test_list_all(self, admin_client):
        EvaluatorProfileFactory()
        EvaluatorProfileFactory(available=False)

        response = admin_client.get(EVALUATORS_URL)

        assert len(response.json()) == 2


@pytest.mark.django_db
class TestUpdateProfile:
    def test_evaluator_updates_own_availability(self, evaluator_client, evaluator_user):
        profile = EvaluatorProfileFactory(user=evaluator_user)

        response = send(evaluator_client, "patch", f"{EVALUATORS_URL}{profile.id}", {"available": False})

        assert response.status_code == 200
        assert response.json()["evaluator"]["email"] == evaluator_user.email
        profile.refresh_from_db()
        assert profile.available is False

    def test_evaluator_cannot_update_others(self, evaluator_client):
        profile = EvaluatorProfileFactory()

        response = send(evaluator_client, "patch", f"{EVALUATORS_URL}{profile.id}", {"available": False})

        assert response.status_code == 403

    def test_admin_updates_any(self, admin_client):
        profile = EvaluatorProfileFactory()

        response = send(admin_client, "patch", f"{EVALUATORS_URL}{profile.id}", {"expertise": "Pharmacy"})

        assert response.status_code == 200
        assert EvaluatorProfile.objects.get(id=profile.id).expertise == "Pharmacy"

    def test_empty_update(self, admin_client):
        profile = EvaluatorProfileFactory()

        response = send(admin_client, "patch", f"{EVALUATORS_URL}{profile.id}", {})

        assert response.status_code == 400

    def test_unknown_profile(self, admin_client):
        response = send(admin_client, "patch", f"{EVALUATORS_URL}00000000-0000-0000-0000-000000000000", {"available": True})

        assert response.status_code == 404
