"""
Tests for the institution profile and dashboard endpoints.
"""

import pytest

from aicte_portal.activity.models import AuditLog
from aicte_portal.applications.tests.factories import ApplicationFactory
from aicte_portal.applications.workflow import ApplicationStatus
from aicte_portal.institutions.models import Institution

PROFILE_URL = "/api/institution/profile"


def put_profile(client, data):
    return client.put(
        PROFILE_URL,
        data=data,
        content_type="application/json",
        HTTP_X_CSRFTOKEN=client.csrf_token,
    )


@pytest.mark.django_db
class TestProfile:
    def test_missing_profile(self, institution_client):
        response = institution_client.get(PROFILE_URL)

        assert response.status_code == 404
        assert response.json()["message"] == "Institution not found"

    def test_get_profile(self, institution_client, institution):
        response = institution_client.get(PROFILE_URL)

        assert response.status_code == 200
        data = response.json()["institution"]
        assert data["name"] == institution.name
        assert data["user_id"] == str(institution.user_id)

    def test_first_put_creates_profile(self, institution_client, institution_user):
        response = put_profile(
            institution_client,
            {"name": "IIT Mumbai", "address": "Powai", "state": "Maharashtra"},
        )

        assert response.status_code == 200
        institution = Institution.objects.get(user=institution_user)
        assert institution.contact_email == institution_user.email
        assert AuditLog.objects.filter(action="institution.create", entity_id=str(institution.id)).exists()

    def test_second_put_updates_profile(self, institution_client, institution):
        response = put_profile(
            institution_client,
            {
                "name": institution.name,
                "address": "Main Gate Road, Powai",
                "state": "Maharashtra",
                "contact_email": "office@iitb.example.org",
                "contact_phone": "+91 22 0000 0000",
            },
        )

        assert response.status_code == 200
        institution.refresh_from_db()
        assert institution.address == "Main Gate Road, Powai"
        assert institution.contact_email == "office@iitb.example.org"
        assert Institution.objects.filter(user=institution.user).count() == 1
        assert AuditLog.objects.filter(action="institution.update").exists()

    def test_blank_name_is_rejected(self, institution_client):
        response = put_profile(institution_client, {"name": " ", "address": "Powai", "state": "Maharashtra"})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_evaluator_is_refused(self, evaluator_client):
        response = evaluator_client.get(PROFILE_URL)

        assert response.status_code == 403

    def test_anonymous_is_refused(self, anonymous_client):
        response = anonymous_client.get(PROFILE_URL)

        assert response.status_code == 401


@pytest.mark.django_db
class TestDashboard:
    def test_counts_and_recent_applications(self, institution_client, institution):
        ApplicationFactory(institution=institution)
        ApplicationFactory(institution=institution, status=ApplicationStatus.SUBMITTED)
        ApplicationFactory(institution=institution, status=ApplicationStatus.UNDER_EVALUATION)
        ApplicationFactory(institution=institution, status=ApplicationStatus.APPROVED)
        ApplicationFactory(institution=institution, status=ApplicationStatus.REJECTED)
        ApplicationFactory(status=ApplicationStatus.APPROVED)  # another institution

        response = institution_client.get("/api/institution/dashboard")

        assert response.status_code == 200
        data = response.json()
        assert data["stats"] == {"total": 5, "in_progress": 2, "approved": 1, "rejected": 1}
        assert len(data["applications"]) == 5
        assert data["applications"][0]["location"] == "Powai, Mumbai, Maharashtra"

    def test_only_ten_recent_applications(self, institution_client, institution):
        for _ in range(12):
            ApplicationFactory(institution=institution)

        response = institution_client.get("/api/institution/dashboard")

        assert response.json()["stats"]["total"] == 12
        assert len(response.json()["applications"]) == 10

    def test_dashboard_without_profile(self, institution_client):
        response = institution_client.get("/api/institution/dashboard")

        assert response.status_code == 404

    def test_applications_list(self, institution_client, institution):
        own = ApplicationFactory(institution=institution)
        ApplicationFactory()

        response = institution_client.get("/api/institution/applications")

        assert response.status_code == 200
        assert [a["number"] for a in response.json()] == [own.number]
